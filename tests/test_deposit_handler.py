import pytest

from sygma_relay.substrate.events import (
    TRANSFER_MESSAGE_TYPE,
    Message,
    TransferMessageData,
    TransferType,
)
from sygma_relay.substrate.listener.deposit_handler import (
    SubstrateDepositHandler,
    fungible_transfer_handler,
)

RECIPIENT = bytes.fromhex(
    "00010100d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"
)
RESOURCE_1 = b"\x01" + bytes(31)


def _calldata(recipient=RECIPIENT):
    amount = (2).to_bytes(32, "big")
    length = len(recipient).to_bytes(32, "big")
    return amount + length + recipient


def test_fungible_transfer_handler_builds_message():
    calldata = _calldata()
    message = fungible_transfer_handler(1, 2, 1, RESOURCE_1, calldata, "messageID")
    expected = Message(
        source=1,
        destination=2,
        data=TransferMessageData(
            deposit_nonce=1,
            resource_id=RESOURCE_1,
            payload=[calldata[:32], calldata[64:]],
            type=TransferType.FUNGIBLE_TRANSFER,
        ),
        id="messageID",
        type=TRANSFER_MESSAGE_TYPE,
    )
    assert message == expected
    assert message.data.payload[1] == RECIPIENT


def test_fungible_transfer_handler_rejects_short_calldata():
    with pytest.raises(ValueError, match="invalid calldata length: less than 84 bytes"):
        fungible_transfer_handler(1, 2, 1, RESOURCE_1, b"", "messageID")


def test_fungible_transfer_handler_rejects_recipient_past_end():
    calldata = (2).to_bytes(32, "big") + (200).to_bytes(32, "big") + bytes(36)
    with pytest.raises(ValueError):
        fungible_transfer_handler(1, 2, 1, RESOURCE_1, calldata, "messageID")


def test_registered_handler_is_used_and_unknown_type_fails():
    handler = SubstrateDepositHandler()
    handler.register_deposit_handler(TransferType.FUNGIBLE_TRANSFER, fungible_transfer_handler)

    message = handler.handle_deposit(1, 2, 1, RESOURCE_1, _calldata(), 0, "messageID")
    assert message.data.deposit_nonce == 1
    assert message.destination == 2

    with pytest.raises(
        ValueError, match="no corresponding deposit handler for this transfer type exists"
    ):
        handler.handle_deposit(1, 2, 1, RESOURCE_1, _calldata(), 1, "messageID")


def test_missing_registration_fails():
    handler = SubstrateDepositHandler()
    with pytest.raises(
        ValueError, match="no corresponding deposit handler for this transfer type exists"
    ):
        handler.handle_deposit(1, 2, 1, RESOURCE_1, _calldata(), 0, "messageID")


def test_empty_transfer_type_is_not_registered():
    handler = SubstrateDepositHandler()
    handler.register_deposit_handler("", fungible_transfer_handler)
    with pytest.raises(ValueError):
        handler.handle_deposit(1, 2, 1, RESOURCE_1, _calldata(), 0, "messageID")