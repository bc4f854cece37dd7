"""Turning Substrate deposit events into transfer messages."""

from __future__ import annotations

import logging
from typing import Callable

from sygma_relay.substrate.events import (
    TRANSFER_MESSAGE_TYPE,
    Message,
    TransferMessageData,
    TransferType,
)

log = logging.getLogger(__name__)

# Transfer type value used by the pallet for fungible transfers.
FUNGIBLE_TRANSFER = 0

_MIN_CALLDATA_LENGTH = 84

DepositHandlerFunc = Callable[[int, int, int, bytes, bytes, str], Message]


class SubstrateDepositHandler:
    """Dispatches deposits to the handler registered for their transfer type."""

    def __init__(self) -> None:
        self._handlers: dict[TransferType, DepositHandlerFunc] = {}

    def handle_deposit(
        self,
        source_id: int,
        dest_id: int,
        deposit_nonce: int,
        resource_id: bytes,
        calldata: bytes,
        transfer_type: int,
        message_id: str,
    ) -> Message:
        """Build a message for a deposit; raise ValueError if no handler fits its type."""
        if transfer_type != FUNGIBLE_TRANSFER:
            raise ValueError("no corresponding deposit handler for this transfer type exists")
        handler = self._handlers.get(TransferType.FUNGIBLE_TRANSFER)
        if handler is None:
            raise ValueError("no corresponding deposit handler for this transfer type exists")
        return handler(source_id, dest_id, deposit_nonce, resource_id, calldata, message_id)

    def register_deposit_handler(
        self, transfer_type: TransferType, handler: DepositHandlerFunc
    ) -> None:
        """Associate a handler with a transfer type; an empty type is ignored."""
        if not transfer_type:
            return
        log.info("Registered deposit handler for transfer type %s", transfer_type)
        self._handlers[transfer_type] = handler


def fungible_transfer_handler(
    source_id: int,
    dest_id: int,
    nonce: int,
    resource_id: bytes,
    calldata: bytes,
    message_id: str,
) -> Message:
    """Parse fungible-transfer calldata into a message carrying amount and recipient."""
    calldata = bytes(calldata)
    if len(calldata) < _MIN_CALLDATA_LENGTH:
        raise ValueError("invalid calldata length: less than 84 bytes")

    amount = calldata[:32]
    recipient_length = int.from_bytes(calldata[32:64], "big")
    end = 64 + recipient_length
    if end > len(calldata):
        raise ValueError(
            f"invalid recipient length {recipient_length}: calldata holds {len(calldata) - 64} bytes"
        )
    recipient = calldata[64:end]

    return Message(
        source=source_id,
        destination=int(dest_id),
        data=TransferMessageData(
            deposit_nonce=int(nonce),
            resource_id=resource_id,
            payload=[amount, recipient],
            type=TransferType.FUNGIBLE_TRANSFER,
        ),
        id=message_id,
        type=TRANSFER_MESSAGE_TYPE,
    )