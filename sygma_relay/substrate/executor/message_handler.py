"""Turning transfer messages into proposals for a Substrate destination."""

from __future__ import annotations

from sygma_relay.substrate.events import (
    TRANSFER_PROPOSAL_TYPE,
    Message,
    Proposal,
    TransferMessageData,
    TransferProposalData,
    TransferType,
)


class SubstrateMessageHandler:
    """Builds proposals from transfer messages."""

    def handle_message(self, message: Message) -> Proposal:
        """Return the proposal for a message; raise ValueError for unsupported messages."""
        data = message.data
        if not isinstance(data, TransferMessageData):
            raise TypeError(f"expected TransferMessageData, got {type(data).__name__}")
        if data.type == TransferType.FUNGIBLE_TRANSFER:
            return fungible_transfer_message_handler(message)
        raise ValueError("wrong message type passed while handling message")


def fungible_transfer_message_handler(message: Message) -> Proposal:
    """Encode amount, recipient length and recipient as proposal data."""
    payload = message.data.payload
    if len(payload) != 2:
        raise ValueError("malformed payload. Len  of payload should be 2")
    amount, recipient = payload
    if not isinstance(amount, (bytes, bytearray)):
        raise ValueError("wrong payload amount format")
    if not isinstance(recipient, (bytes, bytearray)):
        raise ValueError("wrong payload recipient format")

    data = (
        bytes(amount).rjust(32, b"\x00")
        + len(recipient).to_bytes(32, "big")
        + bytes(recipient)
    )
    return Proposal(
        source=message.source,
        destination=message.destination,
        data=TransferProposalData(
            deposit_nonce=message.data.deposit_nonce,
            resource_id=message.data.resource_id,
            metadata=message.data.metadata,
            data=data,
        ),
        message_id=message.id,
        type=TRANSFER_PROPOSAL_TYPE,
    )