"""Substrate bridge events and the transfer messages and proposals built from them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

PARACHAIN_UPDATED_EVENT = "ParachainSystem.ValidationFunctionApplied"
EXTRINSIC_FAILED_EVENT = "System.ExtrinsicFailed"
EXTRINSIC_SUCCESS_EVENT = "System.ExtrinsicSuccess"
RETRY_EVENT = "SygmaBridge.Retry"
DEPOSIT_EVENT = "SygmaBridge.Deposit"
FAILED_HANDLER_EXECUTION_EVENT = "SygmaBridge.FailedHandlerExecution"

TRANSFER_MESSAGE_TYPE = "TransferMessage"
TRANSFER_PROPOSAL_TYPE = "TransferProposal"


class TransferType(str, enum.Enum):
    """Kind of asset transfer carried by a deposit."""

    FUNGIBLE_TRANSFER = "FungibleTransfer"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DecodedField:
    """One named field of a decoded chain event."""

    name: str
    value: Any
    lookup_index: int = 0


@dataclass
class Event:
    """A chain event with its decoded fields."""

    name: str
    fields: list[DecodedField] = field(default_factory=list)


@dataclass
class Deposit:
    """Contents of a ``SygmaBridge.Deposit`` event."""

    dest_domain_id: int = 0
    resource_id: bytes = bytes(32)
    deposit_nonce: int = 0
    transfer_type: int = 0
    call_data: bytes = b""
    handler: bytes = bytes(1)


@dataclass
class Retry:
    """Contents of a ``SygmaBridge.Retry`` event."""

    deposit_on_block_height: int = 0
    dest_domain_id: int = 0


@dataclass
class TransferMessageData:
    """Data of a transfer message read from a source chain."""

    deposit_nonce: int = 0
    resource_id: bytes = bytes(32)
    metadata: dict[str, Any] | None = None
    payload: list[Any] = field(default_factory=list)
    type: TransferType | None = None


@dataclass
class Message:
    """A message passed from a source chain listener to a destination executor."""

    source: int = 0
    destination: int = 0
    data: Any = None
    id: str = ""
    type: str = ""


@dataclass
class TransferProposalData:
    """Data of a transfer proposal to execute on a destination chain."""

    deposit_nonce: int = 0
    resource_id: bytes = bytes(32)
    metadata: dict[str, Any] | None = None
    data: bytes = b""


@dataclass
class Proposal:
    """A proposal ready to be signed and executed on the destination chain."""

    source: int = 0
    destination: int = 0
    data: Any = None
    message_id: str = ""
    type: str = ""