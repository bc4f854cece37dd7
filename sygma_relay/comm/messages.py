"""Message types, the wrapped wire message and the peer communication interface."""

from __future__ import annotations

import base64
import binascii
import enum
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from sygma_relay.comm.subscription_id import SubscriptionID


class MessageType(enum.IntEnum):
    """Kind of a message exchanged between relayers."""

    TSS_KEY_GEN_MSG = 0
    TSS_KEY_SIGN_MSG = 1
    TSS_INITIATE_MSG = 2
    TSS_START_MSG = 3
    TSS_FAIL_MSG = 4
    TSS_READY_MSG = 5
    TSS_RESHARE_MSG = 6
    COORDINATOR_ELECTION_MSG = 7
    COORDINATOR_ALIVE_MSG = 8
    COORDINATOR_LEAVE_MSG = 9
    COORDINATOR_SELECT_MSG = 10
    COORDINATOR_PING_MSG = 11
    COORDINATOR_PING_RESPONSE_MSG = 12
    UNKNOWN = 13

    def __str__(self) -> str:
        if self is MessageType.UNKNOWN:
            return "UnknownMsg"
        return "".join(part.capitalize() for part in self.name.split("_"))


@dataclass
class WrappedMessage:
    """A raw message sent through a Communication; ``from_peer`` is never serialised."""

    message_type: MessageType
    session_id: str
    payload: bytes | None = None
    from_peer: str = ""


class CommunicationError(Exception):
    """Raised when a message could not be delivered to a peer."""

    def __init__(self, peer: str, err: BaseException) -> None:
        super().__init__(peer, err)
        self.peer = peer
        self.err = err

    def __str__(self) -> str:
        return f"failed communicating with peer {self.peer} because of: {self.err}"


class Communication(ABC):
    """Exchange of messages between peers, grouped by session."""

    @abstractmethod
    def close_session(self, session_id: str) -> None:
        """Close and forget all streams of a session."""

    @abstractmethod
    def broadcast(
        self, peers: Iterable[str], msg: bytes | None, msg_type: MessageType, session_id: str
    ) -> None:
        """Send a message to the given peers; raise CommunicationError on the first failure."""

    @abstractmethod
    def subscribe(self, session_id: str, msg_type: MessageType, channel: Any) -> SubscriptionID:
        """Deliver messages of a type in a session to ``channel``; return the subscription id."""

    @abstractmethod
    def unsubscribe(self, sub_id: SubscriptionID) -> None:
        """Cancel a subscription."""


def marshal_wrapped_message(msg: WrappedMessage) -> bytes:
    """Encode a message as compact JSON with a base64 payload."""
    payload = None if msg.payload is None else base64.b64encode(msg.payload).decode("ascii")
    document = {
        "message_type": int(msg.message_type),
        "message_id": msg.session_id,
        "payload": payload,
    }
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _message_type_from(value: Any) -> MessageType:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"message_type must be an integer, got {value!r}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"message_type {value} does not fit in a byte")
    try:
        return MessageType(value)
    except ValueError:
        return MessageType.UNKNOWN


def unmarshal_wrapped_message(data: bytes | str) -> WrappedMessage:
    """Decode a message produced by :func:`marshal_wrapped_message`."""
    document = json.loads(data)
    if not isinstance(document, dict):
        raise ValueError("wrapped message must be a JSON object")

    msg_type = _message_type_from(document.get("message_type", 0))

    session_id = document.get("message_id", "")
    if session_id is None:
        session_id = ""
    if not isinstance(session_id, str):
        raise ValueError("message_id must be a string")

    raw_payload = document.get("payload")
    if raw_payload is None:
        payload = None
    elif isinstance(raw_payload, str):
        try:
            payload = base64.b64decode(raw_payload, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"invalid payload encoding: {exc}") from exc
    else:
        raise ValueError("payload must be a base64 string or null")

    return WrappedMessage(message_type=msg_type, session_id=session_id, payload=payload)