"""Subscription identifiers of the form ``session-msgtype-identifier``."""

from __future__ import annotations

import re
import threading
import time

from sygma_relay.comm.messages import MessageType

_MASK = 0xFFFFFFFF
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_lock = threading.Lock()
_last_identifier: int | None = None


def _next_identifier() -> int:
    global _last_identifier
    with _lock:
        identifier = time.time_ns() & _MASK
        if _last_identifier is not None and identifier <= _last_identifier:
            identifier = (_last_identifier + 1) & _MASK
        _last_identifier = identifier
        return identifier


class SubscriptionID(str):
    """Unique identifier of a subscription: SessionID-MessageType-SubscriptionIdentifier."""

    def unwrap(self) -> tuple[str, MessageType, str]:
        """Split into session id, message type and identifier; raise ValueError if malformed."""
        parts = self.split("-")
        if len(parts) != 3:
            raise ValueError("invalid subscriptionID")
        session_id, raw_type, identifier = parts
        if not _INT_PATTERN.fullmatch(raw_type):
            raise ValueError(f"invalid syntax for message type: {raw_type!r}")
        value = int(raw_type)
        if not -128 <= value <= 127:
            raise ValueError(f"message type {raw_type!r} out of range")
        if value < 0 or value > MessageType.UNKNOWN:
            raise ValueError("invalid message type")
        return session_id, MessageType(value), identifier

    def session_id(self) -> str:
        try:
            return self.unwrap()[0]
        except ValueError:
            return ""

    def message_type(self) -> MessageType:
        try:
            return self.unwrap()[1]
        except ValueError:
            return MessageType.UNKNOWN

    def subscription_identifier(self) -> str:
        try:
            return self.unwrap()[2]
        except ValueError:
            return ""


def new_subscription_id(session_id: str, msg_type: MessageType) -> SubscriptionID:
    """Create a new unique subscription id for a session and message type."""
    return SubscriptionID(f"{session_id}-{int(msg_type)}-{_next_identifier()}")