"""Channel subscriptions grouped by session and message type."""

from __future__ import annotations

import threading
from typing import Any

from sygma_relay.comm.messages import MessageType
from sygma_relay.comm.subscription_id import SubscriptionID, new_subscription_id


class SessionSubscriptionManager:
    """Keeps channels subscribed to a message type within a session."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # session id -> message type -> subscription identifier -> channel
        self._subscribers: dict[str, dict[MessageType, dict[str, Any]]] = {}

    def get_subscribers(self, session_id: str, msg_type: MessageType) -> list[Any]:
        with self._lock:
            return list(self._subscribers.get(session_id, {}).get(msg_type, {}).values())

    def subscribe_to(self, session_id: str, msg_type: MessageType, channel: Any) -> SubscriptionID:
        with self._lock:
            by_type = self._subscribers.setdefault(session_id, {}).setdefault(msg_type, {})
            sub_id = new_subscription_id(session_id, msg_type)
            by_type[sub_id.subscription_identifier()] = channel
            return sub_id

    def unsubscribe_from(self, subscription_id: SubscriptionID) -> None:
        with self._lock:
            try:
                session_id, msg_type, identifier = SubscriptionID(subscription_id).unwrap()
            except ValueError:
                return
            self._subscribers.get(session_id, {}).get(msg_type, {}).pop(identifier, None)