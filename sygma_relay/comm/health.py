"""Health check of the communication channel to a set of peers."""

from __future__ import annotations

import logging
from typing import Iterable

from sygma_relay.comm.messages import Communication, CommunicationError, MessageType

HEALTH_TIMEOUT = 10.0
_HEALTH_SESSION = "health-session"

log = logging.getLogger(__name__)


def execute_comm_health_check(
    communication: Communication, peers: Iterable[str]
) -> list[CommunicationError]:
    """Send an empty message to each peer and return the errors of those that failed."""
    peers = list(peers)
    errors: list[CommunicationError] = []
    log.debug("ExecuteCommHealthCheck for peers %s", peers)
    try:
        for peer in peers:
            try:
                communication.broadcast([peer], b"", MessageType.UNKNOWN, _HEALTH_SESSION)
            except CommunicationError as exc:
                errors.append(exc)
    finally:
        communication.close_session(_HEALTH_SESSION)
    return errors