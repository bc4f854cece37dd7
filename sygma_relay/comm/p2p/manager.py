"""Streams to peers, grouped by session."""

from __future__ import annotations

import logging
import threading
from typing import Any

log = logging.getLogger(__name__)


class StreamManager:
    """Maps each open stream to the session and peer it belongs to."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._streams_by_session: dict[str, dict[str, Any]] = {}

    def release_streams(self, session_id: str) -> None:
        """Close and forget every stream of a session."""
        with self._lock:
            streams = self._streams_by_session.pop(session_id, None)
            if streams is None:
                return
            for peer_id, stream in streams.items():
                try:
                    stream.close()
                except Exception:
                    log.exception("Cannot close stream to peer %s", peer_id)

    def add_stream(self, session_id: str, peer_id: str, stream: Any) -> None:
        """Remember a stream; an existing stream for the same session and peer is kept."""
        with self._lock:
            self._streams_by_session.setdefault(session_id, {}).setdefault(peer_id, stream)

    def stream(self, session_id: str, peer_id: str) -> Any:
        """Return the stream for a session and peer; raise LookupError if there is none."""
        with self._lock:
            try:
                return self._streams_by_session[session_id][peer_id]
            except KeyError:
                raise LookupError(f"no stream for peerID {peer_id}") from None