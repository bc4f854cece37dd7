"""Handlers that process ranges of Substrate blocks and emit transfer messages."""

from __future__ import annotations

import logging
import queue
from abc import ABC, abstractmethod
from typing import Any

from sygma_relay.substrate.events import (
    DEPOSIT_EVENT,
    PARACHAIN_UPDATED_EVENT,
    RETRY_EVENT,
    Event,
    Message,
)
from sygma_relay.substrate.listener.decode import decode_deposit_event, decode_retry_event

log = logging.getLogger(__name__)


class Connection(ABC):
    """Access to a Substrate node as needed by the event handlers."""

    @abstractmethod
    def get_finalized_head(self) -> Any:
        """Return the hash of the latest finalized block."""

    @abstractmethod
    def get_block(self, block_hash: Any) -> Any:
        """Return a block; its ``number`` attribute is the block height."""

    @abstractmethod
    def get_block_hash(self, block_number: int) -> Any:
        """Return the hash of the block at a height."""

    @abstractmethod
    def get_block_events(self, block_hash: Any) -> list[Event]:
        """Return the events emitted in a block."""

    @abstractmethod
    def update_metadata(self) -> None:
        """Reload the runtime metadata."""

    @abstractmethod
    def fetch_events(self, start_block: int, end_block: int) -> list[Event]:
        """Return the events of a block range."""


def _fetch(conn: Connection, start_block: int, end_block: int) -> list[Event]:
    try:
        return conn.fetch_events(start_block, end_block)
    except Exception:
        log.exception("Error fetching events")
        raise


class SystemUpdateEventHandler:
    """Reloads runtime metadata whenever the parachain runtime is upgraded."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def handle_events(self, start_block: int, end_block: int) -> None:
        for event in _fetch(self._conn, start_block, end_block):
            if event.name != PARACHAIN_UPDATED_EVENT:
                continue
            log.info("Updating substrate metadata")
            try:
                self._conn.update_metadata()
            except Exception:
                log.exception("Unable to update Metadata")
                raise


class FungibleTransferEventHandler:
    """Turns deposit events into messages, batched by destination domain.

    A deposit that cannot be decoded or handled is logged and skipped.
    """

    def __init__(
        self,
        domain_id: int,
        deposit_handler: Any,
        msg_queue: queue.Queue,
        conn: Connection,
        logger: logging.Logger | None = None,
    ) -> None:
        self._domain_id = domain_id
        self._deposit_handler = deposit_handler
        self._msg_queue = msg_queue
        self._conn = conn
        self._log = logger or log

    def handle_events(self, start_block: int, end_block: int) -> None:
        events = _fetch(self._conn, start_block, end_block)
        domain_deposits: dict[int, list[Message]] = {}

        for event in events:
            if event.name != DEPOSIT_EVENT:
                continue
            try:
                deposit = decode_deposit_event(event.fields)
                message_id = (
                    f"{self._domain_id}-{deposit.dest_domain_id}-{start_block}-{end_block}"
                )
                message = self._deposit_handler.handle_deposit(
                    self._domain_id,
                    deposit.dest_domain_id,
                    deposit.deposit_nonce,
                    deposit.resource_id,
                    deposit.call_data,
                    deposit.transfer_type,
                    message_id,
                )
            except Exception:
                log.exception("Failed handling deposit %r", event)
                continue
            self._log.info("Resolved deposit message %r (messageID %s)", deposit, message_id)
            domain_deposits.setdefault(message.destination, []).append(message)

        for deposits in domain_deposits.values():
            self._msg_queue.put(deposits)


class RetryEventHandler:
    """Re-emits deposits of earlier blocks named by retry events.

    Connection failures, undecodable events and ValueError from the deposit
    handler abort the whole range. Any other exception from the deposit
    handler is logged and the rest of that retry event is skipped.
    """

    def __init__(
        self,
        conn: Connection,
        deposit_handler: Any,
        domain_id: int,
        msg_queue: queue.Queue,
        logger: logging.Logger | None = None,
    ) -> None:
        self._conn = conn
        self._deposit_handler = deposit_handler
        self._domain_id = domain_id
        self._msg_queue = msg_queue
        self._log = logger or log

    def handle_events(self, start_block: int, end_block: int) -> None:
        events = _fetch(self._conn, start_block, end_block)
        head = self._conn.get_finalized_head()
        finalized_number = int(self._conn.get_block(head).number)

        domain_deposits: dict[int, list[Message]] = {}
        for event in events:
            if event.name == RETRY_EVENT:
                self._handle_retry(event, finalized_number, start_block, end_block, domain_deposits)

        for deposits in domain_deposits.values():
            self._msg_queue.put(deposits)

    def _handle_retry(
        self,
        event: Event,
        finalized_number: int,
        start_block: int,
        end_block: int,
        domain_deposits: dict[int, list[Message]],
    ) -> None:
        retry = decode_retry_event(event.fields)
        if finalized_number < retry.deposit_on_block_height:
            log.warning(
                "Retry event for block number %d has not enough confirmations",
                retry.deposit_on_block_height,
            )
            return

        block_hash = self._conn.get_block_hash(retry.deposit_on_block_height)
        for block_event in self._conn.get_block_events(block_hash):
            if block_event.name != DEPOSIT_EVENT:
                continue
            deposit = decode_deposit_event(block_event.fields)
            message_id = (
                f"retry-{self._domain_id}-{deposit.dest_domain_id}-{start_block}-{end_block}"
            )
            try:
                message = self._deposit_handler.handle_deposit(
                    self._domain_id,
                    deposit.dest_domain_id,
                    deposit.deposit_nonce,
                    deposit.resource_id,
                    deposit.call_data,
                    deposit.transfer_type,
                    message_id,
                )
            except ValueError:
                raise
            except Exception as exc:
                log.error("Failure while handling retry event %r because %s", event, exc)
                return
            self._log.info("Resolved retry message %r (messageID %s)", deposit, message_id)
            domain_deposits.setdefault(message.destination, []).append(message)