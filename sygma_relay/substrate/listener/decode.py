"""Decoding of Substrate bridge event fields into typed records."""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Iterable

from sygma_relay.substrate.events import DecodedField, Deposit, Retry


class DecodeError(ValueError):
    """Raised when an event field holds a value of the wrong shape."""


def _uint(bits: int, name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{name}: expected an unsigned integer, got {type(value).__name__}")
    if not 0 <= value < 1 << bits:
        raise DecodeError(f"{name}: {value} does not fit in an unsigned {bits}-bit integer")
    return value


def _bytes(length: int | None, name: str, value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
    elif isinstance(value, (list, tuple)) and all(
        isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 0xFF for b in value
    ):
        data = bytes(value)
    else:
        raise DecodeError(f"{name}: expected bytes, got {type(value).__name__}")
    if length is not None and len(data) != length:
        raise DecodeError(f"{name}: expected {length} bytes, got {len(data)}")
    return data


_Decoder = Callable[[Any], Any]

_DEPOSIT_FIELDS: dict[str, tuple[str, _Decoder]] = {
    "dest_domain_id": ("dest_domain_id", partial(_uint, 8, "dest_domain_id")),
    "resource_id": ("resource_id", partial(_bytes, 32, "resource_id")),
    "deposit_nonce": ("deposit_nonce", partial(_uint, 64, "deposit_nonce")),
    "sygma_traits_TransferType": (
        "transfer_type",
        partial(_uint, 8, "sygma_traits_TransferType"),
    ),
    "deposit_data": ("call_data", partial(_bytes, None, "deposit_data")),
    "handler_response": ("handler", partial(_bytes, 1, "handler_response")),
}

_RETRY_FIELDS: dict[str, tuple[str, _Decoder]] = {
    "deposit_on_block_height": (
        "deposit_on_block_height",
        partial(_uint, 128, "deposit_on_block_height"),
    ),
    "dest_domain_id": ("dest_domain_id", partial(_uint, 8, "dest_domain_id")),
}


def _decode(fields: Iterable[DecodedField], spec: dict[str, tuple[str, _Decoder]]) -> dict:
    values: dict[str, Any] = {}
    for event_field in fields:
        entry = spec.get(event_field.name)
        if entry is None:
            continue
        attribute, decoder = entry
        values[attribute] = decoder(event_field.value)
    return values


def decode_deposit_event(fields: Iterable[DecodedField]) -> Deposit:
    """Build a Deposit from the fields of a deposit event; unknown fields are ignored."""
    return Deposit(**_decode(fields, _DEPOSIT_FIELDS))


def decode_retry_event(fields: Iterable[DecodedField]) -> Retry:
    """Build a Retry from the fields of a retry event; unknown fields are ignored."""
    return Retry(**_decode(fields, _RETRY_FIELDS))