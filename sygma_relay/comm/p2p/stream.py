"""Newline-delimited message framing on byte streams."""

from __future__ import annotations

from typing import BinaryIO


def read_stream(reader: BinaryIO) -> bytes:
    """Read one newline-terminated message, stripped of surrounding newlines.

    Raises EOFError if the stream ends before a newline.
    """
    line = reader.readline()
    if not line:
        raise EOFError("end of stream reached")
    if not line.endswith(b"\n"):
        raise EOFError("unexpected end of stream")
    return line.strip(b"\n")


def write_stream(msg: bytes, writer: BinaryIO) -> None:
    """Write a message followed by a newline and flush the writer."""
    writer.write(bytes(msg) + b"\n")
    try:
        writer.flush()
    except OSError as exc:
        raise OSError(f"fail to flush stream: {exc}") from exc