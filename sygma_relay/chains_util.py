"""Block-number helpers shared by chain listeners."""

from __future__ import annotations


def calculate_starting_block(start_block: int | None, block_confirmations: int | None) -> int:
    """Return the largest block number not above ``start_block`` that divides by ``block_confirmations``."""
    if start_block is None or block_confirmations is None:
        raise ValueError(
            "start_block or block_confirmations can not be None when calculating the starting block"
        )
    return start_block - start_block % block_confirmations