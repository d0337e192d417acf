"""Test helpers for relay_spec unit tests."""

from .builders import (
    BLOCK_SPACING,
    REGTEST_BITS,
    SEED_HEIGHT,
    SEED_TIMESTAMP,
    make_bytes32,
    make_interval,
    make_seed_state,
    mine_chain,
    mine_header,
    mine_unworked_header,
    raw,
)

__all__ = [
    "BLOCK_SPACING",
    "REGTEST_BITS",
    "SEED_HEIGHT",
    "SEED_TIMESTAMP",
    "make_bytes32",
    "make_interval",
    "make_seed_state",
    "mine_chain",
    "mine_header",
    "mine_unworked_header",
    "raw",
]
