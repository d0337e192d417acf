"""Proof-of-work rules: compact difficulty, retargeting and median time."""

from .difficulty import (
    bits_to_target,
    block_work,
    decode_compact,
    is_retarget_height,
    next_target,
    target_to_bits,
)
from .median_time import insert_timestamp, median_time_past

__all__ = [
    "bits_to_target",
    "block_work",
    "decode_compact",
    "insert_timestamp",
    "is_retarget_height",
    "median_time_past",
    "next_target",
    "target_to_bits",
]
