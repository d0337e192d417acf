"""Bitcoin block header wire format."""

from .codec import HEADER_SIZE, BlockHeader, block_hash

__all__ = [
    "BlockHeader",
    "HEADER_SIZE",
    "block_hash",
]
