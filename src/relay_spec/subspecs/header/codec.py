"""
Block header codec.

A Bitcoin block header is exactly 80 bytes, every integer little-endian:

    version (4) | prev_hash (32) | merkle_root (32) | timestamp (4) | bits (4) | nonce (4)

Hashes keep the internal byte order they have on the wire. Display order,
as printed by block explorers, is the byte reversal.
"""

from __future__ import annotations

import struct
from typing import Final

from typing_extensions import Self

from relay_spec.subspecs.errors import StructuralDecodeError
from relay_spec.subspecs.merkle.hash import double_sha256
from relay_spec.types import Bytes32, StrictBaseModel, Uint32

_HEADER_LAYOUT: Final = struct.Struct("<I32s32sIII")

HEADER_SIZE: Final = _HEADER_LAYOUT.size
"""Size of a serialized header in bytes."""


class BlockHeader(StrictBaseModel):
    """A decoded 80-byte block header."""

    version: Uint32
    """Block version, read as an unsigned integer."""

    prev_hash: Bytes32
    """Hash of the previous block, internal byte order."""

    merkle_root: Bytes32
    """Root of the block's transaction tree, internal byte order."""

    timestamp: Uint32
    """Miner-declared time, seconds since the Unix epoch."""

    bits: Uint32
    """Compact encoding of the proof-of-work target."""

    nonce: Uint32
    """Free field iterated by miners."""

    def encode_bytes(self) -> bytes:
        """Serialize back to the 80-byte wire layout."""
        return _HEADER_LAYOUT.pack(
            self.version,
            bytes(self.prev_hash),
            bytes(self.merkle_root),
            self.timestamp,
            self.bits,
            self.nonce,
        )

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """
        Parse the 80-byte wire layout.

        Raises:
            StructuralDecodeError: If `data` is not exactly 80 bytes.
        """
        if len(data) != HEADER_SIZE:
            raise StructuralDecodeError(
                cls.__name__, f"expected {HEADER_SIZE} bytes, got {len(data)}"
            )
        version, prev_hash, merkle_root, timestamp, bits, nonce = _HEADER_LAYOUT.unpack(data)
        return cls(
            version=version,
            prev_hash=Bytes32(prev_hash),
            merkle_root=Bytes32(merkle_root),
            timestamp=timestamp,
            bits=bits,
            nonce=nonce,
        )

    def block_hash(self) -> Bytes32:
        """Double SHA-256 of the serialized header, internal byte order."""
        return double_sha256(self.encode_bytes())

    @property
    def display_hash(self) -> str:
        """Block hash as printed by explorers and RPC nodes."""
        return self.block_hash().to_display_hex()


def block_hash(raw_header: bytes) -> Bytes32:
    """
    Hash a raw header without fully decoding it.

    Raises:
        StructuralDecodeError: If `raw_header` is not exactly 80 bytes.
    """
    if len(raw_header) != HEADER_SIZE:
        raise StructuralDecodeError(
            "BlockHeader", f"expected {HEADER_SIZE} bytes, got {len(raw_header)}"
        )
    return double_sha256(raw_header)
