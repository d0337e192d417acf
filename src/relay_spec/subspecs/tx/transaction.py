"""
Transaction identifiers.

The txid commits to the legacy serialization of a transaction. Segregated
witness transactions carry a marker and flag after the version and a
witness section before the lock time; both are removed before hashing:

    legacy:  version | inputs | outputs | lock_time
    witness: version | 0x00 0x01 | inputs | outputs | witnesses | lock_time
"""

from __future__ import annotations

from typing import Final

from relay_spec.subspecs.errors import StructuralDecodeError
from relay_spec.subspecs.merkle import double_sha256
from relay_spec.types import Bytes32

_OUTPOINT_SIZE: Final = 36
"""Previous txid and output index of an input."""

_SEQUENCE_SIZE: Final = 4
_VALUE_SIZE: Final = 8
_VERSION_SIZE: Final = 4
_LOCK_TIME_SIZE: Final = 4


class _Reader:
    """Cursor over a raw transaction."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self.data = data
        self.offset = offset

    def skip(self, size: int) -> None:
        if self.offset + size > len(self.data):
            raise StructuralDecodeError("Transaction", f"truncated at offset {self.offset}")
        self.offset += size

    def read_varint(self) -> int:
        """Read a Bitcoin CompactSize integer."""
        start = self.offset
        self.skip(1)
        prefix = self.data[start]
        if prefix < 0xFD:
            return prefix
        width = {0xFD: 2, 0xFE: 4, 0xFF: 8}[prefix]
        self.skip(width)
        return int.from_bytes(self.data[start + 1 : start + 1 + width], "little")


def is_witness_transaction(raw_tx: bytes) -> bool:
    """Whether the transaction uses the segregated witness serialization."""
    return len(raw_tx) > 5 and raw_tx[4] == 0x00 and raw_tx[5] == 0x01


def strip_witness(raw_tx: bytes) -> bytes:
    """
    Return the legacy serialization of a transaction.

    Legacy transactions are returned unchanged.

    Raises:
        StructuralDecodeError: If the transaction is truncated.
    """
    if not is_witness_transaction(raw_tx):
        return raw_tx

    reader = _Reader(raw_tx, _VERSION_SIZE + 2)
    body_start = reader.offset

    input_count = reader.read_varint()
    for _ in range(input_count):
        reader.skip(_OUTPOINT_SIZE)
        reader.skip(reader.read_varint())
        reader.skip(_SEQUENCE_SIZE)

    output_count = reader.read_varint()
    for _ in range(output_count):
        reader.skip(_VALUE_SIZE)
        reader.skip(reader.read_varint())

    body_end = reader.offset

    # One witness stack per input.
    for _ in range(input_count):
        for _ in range(reader.read_varint()):
            reader.skip(reader.read_varint())

    lock_time_start = reader.offset
    reader.skip(_LOCK_TIME_SIZE)
    if reader.offset != len(raw_tx):
        raise StructuralDecodeError("Transaction", "trailing bytes after lock time")

    return (
        raw_tx[:_VERSION_SIZE]
        + raw_tx[body_start:body_end]
        + raw_tx[lock_time_start : lock_time_start + _LOCK_TIME_SIZE]
    )


def transaction_id(raw_tx: bytes) -> Bytes32:
    """Txid of a raw transaction, internal byte order."""
    return double_sha256(strip_witness(raw_tx))
