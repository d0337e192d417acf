"""
Fixed-length byte types.

Hashes travel through the relay as raw bytes in Bitcoin's internal byte
order. The types here pin the length at construction time and render as
lowercase hex when a model is serialized.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, SupportsIndex

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Coerce a variety of inputs to raw bytes.

    Accepts:
      - `bytes` / `bytearray` (returned as immutable `bytes`)
      - Iterables of integers in [0, 255]
      - Hex strings, with or without a '0x' prefix (e.g. "0xdeadbeef" or "deadbeef")

    Raises:
      ValueError / TypeError if conversion is not possible or out-of-range.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value.removeprefix("0x"))
    if isinstance(value, Iterable):
        return bytes(bytearray(value))
    return bytes(value)


class BaseBytes(bytes):
    """
    A base class for fixed-length byte types that inherits from `bytes`.

    Subclasses set `LENGTH`, the exact number of bytes an instance holds.
    Comparison is inherited from `bytes` and is therefore unsigned
    lexicographic.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Create and validate a new Bytes instance.

        Raises:
            ValueError: If the resulting byte length differs from `LENGTH`.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        b = _coerce_to_bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    @classmethod
    def zero(cls) -> Self:
        """Create a new instance filled with zero bytes."""
        return cls(b"\x00" * cls.LENGTH)

    @classmethod
    def from_display_hex(cls, value: str) -> Self:
        """
        Build an instance from a hex string in display (reversed) byte order.

        Block explorers and RPC nodes print hashes byte-reversed relative to
        how they appear inside headers.
        """
        return cls(bytes.fromhex(value.removeprefix("0x"))[::-1])

    def to_display_hex(self) -> str:
        """Return the hex string in display (reversed) byte order."""
        return bytes(self)[::-1].hex()

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        1. Python input that is already an instance is accepted as is.
        2. Python bytes of the right length are wrapped in the class.
        3. JSON input is a hex string.
        4. Serialization (e.g., to JSON) renders a hex string.
        """
        from_value_validator = core_schema.no_info_plain_validator_function(cls)

        python_schema = core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.chain_schema(
                    [
                        core_schema.bytes_schema(min_length=cls.LENGTH, max_length=cls.LENGTH),
                        from_value_validator,
                    ]
                ),
            ]
        )

        json_schema = core_schema.chain_schema(
            [
                core_schema.str_schema(min_length=2 * cls.LENGTH, max_length=2 * cls.LENGTH),
                from_value_validator,
            ]
        )

        return core_schema.json_or_python_schema(
            json_schema=json_schema,
            python_schema=python_schema,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda x: x.hex()),
        )

    def __repr__(self) -> str:
        """Return a string representation of the bytes."""
        return f"{type(self).__name__}({self.hex()})"

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return hash((type(self), bytes(self)))

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return bytes(self).hex() if sep is None else bytes(self).hex(sep, bytes_per_sep)


class Bytes32(BaseBytes):
    """Fixed-size byte array of exactly 32 bytes: block hashes, txids and Merkle nodes."""

    LENGTH = 32


ZERO_HASH = Bytes32.zero()
"""All-zero hash, the root of an empty Merkle structure."""
