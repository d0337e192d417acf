"""Unsigned Integer Type Specification."""

from pydantic import Field
from typing_extensions import Annotated

Uint32 = Annotated[int, Field(ge=0, lt=2**32)]
"""A type alias to represent a uint32 (header version, timestamp, bits, nonce)."""

Uint64 = Annotated[int, Field(ge=0, lt=2**64)]
"""A type alias to represent a uint64 (heights and ledger times)."""

Uint256 = Annotated[int, Field(ge=0, lt=2**256)]
"""A type alias to represent a uint256 (targets and per-block work)."""
