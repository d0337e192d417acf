"""Reusable type definitions for the relay."""

from .base import CamelModel, StrictBaseModel
from .byte_arrays import ZERO_HASH, BaseBytes, Bytes32
from .uint import Uint32, Uint64, Uint256

__all__ = [
    "BaseBytes",
    "Bytes32",
    "CamelModel",
    "StrictBaseModel",
    "Uint32",
    "Uint64",
    "Uint256",
    "ZERO_HASH",
]
