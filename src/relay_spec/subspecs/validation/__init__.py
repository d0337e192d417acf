"""Per-header consensus validation."""

from .interval import ValidityInterval
from .snapshot import ValidationSnapshot
from .validator import hash_as_integer, validate_header

__all__ = [
    "ValidationSnapshot",
    "ValidityInterval",
    "hash_as_integer",
    "validate_header",
]
