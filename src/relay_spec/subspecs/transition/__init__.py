"""Relay state transition and the stateless inclusion check."""

from relay_spec.subspecs.validation import ValidityInterval

from .engine import (
    Accepted,
    EmptyBatchPolicy,
    Rejected,
    TransitionResult,
    apply_headers,
    transition,
    verify_transition,
)
from .inclusion import verify_block_inclusion, verify_transaction_inclusion

__all__ = [
    "Accepted",
    "EmptyBatchPolicy",
    "Rejected",
    "TransitionResult",
    "ValidityInterval",
    "apply_headers",
    "transition",
    "verify_block_inclusion",
    "verify_transaction_inclusion",
    "verify_transition",
]
