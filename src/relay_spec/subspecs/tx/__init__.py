"""Bitcoin transaction helpers."""

from .transaction import is_witness_transaction, strip_witness, transaction_id

__all__ = [
    "is_witness_transaction",
    "strip_witness",
    "transaction_id",
]
