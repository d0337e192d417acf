"""Competing branches and their promotion into the confirmed history."""

from .index import ForkIndex
from .maturation import is_mature, promote, promote_once, select_winner
from .tree import absorb, index_branches, is_tracked

__all__ = [
    "ForkIndex",
    "absorb",
    "index_branches",
    "is_tracked",
    "is_mature",
    "promote",
    "promote_once",
    "select_winner",
]
