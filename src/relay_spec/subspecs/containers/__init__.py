"""Containers persisted by the relay."""

from .block_record import BlockRecord
from .fork_branch import ForkBranch
from .state import ChainState

__all__ = [
    "BlockRecord",
    "ChainState",
    "ForkBranch",
]
