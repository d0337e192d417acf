"""
Fork Tree

Attaches validated headers to the set of competing branches.

A header either extends the tip of an existing branch or, when it builds
directly on the confirmed tip, opens a new branch. Branches are never
removed here for carrying less work than a rival.
"""

from __future__ import annotations

import logging

from relay_spec.subspecs.chain import ChainParams, active_params
from relay_spec.subspecs.containers import BlockRecord, ChainState, ForkBranch
from relay_spec.subspecs.errors import DuplicateBlockError, ForkNotFoundError
from relay_spec.subspecs.header import BlockHeader
from relay_spec.subspecs.pow import bits_to_target, block_work
from relay_spec.subspecs.validation import ValidityInterval, validate_header
from relay_spec.types import Bytes32

from .index import ForkIndex

logger = logging.getLogger(__name__)


def index_branches(state: ChainState) -> ForkIndex[ForkBranch]:
    """Index the branches of `state` by tip hash."""
    return ForkIndex((branch.tip_hash, branch) for branch in state.forks)


def is_tracked(state: ChainState, block_hash: Bytes32) -> bool:
    """Whether any branch of `state` holds a block with `block_hash`."""
    return any(record.hash == block_hash for branch in state.forks for record in branch.blocks)


def absorb(
    state: ChainState,
    header: BlockHeader,
    interval: ValidityInterval,
    params: ChainParams | None = None,
) -> ChainState:
    """
    Attach one header to the branch it extends.

    Args:
        state: State holding the current branches.
        header: Decoded header to attach.
        interval: Time bounds of the enclosing transition.
        params: Network parameters. Defaults to the active network.

    Returns:
        The state with the extended or newly opened branch. Confirmed fields
        are untouched.

    Raises:
        DuplicateBlockError: If the header is already tracked.
        ForkNotFoundError: If nothing tracked is a tip the header can extend.
        HeaderValidationError: If the header breaks a consensus rule.
    """
    params = params or active_params()
    block_hash = header.block_hash()

    if is_tracked(state, block_hash):
        raise DuplicateBlockError(block_hash)

    branches = index_branches(state)
    parent = branches.lookup(header.prev_hash)

    if parent is not None:
        # Extend an existing branch from its tip.
        snapshot = validate_header(parent.tip.snapshot(), header, interval, params)
        record = BlockRecord.from_snapshot(
            snapshot,
            prev_hash=header.prev_hash,
            added_time=interval.lower,
            work=block_work(bits_to_target(header.bits, params)),
        )
        branches.delete(parent.tip_hash)
        branch = parent.extend(record)
    elif header.prev_hash == state.confirmed_hash:
        # Open a new branch on the confirmed tip.
        snapshot = validate_header(state.confirmed_snapshot(), header, interval, params)
        record = BlockRecord.from_snapshot(
            snapshot,
            prev_hash=header.prev_hash,
            added_time=interval.lower,
            work=block_work(bits_to_target(header.bits, params)),
        )
        branch = ForkBranch.start(record)
    else:
        raise ForkNotFoundError(header.prev_hash)

    branches.insert(branch.tip_hash, branch)

    logger.debug(
        "Block %s at height %d on branch of %d blocks",
        block_hash.to_display_hex(),
        record.height,
        len(branch.blocks),
    )

    return state.model_copy(update={"forks": tuple(branches.values())})
