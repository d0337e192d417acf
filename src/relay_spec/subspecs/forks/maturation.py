"""
Maturation Engine

Moves blocks from the winning branch into the confirmed history.

A branch qualifies once it is deep enough and its oldest block has been
visible long enough for a competing branch to be published. Among the
qualifying branches the one with the most work wins; equal work is settled
by the smallest tip hash. Promotion repeats until nothing qualifies.
"""

from __future__ import annotations

import logging

from relay_spec.subspecs.chain import ChainParams, active_params
from relay_spec.subspecs.containers import ChainState, ForkBranch
from relay_spec.subspecs.validation import ValidityInterval

from .index import ForkIndex

logger = logging.getLogger(__name__)


def is_mature(branch: ForkBranch, interval: ValidityInterval, params: ChainParams) -> bool:
    """Whether the oldest block of `branch` may be promoted."""
    return (
        len(branch.blocks) >= params.maturation_depth
        and interval.lower - branch.oldest.added_time >= params.challenge_aging
    )


def select_winner(
    state: ChainState,
    interval: ValidityInterval,
    params: ChainParams,
) -> ForkBranch | None:
    """Pick the branch to promote from, or None when no branch qualifies."""
    candidates = [branch for branch in state.forks if is_mature(branch, interval, params)]
    if not candidates:
        return None
    # Most work first, then the lexicographically smallest tip hash.
    return min(candidates, key=lambda branch: (-branch.tip_chainwork, bytes(branch.tip_hash)))


def promote_once(state: ChainState, branch: ForkBranch) -> ChainState:
    """
    Confirm the oldest block of `branch`.

    Branches still rooted at the previous confirmed tip cannot extend the new
    one and are dropped.
    """
    record, remaining = branch.pop_oldest()

    survivors: ForkIndex[ForkBranch] = ForkIndex()
    if remaining is not None:
        survivors.insert(remaining.tip_hash, remaining)
    for other in state.forks:
        if other.tip_hash != branch.tip_hash and other.root_hash == record.hash:
            survivors.insert(other.tip_hash, other)

    dropped = len(state.forks) - len(survivors) - (1 if remaining is None else 0)
    if dropped:
        logger.debug("Dropped %d branches orphaned by promotion", dropped)

    logger.info("Promoted block %s at height %d", record.hash.to_display_hex(), record.height)

    return state.model_copy(
        update={
            "confirmed_height": record.height,
            "confirmed_hash": record.hash,
            "current_target": record.bits,
            "confirmed_timestamp": record.timestamp,
            "recent_timestamps": record.recent_timestamps,
            "epoch_start_timestamp": record.epoch_start_timestamp,
            "confirmed_accumulator": state.confirmed_accumulator.append(record.hash),
            "forks": tuple(survivors.values()),
        }
    )


def promote(
    state: ChainState,
    interval: ValidityInterval,
    params: ChainParams | None = None,
) -> tuple[ChainState, int]:
    """
    Promote blocks until no branch qualifies.

    Args:
        state: State after every header of the batch has been absorbed.
        interval: Time bounds of the enclosing transition.
        params: Network parameters. Defaults to the active network.

    Returns:
        The resulting state and the number of promotions performed.
    """
    params = params or active_params()

    promotions = 0
    while (winner := select_winner(state, interval, params)) is not None:
        state = promote_once(state, winner)
        promotions += 1
    return state, promotions
