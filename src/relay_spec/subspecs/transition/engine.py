"""
State Transition

The single operation that moves the relay from one state to the next:

1. decode every header of the batch,
2. attach them in order to the branches they extend,
3. promote matured blocks until nothing qualifies.

The batch is all or nothing. Any failure leaves the previous state as the
current one. The same inputs always produce a byte-identical state, which
lets anyone recompute a claimed transition and refuse it when it differs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from relay_spec.subspecs.chain import ChainParams, active_params
from relay_spec.subspecs.containers import ChainState
from relay_spec.subspecs.errors import (
    EmptyBatchError,
    PromotionPolicyViolation,
    RelayError,
)
from relay_spec.subspecs.forks import absorb, promote
from relay_spec.subspecs.header import BlockHeader
from relay_spec.subspecs.validation import ValidityInterval

logger = logging.getLogger(__name__)


class EmptyBatchPolicy(str, Enum):
    """What a transition does with a batch holding no header."""

    REJECT = "reject"
    """Fail with `EmptyBatchError`."""

    NOOP = "noop"
    """Succeed and return the previous state unchanged."""


@dataclass(frozen=True, slots=True)
class Accepted:
    """A transition that succeeded."""

    state: ChainState
    """The new state."""

    promotions: int = 0
    """Blocks promoted into the confirmed history."""


@dataclass(frozen=True, slots=True)
class Rejected:
    """A transition that failed. The previous state stays current."""

    error: RelayError
    """Why the batch was refused."""


TransitionResult = Accepted | Rejected
"""Outcome of a transition."""


def _run(
    state: ChainState,
    headers: Sequence[bytes],
    interval: ValidityInterval,
    params: ChainParams,
    empty_batch: EmptyBatchPolicy,
) -> tuple[ChainState, int]:
    if not headers:
        if empty_batch is EmptyBatchPolicy.NOOP:
            return state, 0
        raise EmptyBatchError()

    # Decode the whole batch before touching any branch.
    decoded = [BlockHeader.decode_bytes(raw) for raw in headers]

    for header in decoded:
        state = absorb(state, header, interval, params)

    return promote(state, interval, params)


def apply_headers(
    state: ChainState,
    headers: Sequence[bytes],
    interval: ValidityInterval,
    *,
    params: ChainParams | None = None,
    empty_batch: EmptyBatchPolicy = EmptyBatchPolicy.REJECT,
) -> ChainState:
    """
    Apply a batch of raw headers and return the new state.

    Args:
        state: The current state.
        headers: Raw 80-byte headers, in the order they are to be attached.
        interval: Time bounds asserted by the hosting ledger.
        params: Network parameters. Defaults to the active network.
        empty_batch: Handling of a batch with no header.

    Returns:
        The new state.

    Raises:
        RelayError: The first failure met. Nothing of the batch is applied.
    """
    params = params or active_params()
    new_state, _ = _run(state, headers, interval, params, empty_batch)
    return new_state


def transition(
    state: ChainState,
    headers: Sequence[bytes],
    interval: ValidityInterval,
    *,
    params: ChainParams | None = None,
    empty_batch: EmptyBatchPolicy = EmptyBatchPolicy.REJECT,
) -> TransitionResult:
    """
    Apply a batch of raw headers without raising.

    Same semantics as `apply_headers`, with failures returned as `Rejected`.
    """
    params = params or active_params()
    try:
        new_state, promotions = _run(state, headers, interval, params, empty_batch)
    except RelayError as error:
        logger.debug("Batch of %d headers rejected: %s", len(headers), error.message)
        return Rejected(error)

    if promotions:
        logger.info(
            "Confirmed tip advanced to height %d after %d promotions",
            new_state.confirmed_height,
            promotions,
        )
    return Accepted(new_state, promotions)


def _first_difference(expected: ChainState, claimed: ChainState) -> str:
    for name in ChainState.model_fields:
        if getattr(expected, name) != getattr(claimed, name):
            return f"{name} differs from recomputation"
    return "encoding differs from recomputation"


def verify_transition(
    state: ChainState,
    headers: Sequence[bytes],
    interval: ValidityInterval,
    claimed: ChainState,
    *,
    params: ChainParams | None = None,
    empty_batch: EmptyBatchPolicy = EmptyBatchPolicy.REJECT,
) -> TransitionResult:
    """
    Independently recompute a transition and compare it with a claimed result.

    Args:
        state: The state the claim was computed from.
        headers: The batch the claim was computed from.
        interval: Time bounds asserted by the hosting ledger.
        claimed: The state the submitter asserts is next.
        params: Network parameters. Defaults to the active network.
        empty_batch: Handling of a batch with no header.

    Returns:
        `Accepted` with the claimed state when it matches byte for byte.
        Otherwise the recomputation's own `Rejected`, or `Rejected` carrying
        `PromotionPolicyViolation`.
    """
    result = transition(state, headers, interval, params=params, empty_batch=empty_batch)
    if isinstance(result, Rejected):
        return result

    if result.state.encode_bytes() != claimed.encode_bytes():
        return Rejected(PromotionPolicyViolation(_first_difference(result.state, claimed)))
    return Accepted(claimed, result.promotions)
