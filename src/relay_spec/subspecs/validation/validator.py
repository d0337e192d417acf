"""
Header Validator

Checks a single header against the tip it claims to extend and produces the
snapshot of the new tip. Checks run in a fixed order and the first failure
aborts.
"""

from __future__ import annotations

import logging

from relay_spec.subspecs.chain import ChainParams, active_params
from relay_spec.subspecs.errors import (
    ContinuityError,
    DifficultyMismatchError,
    ProofOfWorkError,
    TimestampError,
    VersionError,
)
from relay_spec.subspecs.header import BlockHeader
from relay_spec.subspecs.pow import (
    bits_to_target,
    insert_timestamp,
    is_retarget_height,
    median_time_past,
    next_target,
)

from .interval import ValidityInterval
from .snapshot import ValidationSnapshot

logger = logging.getLogger(__name__)


def hash_as_integer(block_hash: bytes) -> int:
    """Read a hash in internal byte order as the integer compared against the target."""
    return int.from_bytes(block_hash, "little")


def validate_header(
    snapshot: ValidationSnapshot,
    header: BlockHeader,
    interval: ValidityInterval,
    params: ChainParams | None = None,
) -> ValidationSnapshot:
    """
    Validate `header` as the successor of the tip described by `snapshot`.

    Args:
        snapshot: Consensus context of the tip being extended.
        header: The candidate header.
        interval: Time bounds of the enclosing transition.
        params: Network parameters. Defaults to the active network.

    Returns:
        The snapshot of the new tip.

    Raises:
        ContinuityError: If the header does not point at the tip.
        DifficultyEncodingError: If the header's bits are not a valid target.
        ProofOfWorkError: If the header hash exceeds its target.
        DifficultyMismatchError: If the bits differ from the expected difficulty.
        TimestampError: If the timestamp is not after median-time-past or too far ahead.
        VersionError: If the version is obsolete.
    """
    params = params or active_params()
    block_hash = header.block_hash()

    # 1. The header must build on the tip.
    if header.prev_hash != snapshot.tip_hash:
        raise ContinuityError(expected=snapshot.tip_hash, actual=header.prev_hash)

    # 2. The claimed difficulty must decode to a legal target.
    target = bits_to_target(header.bits, params)

    # 3. Proof of work.
    if hash_as_integer(block_hash) > target:
        raise ProofOfWorkError(block_hash, target)

    # 4. The claimed difficulty must be the one the chain requires.
    expected_bits = next_target(
        snapshot.height,
        snapshot.bits,
        snapshot.timestamp,
        snapshot.epoch_start_timestamp,
        params,
    )
    if header.bits != expected_bits:
        raise DifficultyMismatchError(expected=expected_bits, actual=header.bits)

    # 5. Timestamp window.
    median = median_time_past(snapshot.recent_timestamps, params)
    if header.timestamp <= median:
        raise TimestampError(header.timestamp, median, "is not after median time past")
    latest = interval.upper + params.max_future_block_time
    if header.timestamp > latest:
        raise TimestampError(header.timestamp, latest, "is after latest allowed time")

    # 6. Obsolete versions are refused.
    if header.version < params.min_block_version:
        raise VersionError(header.version, params.min_block_version)

    # A retarget boundary opens a new epoch at this header.
    epoch_start = (
        header.timestamp
        if is_retarget_height(snapshot.height, params)
        else snapshot.epoch_start_timestamp
    )

    logger.debug("Header %s valid at height %d", block_hash.to_display_hex(), snapshot.height + 1)

    return ValidationSnapshot(
        height=snapshot.height + 1,
        bits=expected_bits,
        timestamp=header.timestamp,
        recent_timestamps=insert_timestamp(header.timestamp, snapshot.recent_timestamps, params),
        epoch_start_timestamp=epoch_start,
        tip_hash=block_hash,
    )
