"""Block record container."""

from __future__ import annotations

from typing_extensions import Self

from relay_spec.subspecs.validation import ValidationSnapshot
from relay_spec.types import Bytes32, StrictBaseModel, Uint32, Uint64, Uint256


class BlockRecord(StrictBaseModel):
    """
    A validated, not yet confirmed block held by a branch.

    Carries the validator snapshot of the block, so the next header can be
    checked against it, and the time it was accepted, which starts the
    aging clock for promotion.
    """

    hash: Bytes32
    """Hash of the block, internal byte order."""

    prev_hash: Bytes32
    """Hash of the block it extends."""

    height: Uint64
    """Height of the block."""

    added_time: Uint64
    """Lower bound of the transition that accepted the block."""

    work: Uint256
    """Proof of work contributed by this block alone."""

    # Validator snapshot
    bits: Uint32
    timestamp: Uint32
    recent_timestamps: tuple[Uint32, ...]
    epoch_start_timestamp: Uint32

    @classmethod
    def from_snapshot(
        cls,
        snapshot: ValidationSnapshot,
        prev_hash: Bytes32,
        added_time: int,
        work: int,
    ) -> Self:
        """Wrap the snapshot emitted by the validator into a record."""
        return cls(
            hash=snapshot.tip_hash,
            prev_hash=prev_hash,
            height=snapshot.height,
            added_time=added_time,
            work=work,
            bits=snapshot.bits,
            timestamp=snapshot.timestamp,
            recent_timestamps=snapshot.recent_timestamps,
            epoch_start_timestamp=snapshot.epoch_start_timestamp,
        )

    def snapshot(self) -> ValidationSnapshot:
        """The validator snapshot of this block as a chain tip."""
        return ValidationSnapshot(
            height=self.height,
            bits=self.bits,
            timestamp=self.timestamp,
            recent_timestamps=self.recent_timestamps,
            epoch_start_timestamp=self.epoch_start_timestamp,
            tip_hash=self.hash,
        )
