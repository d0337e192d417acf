"""Chain state container for the relay."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import field_validator, model_validator
from typing_extensions import Self

from relay_spec.subspecs.chain import ChainParams, active_params
from relay_spec.subspecs.chain.config import MEDIAN_TIME_SPAN
from relay_spec.subspecs.merkle import MerkleAccumulator
from relay_spec.subspecs.validation import ValidationSnapshot
from relay_spec.types import Bytes32, StrictBaseModel, Uint32, Uint64

from .fork_branch import ForkBranch


class ChainState(StrictBaseModel):
    """The relay state persisted between transitions."""

    # Confirmed tip
    confirmed_height: Uint64
    """Height of the last promoted block."""

    confirmed_hash: Bytes32
    """Hash of the last promoted block."""

    current_target: Uint32
    """Compact bits of the last promoted block."""

    confirmed_timestamp: Uint32
    """Timestamp of the last promoted block."""

    recent_timestamps: tuple[Uint32, ...]
    """Timestamps ending at the confirmed tip, newest first."""

    epoch_start_timestamp: Uint32
    """Timestamp of the first block of the confirmed tip's difficulty epoch."""

    # History
    confirmed_accumulator: MerkleAccumulator
    """Accumulator over every confirmed block hash, seed block first."""

    # Unconfirmed branches
    forks: tuple[ForkBranch, ...] = ()
    """Competing branches, ordered by tip hash."""

    @field_validator("recent_timestamps")
    @classmethod
    def _check_window(cls, window: tuple[int, ...]) -> tuple[int, ...]:
        if len(window) > MEDIAN_TIME_SPAN:
            raise ValueError(f"At most {MEDIAN_TIME_SPAN} recent timestamps are kept")
        if any(newer < older for newer, older in zip(window, window[1:], strict=False)):
            raise ValueError("Recent timestamps must be sorted newest first")
        return window

    @model_validator(mode="after")
    def _check_window_length(self) -> Self:
        expected = min(self.confirmed_height + 1, MEDIAN_TIME_SPAN)
        if len(self.recent_timestamps) != expected:
            raise ValueError(
                f"Height {self.confirmed_height} requires {expected} recent timestamps, "
                f"got {len(self.recent_timestamps)}"
            )
        if self.confirmed_timestamp not in self.recent_timestamps:
            raise ValueError("Recent timestamps must include the confirmed timestamp")
        return self

    @model_validator(mode="after")
    def _check_fork_order(self) -> Self:
        tips = [branch.tip_hash for branch in self.forks]
        if any(a >= b for a, b in zip(tips, tips[1:], strict=False)):
            raise ValueError("Forks must be strictly ordered by tip hash")
        return self

    @classmethod
    def from_seed(
        cls,
        height: int,
        block_hash: Bytes32,
        bits: int,
        timestamp: int,
        recent_timestamps: Iterable[int],
        epoch_start_timestamp: int,
        params: ChainParams | None = None,
    ) -> Self:
        """
        Create the initial state from a trusted block.

        Parameters
        ----------
        height : int
            Height of the seed block.
        block_hash : Bytes32
            Hash of the seed block, internal byte order.
        bits : int
            Compact bits of the seed block.
        timestamp : int
            Timestamp of the seed block.
        recent_timestamps : Iterable[int]
            Timestamps of the seed block and its predecessors, in any order.
            At least `min(height + 1, 11)` of them, the seed timestamp included.
        epoch_start_timestamp : int
            Timestamp of the first block of the seed block's difficulty epoch.
        params : ChainParams | None
            Network parameters bounding the timestamp window.

        Returns:
        -------
        ChainState
            A state with no forks whose accumulator holds the seed hash as leaf 0.

        Raises:
        -------
        ValueError
            If the window is too short or misses the seed timestamp.
        """
        params = params or active_params()

        # Keep the newest timestamps only, newest first.
        window = tuple(sorted(recent_timestamps, reverse=True))[: params.median_time_span]

        expected = min(height + 1, params.median_time_span)
        if len(window) != expected:
            raise ValueError(
                f"Seed at height {height} requires {expected} recent timestamps, got {len(window)}"
            )
        if timestamp not in window:
            raise ValueError("Seed timestamp must be one of its newest recent timestamps")

        return cls(
            confirmed_height=height,
            confirmed_hash=block_hash,
            current_target=bits,
            confirmed_timestamp=timestamp,
            recent_timestamps=window,
            epoch_start_timestamp=epoch_start_timestamp,
            confirmed_accumulator=MerkleAccumulator().append(block_hash),
            forks=(),
        )

    def confirmed_snapshot(self) -> ValidationSnapshot:
        """Validator snapshot of the confirmed tip."""
        return ValidationSnapshot(
            height=self.confirmed_height,
            bits=self.current_target,
            timestamp=self.confirmed_timestamp,
            recent_timestamps=self.recent_timestamps,
            epoch_start_timestamp=self.epoch_start_timestamp,
            tip_hash=self.confirmed_hash,
        )
