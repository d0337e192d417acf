"""Validator snapshot: everything needed to check the header after a tip."""

from relay_spec.types import Bytes32, StrictBaseModel, Uint32, Uint64


class ValidationSnapshot(StrictBaseModel):
    """
    Consensus context of a chain tip.

    Held for the confirmed tip by the chain state and for every tracked
    block record, so any tip can be extended without walking history.
    """

    height: Uint64
    """Height of the tip."""

    bits: Uint32
    """Compact bits of the tip."""

    timestamp: Uint32
    """Timestamp of the tip."""

    recent_timestamps: tuple[Uint32, ...]
    """Up to eleven most recent timestamps ending at the tip, newest first."""

    epoch_start_timestamp: Uint32
    """Timestamp of the first block of the tip's difficulty epoch."""

    tip_hash: Bytes32
    """Hash of the tip."""
