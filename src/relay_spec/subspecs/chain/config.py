"""
Chain and Consensus Configuration Specification

This file defines the Bitcoin consensus parameters reproduced by the relay
and the relay's own promotion parameters, grouped into network presets.
"""

from typing_extensions import Final

from relay_spec.config import RELAY_NETWORK
from relay_spec.types import StrictBaseModel, Uint32, Uint64, Uint256

# --- Bitcoin Consensus Parameters ---

MAINNET_POW_LIMIT: Final = 0x00000000FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF
"""Highest target a mainnet header may claim (`consensus.powLimit`)."""

REGTEST_POW_LIMIT: Final = 0x7FFFFF << 232
"""Highest target a regtest header may claim, the expansion of bits 0x207fffff."""

DIFFICULTY_ADJUSTMENT_INTERVAL: Final = 2016
"""Number of blocks between two difficulty retargets."""

TARGET_BLOCK_SPACING: Final = 600
"""Expected seconds between two blocks."""

MEDIAN_TIME_SPAN: Final = 11
"""Number of recent timestamps considered by median-time-past."""

MAX_FUTURE_BLOCK_TIME: Final = 7200
"""How far past the validity window a header timestamp may lie, in seconds."""

MIN_BLOCK_VERSION: Final = 4
"""Lowest header version accepted (BIP 65 activation)."""

MEDIAN_TIME_EPOCH: Final = 1231006505
"""Median-time-past reported for an empty timestamp window (genesis time)."""

# --- Relay Promotion Parameters ---

MATURATION_DEPTH: Final = 101
"""Blocks a branch must hold before its oldest block may be promoted."""

CHALLENGE_AGING: Final = 200 * 60
"""
Seconds the oldest block of a branch must have been visible before promotion.

Sized so that an honest party has time to publish a competing branch.
"""


class ChainParams(StrictBaseModel):
    """
    A model holding the canonical, immutable configuration constants
    for one network.
    """

    name: str

    # Bitcoin consensus
    pow_limit: Uint256
    difficulty_adjustment_interval: Uint32
    target_block_spacing: Uint32
    median_time_span: Uint32
    max_future_block_time: Uint32
    min_block_version: Uint32
    median_time_epoch: Uint64

    # Relay promotion
    maturation_depth: Uint32
    challenge_aging: Uint64

    @property
    def target_timespan(self) -> int:
        """Expected duration of one difficulty epoch, in seconds."""
        return self.difficulty_adjustment_interval * self.target_block_spacing


MAINNET_PARAMS: Final = ChainParams(
    name="mainnet",
    pow_limit=MAINNET_POW_LIMIT,
    difficulty_adjustment_interval=DIFFICULTY_ADJUSTMENT_INTERVAL,
    target_block_spacing=TARGET_BLOCK_SPACING,
    median_time_span=MEDIAN_TIME_SPAN,
    max_future_block_time=MAX_FUTURE_BLOCK_TIME,
    min_block_version=MIN_BLOCK_VERSION,
    median_time_epoch=MEDIAN_TIME_EPOCH,
    maturation_depth=MATURATION_DEPTH,
    challenge_aging=CHALLENGE_AGING,
)
"""Bitcoin main network."""

REGTEST_PARAMS: Final = MAINNET_PARAMS.model_copy(
    update={"name": "regtest", "pow_limit": REGTEST_POW_LIMIT}
)
"""
Regression-test network.

Identical to mainnet except for the proof-of-work ceiling, which makes
headers cheap to mine locally.
"""

_PRESETS: Final = {params.name: params for params in (MAINNET_PARAMS, REGTEST_PARAMS)}


def active_params() -> ChainParams:
    """Return the preset selected by the `RELAY_NETWORK` environment flag."""
    return _PRESETS[RELAY_NETWORK]
