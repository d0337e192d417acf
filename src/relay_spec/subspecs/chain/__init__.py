"""Network parameters shared by every relay subspec."""

from .config import MAINNET_PARAMS, REGTEST_PARAMS, ChainParams, active_params

__all__ = [
    "ChainParams",
    "MAINNET_PARAMS",
    "REGTEST_PARAMS",
    "active_params",
]
