"""
Global configuration for the relay.

This module contains environment-specific settings that apply across all subspecs.
"""

import os

_SUPPORTED_RELAY_NETWORKS: list[str] = ["mainnet", "regtest"]

RELAY_NETWORK = os.environ.get("RELAY_NETWORK", "mainnet").lower()
"""The network flag ('mainnet' or 'regtest'). Defaults to 'mainnet'."""

if RELAY_NETWORK not in _SUPPORTED_RELAY_NETWORKS:
    raise ValueError(
        f"Invalid RELAY_NETWORK environment variable: '{RELAY_NETWORK}'. "
        f"Supported values: {_SUPPORTED_RELAY_NETWORKS}"
    )
