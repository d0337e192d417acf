"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

if "RELAY_NETWORK" not in os.environ:
    os.environ["RELAY_NETWORK"] = "regtest"

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")
