"""
Shared pytest fixtures for all relay_spec tests.

Import these fixtures automatically via pytest discovery.
"""

from __future__ import annotations

import pytest

from relay_spec.subspecs.chain import REGTEST_PARAMS, ChainParams
from relay_spec.subspecs.containers import ChainState
from relay_spec.subspecs.validation import ValidityInterval
from tests.relay_spec.helpers import make_interval, make_seed_state


@pytest.fixture
def params() -> ChainParams:
    """Regtest parameters, cheap to mine against."""
    return REGTEST_PARAMS


@pytest.fixture
def seed_state() -> ChainState:
    """State seeded at a height far from any retarget boundary."""
    return make_seed_state()


@pytest.fixture
def interval() -> ValidityInterval:
    """Validity interval starting at the seed timestamp."""
    return make_interval()
