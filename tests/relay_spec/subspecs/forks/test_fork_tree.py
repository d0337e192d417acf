"""Tests for attaching headers to branches."""

import pytest

from relay_spec.subspecs.chain import ChainParams
from relay_spec.subspecs.containers import ChainState
from relay_spec.subspecs.errors import (
    DuplicateBlockError,
    ForkNotFoundError,
    TimestampError,
)
from relay_spec.subspecs.forks import absorb, is_tracked
from relay_spec.subspecs.header import BlockHeader
from relay_spec.subspecs.pow import block_work
from relay_spec.subspecs.validation import ValidityInterval
from tests.relay_spec.helpers import (
    REGTEST_BITS,
    SEED_TIMESTAMP,
    make_bytes32,
    mine_chain,
    mine_header,
)


def absorb_all(
    state: ChainState,
    headers: list[BlockHeader],
    interval: ValidityInterval,
    params: ChainParams,
) -> ChainState:
    for header in headers:
        state = absorb(state, header, interval, params)
    return state


class TestOpenBranch:
    """Headers building on the confirmed tip."""

    def test_new_branch(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        header = mine_header(seed_state.confirmed_hash, SEED_TIMESTAMP + 1)

        state = absorb(seed_state, header, interval, params)

        assert len(state.forks) == 1
        branch = state.forks[0]
        assert branch.tip_hash == header.block_hash()
        assert branch.tip_height == seed_state.confirmed_height + 1
        assert branch.tip_chainwork == block_work(params.pow_limit)
        record = branch.tip
        assert record.prev_hash == seed_state.confirmed_hash
        assert record.added_time == interval.lower
        assert record.bits == REGTEST_BITS

    def test_confirmed_fields_untouched(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        header = mine_header(seed_state.confirmed_hash, SEED_TIMESTAMP + 1)

        state = absorb(seed_state, header, interval, params)

        assert state.model_copy(update={"forks": ()}) == seed_state

    def test_two_branches_sorted_by_tip_hash(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        headers = [
            mine_header(
                seed_state.confirmed_hash, SEED_TIMESTAMP + 1, merkle_root=make_bytes32(i)
            )
            for i in range(4)
        ]

        state = absorb_all(seed_state, headers, interval, params)

        tips = [branch.tip_hash for branch in state.forks]
        assert tips == sorted(header.block_hash() for header in headers)


class TestExtendBranch:
    """Headers building on a branch tip."""

    def test_linear_chain_stays_one_branch(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        headers = mine_chain(seed_state.confirmed_hash, 3)

        state = absorb_all(seed_state, headers, interval, params)

        assert len(state.forks) == 1
        branch = state.forks[0]
        assert [record.hash for record in branch.blocks] == [
            header.block_hash() for header in reversed(headers)
        ]
        assert [record.height for record in branch.blocks] == [103, 102, 101]
        assert branch.oldest.prev_hash == seed_state.confirmed_hash

    def test_chainwork_strictly_increases(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        state = seed_state
        previous_work = 0
        for header in mine_chain(seed_state.confirmed_hash, 5):
            state = absorb(state, header, interval, params)
            work = state.forks[0].tip_chainwork
            assert work > previous_work
            previous_work = work
        assert previous_work == sum(record.work for record in state.forks[0].blocks)

    def test_validated_against_branch_tip(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        first = mine_header(seed_state.confirmed_hash, SEED_TIMESTAMP + 1000)
        state = absorb(seed_state, first, interval, params)

        # Window of the branch tip: ten seed timestamps and the first header.
        # Its median is still the seed timestamp, so one second later passes.
        second = mine_header(first.block_hash(), SEED_TIMESTAMP + 1)
        state = absorb(state, second, interval, params)

        window = state.forks[0].tip.recent_timestamps
        assert window[:2] == (SEED_TIMESTAMP + 1000, SEED_TIMESTAMP + 1)

    def test_validation_errors_propagate(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        first = mine_header(seed_state.confirmed_hash, SEED_TIMESTAMP + 1)
        state = absorb(seed_state, first, interval, params)

        with pytest.raises(TimestampError):
            absorb(state, mine_header(first.block_hash(), SEED_TIMESTAMP), interval, params)


class TestRejections:
    """Headers that cannot be attached."""

    def test_unknown_parent(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        header = mine_header(make_bytes32(0x42), SEED_TIMESTAMP + 1)

        with pytest.raises(ForkNotFoundError) as exc_info:
            absorb(seed_state, header, interval, params)

        assert exc_info.value.prev_hash == make_bytes32(0x42)

    def test_no_fork_inside_a_branch(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        headers = mine_chain(seed_state.confirmed_hash, 3)
        state = absorb_all(seed_state, headers, interval, params)

        # Extends the middle record rather than the tip.
        sibling = mine_header(
            headers[1].block_hash(), SEED_TIMESTAMP + 5000, merkle_root=make_bytes32(7)
        )

        with pytest.raises(ForkNotFoundError):
            absorb(state, sibling, interval, params)

    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_duplicate_block(
        self,
        seed_state: ChainState,
        interval: ValidityInterval,
        params: ChainParams,
        position: int,
    ) -> None:
        headers = mine_chain(seed_state.confirmed_hash, 3)
        state = absorb_all(seed_state, headers, interval, params)

        with pytest.raises(DuplicateBlockError) as exc_info:
            absorb(state, headers[position], interval, params)

        assert exc_info.value.block_hash == headers[position].block_hash()

    def test_every_absorbed_block_is_tracked(
        self, seed_state: ChainState, interval: ValidityInterval, params: ChainParams
    ) -> None:
        headers = mine_chain(seed_state.confirmed_hash, 3)
        state = absorb_all(seed_state, headers, interval, params)

        assert all(is_tracked(state, header.block_hash()) for header in headers)
        assert not is_tracked(state, seed_state.confirmed_hash)
        assert not is_tracked(state, make_bytes32(0x42))
