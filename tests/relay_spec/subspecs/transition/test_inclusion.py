"""Tests for block and transaction inclusion proofs against a published state."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from relay_spec.subspecs.chain import REGTEST_PARAMS
from relay_spec.subspecs.containers import ChainState
from relay_spec.subspecs.header import BlockHeader
from relay_spec.subspecs.merkle import MerkleBranch, MerkleTree, OddNodePolicy
from relay_spec.subspecs.transition import (
    apply_headers,
    verify_block_inclusion,
    verify_transaction_inclusion,
)
from relay_spec.types import Bytes32
from tests.relay_spec.helpers import (
    BLOCK_SPACING,
    SEED_TIMESTAMP,
    make_bytes32,
    make_interval,
    make_seed_state,
    mine_chain,
    mine_header,
    raw,
)

TXIDS = [make_bytes32(i) for i in range(1, 6)]
"""Transactions committed by the first relayed block."""


@dataclass(frozen=True)
class ConfirmedChain:
    """A state with six promoted blocks on top of the seed."""

    state: ChainState
    headers: list[BlockHeader]
    history: MerkleTree
    transactions: MerkleTree


@pytest.fixture(scope="module")
def chain() -> ConfirmedChain:
    """Mine 107 headers and promote the six oldest."""
    seed_state = make_seed_state()
    transactions = MerkleTree.from_leaves(TXIDS, OddNodePolicy.DUPLICATE)

    first = mine_header(
        seed_state.confirmed_hash,
        SEED_TIMESTAMP + BLOCK_SPACING,
        merkle_root=transactions.root(),
    )
    headers = [first] + mine_chain(
        first.block_hash(), 106, start_timestamp=SEED_TIMESTAMP + 2 * BLOCK_SPACING
    )

    state = apply_headers(seed_state, raw(headers[:6]), make_interval(), params=REGTEST_PARAMS)
    state = apply_headers(
        state, raw(headers[6:]), make_interval(SEED_TIMESTAMP + 12_000), params=REGTEST_PARAMS
    )
    assert state.confirmed_height == seed_state.confirmed_height + 6

    leaves = [seed_state.confirmed_hash] + [header.block_hash() for header in headers[:6]]
    history = MerkleTree.from_leaves(leaves, OddNodePolicy.CARRY)
    assert history.root() == state.confirmed_accumulator.root()

    return ConfirmedChain(state, headers, history, transactions)


def block_proof(chain: ConfirmedChain, index: int) -> tuple[Bytes32, ...]:
    """Siblings proving leaf `index` of the confirmed history."""
    return chain.history.prove(index).siblings


class TestBlockInclusion:
    """Proofs of a block against the confirmed accumulator."""

    @pytest.mark.parametrize("index", range(7))
    def test_every_confirmed_block(self, chain: ConfirmedChain, index: int) -> None:
        leaf = chain.history.levels[0][index]
        assert verify_block_inclusion(chain.state, leaf, index, block_proof(chain, index))

    def test_wrong_index(self, chain: ConfirmedChain) -> None:
        leaf = chain.headers[0].block_hash()
        assert not verify_block_inclusion(chain.state, leaf, 2, block_proof(chain, 1))

    @pytest.mark.parametrize("index", [-1, 7, 100])
    def test_index_out_of_range(self, chain: ConfirmedChain, index: int) -> None:
        leaf = chain.headers[0].block_hash()
        assert not verify_block_inclusion(chain.state, leaf, index, block_proof(chain, 1))

    def test_unconfirmed_block(self, chain: ConfirmedChain) -> None:
        leaf = chain.headers[6].block_hash()
        assert not verify_block_inclusion(chain.state, leaf, 6, block_proof(chain, 6))


class TestTransactionInclusion:
    """Chained transaction and block proofs."""

    @pytest.mark.parametrize("position", range(len(TXIDS)))
    def test_included_transaction(self, chain: ConfirmedChain, position: int) -> None:
        assert verify_transaction_inclusion(
            chain.state,
            TXIDS[position],
            chain.transactions.prove(position),
            1,
            block_proof(chain, 1),
            chain.headers[0].encode_bytes(),
        )

    def test_unknown_transaction(self, chain: ConfirmedChain) -> None:
        assert not verify_transaction_inclusion(
            chain.state,
            make_bytes32(0x99),
            chain.transactions.prove(0),
            1,
            block_proof(chain, 1),
            chain.headers[0].encode_bytes(),
        )

    def test_transaction_in_other_block(self, chain: ConfirmedChain) -> None:
        assert not verify_transaction_inclusion(
            chain.state,
            TXIDS[0],
            chain.transactions.prove(0),
            2,
            block_proof(chain, 2),
            chain.headers[1].encode_bytes(),
        )

    def test_tampered_branch(self, chain: ConfirmedChain) -> None:
        honest = chain.transactions.prove(2)
        forged = MerkleBranch(index=honest.index ^ 1, siblings=honest.siblings)
        assert not verify_transaction_inclusion(
            chain.state,
            TXIDS[2],
            forged,
            1,
            block_proof(chain, 1),
            chain.headers[0].encode_bytes(),
        )

    @pytest.mark.parametrize("header", [b"", b"\x00" * 79, b"\x00" * 81])
    def test_malformed_header(self, chain: ConfirmedChain, header: bytes) -> None:
        assert not verify_transaction_inclusion(
            chain.state,
            TXIDS[0],
            chain.transactions.prove(0),
            1,
            block_proof(chain, 1),
            header,
        )
