"""
Inclusion Verification

Stateless check that a transaction sits in a confirmed block. Two proofs
are chained:

1. the header hashes to leaf `block_index` of the confirmed accumulator,
2. the transaction hashes up to the merkle root carried by that header.

Consumers run this against any published state without re-running a
transition.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from relay_spec.subspecs.containers import ChainState
from relay_spec.subspecs.errors import StructuralDecodeError
from relay_spec.subspecs.header import BlockHeader
from relay_spec.subspecs.merkle import MerkleBranch, carried_path_index, verify_merkle_branch
from relay_spec.types import Bytes32

logger = logging.getLogger(__name__)


def verify_block_inclusion(
    state: ChainState,
    block_hash: Bytes32,
    block_index: int,
    block_proof: Sequence[Bytes32],
) -> bool:
    """Whether `block_hash` is confirmed leaf `block_index` of `state`."""
    accumulator = state.confirmed_accumulator
    if not 0 <= block_index < accumulator.leaf_count:
        return False

    path_index = carried_path_index(block_index, accumulator.leaf_count)
    return verify_merkle_branch(path_index, block_hash, block_proof, accumulator.root())


def verify_transaction_inclusion(
    state: ChainState,
    tx_hash: Bytes32,
    tx_proof: MerkleBranch,
    block_index: int,
    block_proof: Sequence[Bytes32],
    header: bytes,
) -> bool:
    """
    Check that a transaction is included in a confirmed block.

    Args:
        state: Any published relay state.
        tx_hash: Txid of the transaction, internal byte order.
        tx_proof: Branch from the transaction to the header's merkle root.
        block_index: Position of the block in the confirmed history, seed block at 0.
        block_proof: Siblings from the block hash to the accumulator root.
        header: The raw 80-byte header of the block.

    Returns:
        True when both proofs hold. Any malformed input yields False.
    """
    try:
        decoded = BlockHeader.decode_bytes(header)
    except StructuralDecodeError as error:
        logger.debug("Inclusion check on malformed header: %s", error.message)
        return False

    if not verify_block_inclusion(state, decoded.block_hash(), block_index, block_proof):
        return False

    return tx_proof.verify(tx_hash, decoded.merkle_root)
