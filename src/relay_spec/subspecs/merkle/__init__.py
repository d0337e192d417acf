"""Merkle structures over double SHA-256."""

from .accumulator import MerkleAccumulator
from .hash import double_sha256, hash_nodes
from .tree import (
    MerkleBranch,
    MerkleTree,
    OddNodePolicy,
    carried_path_index,
    compute_merkle_root,
    merkle_root,
    verify_merkle_branch,
)

__all__ = [
    "MerkleAccumulator",
    "MerkleBranch",
    "MerkleTree",
    "OddNodePolicy",
    "carried_path_index",
    "compute_merkle_root",
    "double_sha256",
    "hash_nodes",
    "merkle_root",
    "verify_merkle_branch",
]
