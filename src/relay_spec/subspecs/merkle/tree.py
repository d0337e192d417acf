"""
Static Merkle Trees

Two pairing rules are in use for a level with an odd number of nodes:

- `CARRY`: the trailing node moves up a level unchanged. The confirmed
  block history is committed this way.
- `DUPLICATE`: the trailing node is paired with itself. Bitcoin commits
  to a block's transactions this way.

Verification is the same for both. A branch lists the siblings met on the
way to the root, and the bits of its path index say on which side each
sibling sits. In a carry tree a level where the node is carried contributes
neither a sibling nor a bit, so the path index can differ from the leaf
index. `carried_path_index` performs that conversion.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from pydantic import Field, model_validator
from typing_extensions import Self

from relay_spec.types import ZERO_HASH, Bytes32, StrictBaseModel

from .hash import hash_nodes


class OddNodePolicy(str, Enum):
    """How a level with an odd number of nodes is closed."""

    CARRY = "carry"
    """Trailing node moves up unchanged."""

    DUPLICATE = "duplicate"
    """Trailing node is hashed with itself."""


class MerkleBranch(StrictBaseModel):
    """Inclusion proof for a single leaf."""

    index: int = Field(ge=0)
    """Path index: bit `k` set means the sibling at level `k` is on the left."""

    siblings: tuple[Bytes32, ...]
    """Sibling hashes from the leaf level up to just below the root."""

    def compute_root(self, leaf: Bytes32) -> Bytes32:
        """Fold the siblings over `leaf` up to the root."""
        return compute_merkle_root(self.index, leaf, self.siblings)

    def verify(self, leaf: Bytes32, root: Bytes32) -> bool:
        """Check that `leaf` sits under `root` along this branch."""
        return verify_merkle_branch(self.index, leaf, self.siblings, root)


class MerkleTree(StrictBaseModel):
    """
    A fully materialised Merkle tree.

    Level 0 holds the leaves, the last level holds the root alone.
    """

    policy: OddNodePolicy
    levels: tuple[tuple[Bytes32, ...], ...]

    @model_validator(mode="after")
    def _check_levels(self) -> Self:
        if self.levels and len(self.levels[-1]) != 1:
            raise ValueError("The top level of a Merkle tree must hold exactly one node.")
        return self

    @classmethod
    def from_leaves(
        cls,
        leaves: Sequence[Bytes32],
        policy: OddNodePolicy = OddNodePolicy.CARRY,
    ) -> Self:
        """
        Build every level of the tree over `leaves`.

        An empty leaf set yields a tree with no levels whose root is the zero hash.
        """
        if not leaves:
            return cls(policy=policy, levels=())

        levels = [tuple(leaves)]
        while len(levels[-1]) > 1:
            level = levels[-1]
            parents = []
            for i in range(0, len(level) - 1, 2):
                parents.append(hash_nodes(level[i], level[i + 1]))
            if len(level) % 2 == 1:
                last = level[-1]
                parents.append(last if policy is OddNodePolicy.CARRY else hash_nodes(last, last))
            levels.append(tuple(parents))

        return cls(policy=policy, levels=tuple(levels))

    @property
    def leaf_count(self) -> int:
        """Number of leaves in the tree."""
        return len(self.levels[0]) if self.levels else 0

    def root(self) -> Bytes32:
        """Root of the tree."""
        return self.levels[-1][0] if self.levels else ZERO_HASH

    def prove(self, index: int) -> MerkleBranch:
        """
        Produce the inclusion branch for the leaf at `index`.

        Raises:
            IndexError: If `index` is not a leaf position.
        """
        if not 0 <= index < self.leaf_count:
            raise IndexError(f"Leaf index {index} out of range for {self.leaf_count} leaves")

        siblings: list[Bytes32] = []
        path_index = 0
        position = index

        for level in self.levels[:-1]:
            sibling_position = position ^ 1
            if sibling_position < len(level):
                if position & 1:
                    path_index |= 1 << len(siblings)
                siblings.append(level[sibling_position])
            elif self.policy is OddNodePolicy.DUPLICATE:
                # Paired with itself, the copy sits on the right.
                siblings.append(level[position])
            position //= 2

        return MerkleBranch(index=path_index, siblings=tuple(siblings))


def merkle_root(leaves: Sequence[Bytes32], policy: OddNodePolicy = OddNodePolicy.CARRY) -> Bytes32:
    """Root of the tree over `leaves` under `policy`."""
    return MerkleTree.from_leaves(leaves, policy).root()


def compute_merkle_root(index: int, leaf: Bytes32, siblings: Sequence[Bytes32]) -> Bytes32:
    """
    Fold `siblings` over `leaf` toward the root.

    At each level an even index puts the running hash on the left,
    an odd index puts it on the right. The index is then halved.
    """
    current = leaf
    for sibling in siblings:
        if index % 2 == 0:
            current = hash_nodes(current, sibling)
        else:
            current = hash_nodes(sibling, current)
        index //= 2
    return current


def verify_merkle_branch(
    index: int,
    leaf: Bytes32,
    siblings: Sequence[Bytes32],
    root: Bytes32,
) -> bool:
    """Whether `leaf` at path `index` reconstructs `root` through `siblings`."""
    return compute_merkle_root(index, leaf, siblings) == root


def carried_path_index(index: int, leaf_count: int) -> int:
    """
    Convert a leaf index into the path index of a carry-policy tree.

    Levels where the node is the carried trailing element of an odd level
    contribute no bit.

    Raises:
        IndexError: If `index` is not a leaf position.
    """
    if not 0 <= index < leaf_count:
        raise IndexError(f"Leaf index {index} out of range for {leaf_count} leaves")

    path_index = 0
    depth = 0
    width = leaf_count
    while width > 1:
        carried = index == width - 1 and width % 2 == 1
        if not carried:
            path_index |= (index & 1) << depth
            depth += 1
        index //= 2
        width = (width + 1) // 2
    return path_index
