"""
Merkle Accumulator

An append-only summary of the confirmed block history.

Slot `i` is either empty or the root of exactly `2**i` consecutive leaves,
like the bits of a binary counter. Appending a leaf behaves like adding one:
occupied slots are combined and carried upward until an empty slot absorbs
the carry.

    leaves:  a b c d e
    slot 0:  e
    slot 1:  (empty)
    slot 2:  H(H(a, b), H(c, d))

The root folds occupied slots from the lowest index to the highest, each
higher slot on the left. For any leaf count this equals the root of a static
carry-policy tree over the same leaves, which is what inclusion proofs are
built against.
"""

from __future__ import annotations

from collections.abc import Iterable

from typing_extensions import Self

from relay_spec.types import ZERO_HASH, Bytes32, StrictBaseModel

from .hash import hash_nodes


class MerkleAccumulator(StrictBaseModel):
    """Carry-propagating accumulator over confirmed block hashes."""

    slots: tuple[Bytes32 | None, ...] = ()
    """Slot `i` summarises `2**i` leaves, or is empty."""

    @classmethod
    def from_leaves(cls, leaves: Iterable[Bytes32]) -> Self:
        """Build an accumulator by appending every leaf in order."""
        accumulator = cls()
        for leaf in leaves:
            accumulator = accumulator.append(leaf)
        return accumulator

    @property
    def leaf_count(self) -> int:
        """Number of leaves appended so far."""
        return sum(1 << i for i, slot in enumerate(self.slots) if slot is not None)

    def append(self, leaf: Bytes32) -> Self:
        """Return a new accumulator with `leaf` appended."""
        slots = list(self.slots)
        carry = leaf

        for i, occupant in enumerate(slots):
            if occupant is None:
                slots[i] = carry
                return self.model_copy(update={"slots": tuple(slots)})
            # Combine with the occupant, which always covers the earlier leaves.
            carry = hash_nodes(occupant, carry)
            slots[i] = None

        slots.append(carry)
        return self.model_copy(update={"slots": tuple(slots)})

    def root(self) -> Bytes32:
        """Fold the occupied slots into the published root."""
        acc: Bytes32 | None = None
        for slot in self.slots:
            if slot is None:
                continue
            acc = slot if acc is None else hash_nodes(slot, acc)
        return ZERO_HASH if acc is None else acc
