"""Fork branch container."""

from __future__ import annotations

from pydantic import Field, model_validator
from typing_extensions import Self

from relay_spec.types import Bytes32, StrictBaseModel, Uint64

from .block_record import BlockRecord


class ForkBranch(StrictBaseModel):
    """
    A linear chain of unconfirmed blocks rooted at the confirmed tip.

    A branch only grows at its tip. It cannot fork internally.
    """

    tip_hash: Bytes32
    """Hash of the newest block."""

    tip_height: Uint64
    """Height of the newest block."""

    tip_chainwork: int = Field(ge=0)
    """Work of every block in the branch, confirmed tip excluded."""

    blocks: tuple[BlockRecord, ...] = Field(min_length=1)
    """Records of the branch, newest first and oldest last."""

    @model_validator(mode="after")
    def _check_tip(self) -> Self:
        tip = self.blocks[0]
        if tip.hash != self.tip_hash or tip.height != self.tip_height:
            raise ValueError("Branch tip fields do not match its newest block.")
        return self

    @classmethod
    def start(cls, record: BlockRecord) -> Self:
        """Open a single-block branch."""
        return cls(
            tip_hash=record.hash,
            tip_height=record.height,
            tip_chainwork=record.work,
            blocks=(record,),
        )

    @property
    def tip(self) -> BlockRecord:
        """Newest block of the branch."""
        return self.blocks[0]

    @property
    def oldest(self) -> BlockRecord:
        """Oldest block of the branch, the next promotion candidate."""
        return self.blocks[-1]

    @property
    def root_hash(self) -> Bytes32:
        """Hash of the block the branch is rooted on."""
        return self.oldest.prev_hash

    def extend(self, record: BlockRecord) -> ForkBranch:
        """Return the branch with `record` appended at the tip."""
        return ForkBranch(
            tip_hash=record.hash,
            tip_height=record.height,
            tip_chainwork=self.tip_chainwork + record.work,
            blocks=(record, *self.blocks),
        )

    def pop_oldest(self) -> tuple[BlockRecord, ForkBranch | None]:
        """
        Detach the oldest block.

        Returns the detached record and the remaining branch, or None when the
        branch held a single block.
        """
        oldest = self.oldest
        if len(self.blocks) == 1:
            return oldest, None
        remaining = self.model_copy(
            update={
                "tip_chainwork": self.tip_chainwork - oldest.work,
                "blocks": self.blocks[:-1],
            }
        )
        return oldest, remaining
