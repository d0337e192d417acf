"""Validity interval supplied by the hosting ledger."""

from pydantic import model_validator
from typing_extensions import Self

from relay_spec.types import StrictBaseModel, Uint64


class ValidityInterval(StrictBaseModel):
    """
    Time bounds within which the hosting ledger guarantees the transition executes.

    The engine never reads a clock. Both bounds are seconds since the Unix epoch.
    """

    lower: Uint64
    """Earliest time the transition may execute. Stamped on accepted blocks."""

    upper: Uint64
    """Latest time the transition may execute. Bounds future header timestamps."""

    @model_validator(mode="after")
    def _check_bounds(self) -> Self:
        if self.lower > self.upper:
            raise ValueError(f"lower bound {self.lower} exceeds upper bound {self.upper}")
        return self
