"""
Exception hierarchy for the relay state transition.

Every failure aborts the whole header batch. Nothing is applied partially,
and nothing is retried inside the engine.
"""

from __future__ import annotations

from relay_spec.types import Bytes32


class RelayError(Exception):
    """
    Base exception for all relay transition failures.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class StructuralDecodeError(RelayError):
    """
    Raised when raw bytes cannot be decoded into the expected layout.

    Attributes:
        type_name: The structure being decoded.
        detail: Description of what went wrong.
    """

    def __init__(self, type_name: str, detail: str) -> None:
        self.type_name = type_name
        self.detail = detail
        super().__init__(f"Failed to decode {type_name}: {detail}")


class HeaderValidationError(RelayError):
    """Base class for a header that decodes but breaks a consensus rule."""


class ContinuityError(HeaderValidationError):
    """
    Raised when a header does not point at the tip it is validated against.

    Attributes:
        expected: Hash of the tip being extended.
        actual: Previous-block hash claimed by the header.
    """

    def __init__(self, expected: Bytes32, actual: Bytes32) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Header extends {actual.to_display_hex()}, "
            f"expected tip {expected.to_display_hex()}"
        )


class DifficultyEncodingError(HeaderValidationError):
    """
    Raised when compact bits do not decode to an acceptable target.

    Attributes:
        bits: The offending compact encoding.
        detail: Which rule was broken.
    """

    def __init__(self, bits: int, detail: str) -> None:
        self.bits = bits
        self.detail = detail
        super().__init__(f"Invalid compact bits {bits:#010x}: {detail}")


class ProofOfWorkError(HeaderValidationError):
    """
    Raised when the header hash exceeds the target it claims.

    Attributes:
        block_hash: Hash of the header, internal byte order.
        target: The decoded target.
    """

    def __init__(self, block_hash: Bytes32, target: int) -> None:
        self.block_hash = block_hash
        self.target = target
        super().__init__(
            f"Hash {block_hash.to_display_hex()} is above target {target:064x}"
        )


class DifficultyMismatchError(HeaderValidationError):
    """
    Raised when the header's bits differ from the expected next difficulty.

    Attributes:
        expected: Compact bits required at this height.
        actual: Compact bits carried by the header.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Header bits {actual:#010x} do not match expected {expected:#010x}")


class TimestampError(HeaderValidationError):
    """
    Raised when a header timestamp falls outside the accepted range.

    Attributes:
        timestamp: The header timestamp.
        bound: The bound it violated.
        detail: Which bound was violated.
    """

    def __init__(self, timestamp: int, bound: int, detail: str) -> None:
        self.timestamp = timestamp
        self.bound = bound
        self.detail = detail
        super().__init__(f"Timestamp {timestamp} {detail} {bound}")


class VersionError(HeaderValidationError):
    """
    Raised when a header version is below the accepted minimum.

    Attributes:
        version: The header version.
        minimum: The lowest version accepted.
    """

    def __init__(self, version: int, minimum: int) -> None:
        self.version = version
        self.minimum = minimum
        super().__init__(f"Header version {version} is below {minimum}")


class ForkNotFoundError(RelayError):
    """
    Raised when a header attaches neither to the confirmed tip nor to a branch tip.

    Attributes:
        prev_hash: Previous-block hash claimed by the header.
    """

    def __init__(self, prev_hash: Bytes32) -> None:
        self.prev_hash = prev_hash
        super().__init__(f"No branch tip or confirmed tip matches {prev_hash.to_display_hex()}")


class DuplicateBlockError(RelayError):
    """
    Raised when a header is already tracked by one of the branches.

    Attributes:
        block_hash: Hash of the repeated header.
    """

    def __init__(self, block_hash: Bytes32) -> None:
        self.block_hash = block_hash
        super().__init__(f"Block {block_hash.to_display_hex()} is already tracked")


class EmptyBatchError(RelayError):
    """Raised when a transition is requested without any header."""

    def __init__(self) -> None:
        super().__init__("Header batch is empty")


class PromotionPolicyViolation(RelayError):
    """
    Raised when a claimed resulting state differs from the recomputed one.

    Attributes:
        detail: Which part of the state disagrees.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Claimed state rejected: {detail}")
