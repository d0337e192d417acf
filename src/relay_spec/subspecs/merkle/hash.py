"""Hash helpers shared by the Merkle structures and the header codec."""

import hashlib

from relay_spec.types import Bytes32


def double_sha256(data: bytes) -> Bytes32:
    """Bitcoin's hash function: SHA-256 applied twice."""
    return Bytes32(hashlib.sha256(hashlib.sha256(data).digest()).digest())


def hash_nodes(left: Bytes32, right: Bytes32) -> Bytes32:
    """Hashes two 32-byte nodes together, left node first."""
    return double_sha256(left + right)
