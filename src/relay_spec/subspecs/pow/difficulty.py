"""
Difficulty Engine

Bitcoin stores the proof-of-work target in a 32-bit "compact" form,
a floating-point-like encoding with a one-byte exponent and a
three-byte mantissa:

    bits = exponent << 24 | mantissa
    target = mantissa * 256 ** (exponent - 3)

Bit 0x00800000 of the mantissa is a sign bit. Targets are never negative,
so a set sign bit is rejected.
"""

from __future__ import annotations

from typing import Final

from relay_spec.subspecs.chain import ChainParams, active_params
from relay_spec.subspecs.errors import DifficultyEncodingError

MANTISSA_MASK: Final = 0x007FFFFF
"""Mantissa bits of a compact encoding, sign bit excluded."""

SIGN_BIT: Final = 0x00800000
"""Sign bit of the compact mantissa."""


def decode_compact(bits: int) -> int:
    """
    Expand a compact encoding into the full target.

    Mirrors Bitcoin Core's `arith_uint256::SetCompact`.

    Raises:
        DifficultyEncodingError: If the encoding is negative or overflows 256 bits.
    """
    exponent = bits >> 24
    mantissa = bits & MANTISSA_MASK

    if bits & SIGN_BIT:
        raise DifficultyEncodingError(bits, "negative target")

    # Small exponents shift the mantissa right, dropping whole bytes.
    if exponent <= 3:
        return mantissa >> (8 * (3 - exponent))

    overflow = mantissa != 0 and (
        exponent > 34
        or (mantissa > 0xFF and exponent > 33)
        or (mantissa > 0xFFFF and exponent > 32)
    )
    if overflow:
        raise DifficultyEncodingError(bits, "target overflows 256 bits")

    return mantissa << (8 * (exponent - 3))


def bits_to_target(bits: int, params: ChainParams | None = None) -> int:
    """
    Decode compact bits into a target a header may legitimately claim.

    Args:
        bits: Compact encoding carried by a header.
        params: Network whose proof-of-work ceiling applies. Defaults to the active network.

    Returns:
        The positive target, at most the proof-of-work ceiling.

    Raises:
        DifficultyEncodingError: If the encoding is invalid or zero or above the ceiling.
    """
    params = params or active_params()

    target = decode_compact(bits)
    if target == 0:
        raise DifficultyEncodingError(bits, "target is zero")
    if target > params.pow_limit:
        raise DifficultyEncodingError(bits, "target above proof-of-work limit")
    return target


def target_to_bits(target: int) -> int:
    """
    Encode a target in compact form.

    Mirrors Bitcoin Core's `arith_uint256::GetCompact`. Only the three most
    significant bytes survive, so precision is truncated toward zero.
    """
    if target == 0:
        return 0

    size = (target.bit_length() + 7) // 8
    if size <= 3:
        mantissa = target << (8 * (3 - size))
    else:
        mantissa = target >> (8 * (size - 3))

    # A mantissa with its top bit set would read back as negative.
    if mantissa & SIGN_BIT:
        mantissa >>= 8
        size += 1

    return (size << 24) | mantissa


def is_retarget_height(height: int, params: ChainParams | None = None) -> bool:
    """Whether the block following `height` opens a new difficulty epoch."""
    params = params or active_params()
    return (height + 1) % params.difficulty_adjustment_interval == 0


def next_target(
    height: int,
    prev_bits: int,
    tip_timestamp: int,
    epoch_start: int,
    params: ChainParams | None = None,
) -> int:
    """
    Compute the compact bits required of the block after `height`.

    Outside of a retarget boundary the previous bits carry forward unchanged.
    On a boundary the target scales with the time the epoch actually took.

    Args:
        height: Height of the tip being extended.
        prev_bits: Compact bits of that tip.
        tip_timestamp: Timestamp of that tip.
        epoch_start: Timestamp of the first block of the tip's difficulty epoch.
        params: Network parameters. Defaults to the active network.

    Returns:
        Compact bits the next header must carry.
    """
    params = params or active_params()

    if not is_retarget_height(height, params):
        return prev_bits

    # Limit the adjustment step to a factor of four either way.
    timespan = params.target_timespan
    actual = min(max(tip_timestamp - epoch_start, timespan // 4), timespan * 4)

    new_target = bits_to_target(prev_bits, params) * actual // timespan
    return target_to_bits(min(new_target, params.pow_limit))


def block_work(target: int) -> int:
    """
    Expected number of hashes needed to meet `target`.

    Bitcoin Core's `GetBlockProof`: `2**256 // (target + 1)`.
    """
    return (1 << 256) // (target + 1)
