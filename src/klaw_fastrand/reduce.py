"""Multiply-high range reduction and fixed-width integer casts.

Maps raw generator words into ``[0, max)`` without division or modulo
(see https://lemire.me/blog/2016/06/27/a-fast-alternative-to-the-modulo-reduction/).
The result is biased toward lower values by an amount inversely proportional to
``2**32 / max``; that bias is the price of the speed.

Python integers never overflow, so every operation here masks explicitly to
get the 32/64-bit wrap-around a fixed-width implementation would have.
"""

from __future__ import annotations

__all__ = [
    'INT31_MAX',
    'INT63_MASK',
    'U32_MASK',
    'U64_MASK',
    'bounded_u32',
    'bounded_u64',
    'bounded_u64_exact',
    'to_int32',
    'to_int64',
]

U32_MASK = 0xFFFF_FFFF
U64_MASK = 0xFFFF_FFFF_FFFF_FFFF
INT31_MAX = (1 << 31) - 1
INT63_MASK = (1 << 63) - 1


def bounded_u32(raw: int, max_exclusive: int) -> int:
    """Reduce a raw 32-bit word into ``[0, max_exclusive)``.

    ``max_exclusive == 0`` yields 0: the product is zero, no division happens.

    Example:
        >>> bounded_u32(0xFFFF_FFFF, 10)
        9
        >>> bounded_u32(12345, 0)
        0
    """
    return ((raw & U32_MASK) * (max_exclusive & U32_MASK)) >> 32


def bounded_u64(hi_raw: int, lo_raw: int, max_exclusive: int) -> int:
    """Combine two raw words into a value bounded by ``max_exclusive``.

    Only the high word is reduced, against the high 32 bits of the bound.
    The low word is passed through untouched, so the result is not uniform
    and, for bounds below ``2**32``, not even guaranteed to be below the bound.
    Kept bit-compatible with the established output; use
    `bounded_u64_exact` when correctness matters more than compatibility.
    """
    max_exclusive &= U64_MASK
    return bounded_u32(hi_raw, max_exclusive >> 32) << 32 | (lo_raw & U32_MASK)


def bounded_u64_exact(raw: int, max_exclusive: int) -> int:
    """Reduce a raw 64-bit word into ``[0, max_exclusive)`` with a 128-bit multiply-high."""
    return ((raw & U64_MASK) * (max_exclusive & U64_MASK)) >> 64


def to_int32(value: int) -> int:
    """Reinterpret the low 32 bits of ``value`` as a two's-complement integer."""
    value &= U32_MASK
    return value - (1 << 32) if value > INT31_MAX else value


def to_int64(value: int) -> int:
    """Reinterpret the low 64 bits of ``value`` as a two's-complement integer."""
    value &= U64_MASK
    return value - (1 << 64) if value > INT63_MASK else value
