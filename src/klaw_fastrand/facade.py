"""Thread-safe module-level operations.

Each call borrows one generator from the global pool, uses it, and gives it
back. They are safe to call from any number of threads without external
synchronization; outputs of concurrent callers have no mutual ordering.
"""

from __future__ import annotations

from klaw_fastrand import reduce
from klaw_fastrand.pool import get_pool
from klaw_fastrand.reduce import INT31_MAX, INT63_MASK, to_int32, to_int64

__all__ = [
    'bounded_u32',
    'bounded_u64',
    'bounded_u64_exact',
    'int31',
    'int31n',
    'int63',
    'intn',
    'next_u32',
    'next_u64',
]


def next_u32() -> int:
    """Return a pseudorandom integer in ``[0, 2**32)``."""
    pool = get_pool()
    rng = pool.acquire()
    try:
        return rng.next_u32()
    finally:
        pool.release(rng)


def next_u64() -> int:
    """Return a pseudorandom integer in ``[0, 2**64)``."""
    pool = get_pool()
    rng = pool.acquire()
    try:
        return rng.next_u64()
    finally:
        pool.release(rng)


def bounded_u32(max_exclusive: int) -> int:
    """Return a pseudorandom integer in ``[0, max_exclusive)``.

    ``max_exclusive`` is taken modulo ``2**32``; 0 always yields 0.
    """
    return reduce.bounded_u32(next_u32(), max_exclusive)


def bounded_u64(max_exclusive: int) -> int:
    """64-bit bounded draw, bit-compatible with the established output.

    Only the high word is range-reduced; the low 32 bits are a raw draw. For
    ``max_exclusive >= 2**32`` the result stays below the bound but is not
    uniform; below ``2**32`` it can exceed the bound. Use `bounded_u64_exact`
    for a correct reduction.
    """
    pool = get_pool()
    rng = pool.acquire()
    try:
        return rng.bounded_u64(max_exclusive)
    finally:
        pool.release(rng)


def bounded_u64_exact(max_exclusive: int) -> int:
    """Return a pseudorandom integer in ``[0, max_exclusive)`` for any 64-bit bound."""
    pool = get_pool()
    rng = pool.acquire()
    try:
        return rng.bounded_u64_exact(max_exclusive)
    finally:
        pool.release(rng)


def int31() -> int:
    """Return `next_u32` reinterpreted as a signed 32-bit integer."""
    return to_int32(next_u32())


def int31n(n: int) -> int:
    """Return a pseudorandom integer in ``[0, n)`` for ``0 < n < 2**31``.

    ``n`` wraps to 32 bits like a fixed-width cast; out-of-range values do not
    raise, they produce the correspondingly wrapped result.
    """
    return to_int32(bounded_u32(n))


def int63() -> int:
    """Return a pseudorandom non-negative integer in ``[0, 2**63)``."""
    return next_u64() & INT63_MASK


def intn(n: int) -> int:
    """Return a pseudorandom integer in ``[0, n)``.

    Bounds up to ``2**31 - 1`` use the 32-bit path, larger ones `bounded_u64`
    (and inherit its caveats).
    """
    if n <= INT31_MAX:
        return int31n(n)
    return to_int64(bounded_u64(n))
