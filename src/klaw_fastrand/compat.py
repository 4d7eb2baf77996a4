"""Drop-in helpers shaped like the stdlib `random` module.

Same call signatures as `random.random`, `random.randint` and friends, backed by
the pooled xorshift generators. Unlike the raw `bounded_*` operations these
use the exact 64-bit reduction for spans wider than 32 bits, so every result
lies inside the requested range.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from klaw_fastrand import facade
from klaw_fastrand.bulk import fill_bytes
from klaw_fastrand.errors import EmptySequence, InvalidRange
from klaw_fastrand.pool import get_pool
from klaw_fastrand.reduce import U32_MASK

if TYPE_CHECKING:
    from collections.abc import MutableSequence, Sequence

    from klaw_fastrand._core import Rand

__all__ = [
    'choice',
    'randbytes',
    'randint',
    'random',
    'shuffle',
    'uniform',
]

_U64_SPAN = 1 << 64
_FLOAT_SCALE = 2.0**-53


def random() -> float:
    """Return a random float in ``[0.0, 1.0)`` with 53 bits of precision."""
    return (facade.next_u64() >> 11) * _FLOAT_SCALE


def uniform(a: float, b: float) -> float:
    """Return a random float N such that ``a <= N <= b`` (or ``b <= N <= a``)."""
    return a + (b - a) * random()


def randint(a: int, b: int) -> int:
    """Return a random integer N such that ``a <= N <= b``.

    Raises:
        InvalidRangeError: If ``a > b`` or the range holds more than ``2**64`` values.
    """
    if a > b:
        raise InvalidRange(a, b, 'empty range').to_exception()
    span = b - a + 1
    if span > _U64_SPAN:
        raise InvalidRange(a, b, 'span exceeds 2**64').to_exception()
    if span == _U64_SPAN:
        return a + facade.next_u64()
    if span <= U32_MASK:
        return a + facade.bounded_u32(span)
    return a + facade.bounded_u64_exact(span)


def choice[T](seq: Sequence[T]) -> T:
    """Return a random element from the non-empty sequence ``seq``.

    Raises:
        EmptySequenceError: If ``seq`` is empty.
    """
    if not seq:
        raise EmptySequence().to_exception()
    return seq[randint(0, len(seq) - 1)]


def _below(rng: Rand, n: int) -> int:
    if n <= U32_MASK:
        return rng.bounded_u32(n)
    return rng.bounded_u64_exact(n)


def shuffle(x: MutableSequence[Any]) -> None:
    """Shuffle ``x`` in place (Fisher-Yates), borrowing one generator for the whole pass."""
    with get_pool().borrow() as rng:
        for i in reversed(range(1, len(x))):
            j = _below(rng, i + 1)
            x[i], x[j] = x[j], x[i]


def randbytes(n: int) -> bytes:
    """Return ``n`` random bytes.

    Raises:
        ValueError: If ``n`` is negative.
    """
    if n < 0:
        msg = f'Number of bytes must be non-negative, got {n}'
        raise ValueError(msg)
    buf = bytearray(n)
    fill_bytes(buf)
    return bytes(buf)
