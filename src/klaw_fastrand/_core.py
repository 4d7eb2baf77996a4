"""Core xorshift32 generator.

`Rand` holds a single 32-bit word of state and advances it with the
13/17/5 xorshift triple (https://en.wikipedia.org/wiki/Xorshift). The period
is ``2**32 - 1`` and the output is trivially predictable from one sample:
never use it where security matters, use `secrets` instead.

A `Rand` is NOT thread-safe. Concurrent callers should go through the
module-level functions, which borrow instances from a `GeneratorPool`.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from klaw_fastrand.reduce import U32_MASK, bounded_u32, bounded_u64, bounded_u64_exact

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ['Rand', 'TimeSource', 'seed_from_time']

_log = logging.getLogger(__name__)

type TimeSource = Callable[[], int]


def seed_from_time(nanos: int) -> int:
    """Fold a nanosecond timestamp into a 32-bit seed (high half XOR low half).

    Example:
        >>> seed_from_time((5 << 32) | 3)
        6
    """
    return ((nanos >> 32) ^ nanos) & U32_MASK


class Rand:
    """Pseudorandom xorshift32 generator with lazy self-seeding.

    The state starts at 0, the "unseeded" sentinel. The first draw replaces it
    with a non-zero value folded from ``time_source()``; a non-zero state never
    transitions back to 0.

    Example:
        >>> rng = Rand(1)
        >>> rng.next_u32()
        270369
    """

    __slots__ = ('_state', '_time_source')

    def __init__(self, state: int = 0, *, time_source: TimeSource = time.time_ns) -> None:
        """Create a generator.

        Args:
            state: Initial state. 0 (the default) seeds lazily on first use.
            time_source: Zero-argument callable returning nanoseconds, used for seeding.
        """
        self._state = state & U32_MASK
        self._time_source = time_source

    @property
    def state(self) -> int:
        """Current 32-bit state (0 while unseeded)."""
        return self._state

    def _seed(self) -> int:
        x = 0
        while x == 0:
            x = seed_from_time(self._time_source())
        self._state = x
        _log.debug('fastrand generator seeded (state=%#010x)', x)
        return x

    def next_u32(self) -> int:
        """Advance the state once and return it."""
        x = self._state or self._seed()
        x ^= (x << 13) & U32_MASK
        x ^= x >> 17
        x ^= (x << 5) & U32_MASK
        self._state = x
        return x

    def next_u64(self) -> int:
        """Two draws: the first fills the high 32 bits, the second the low 32 bits."""
        return self.next_u32() << 32 | self.next_u32()

    def bounded_u32(self, max_exclusive: int) -> int:
        """Return a value in ``[0, max_exclusive)``; 0 when ``max_exclusive`` is 0."""
        return bounded_u32(self.next_u32(), max_exclusive)

    def bounded_u64(self, max_exclusive: int) -> int:
        """64-bit bounded draw, bit-compatible with the established output.

        The low 32 bits come from an independent, unreduced draw. See
        `klaw_fastrand.reduce.bounded_u64` for the caveats.
        """
        hi = self.next_u32()
        return bounded_u64(hi, self.next_u32(), max_exclusive)

    def bounded_u64_exact(self, max_exclusive: int) -> int:
        """Return a value in ``[0, max_exclusive)`` reducing a full 64-bit draw."""
        return bounded_u64_exact(self.next_u64(), max_exclusive)

    def uint32s(self, count: int) -> list[int]:
        """Return ``count`` consecutive outputs, same as calling `next_u32` ``count`` times."""
        x = self._state or self._seed()
        out = [0] * count
        for i in range(count):
            x ^= (x << 13) & U32_MASK
            x ^= x >> 17
            x ^= (x << 5) & U32_MASK
            out[i] = x
        self._state = x
        return out

    def __repr__(self) -> str:
        return f'Rand(state={self._state:#010x})'
