"""Generator pool: exclusive, temporary ownership of `Rand` instances.

Sharing one lock-protected generator would serialize every caller. Instead the
pool hands each caller its own instance for the length of one operation and
takes it back afterwards, so instances (and their warmed-up state) are reused
without ever being visible to two borrowers at once.

Key components:
    - GeneratorPool: acquire/release plus the scoped `borrow()` context manager
    - PoolMode: THREAD_LOCAL (per-thread slot in front of a shared free list)
      or SHARED (free list only)
    - get_pool()/reset_pool(): module-level singleton access

Thread Safety:
    - The per-thread slot is only ever touched by its own thread → no lock
    - The shared free list is guarded by an aiologic.Lock, usable from threads
      and event loops alike
    - A released instance sits in exactly one place (a slot or the free list)
      and is removed from it before being handed out again

Usage:
    >>> from klaw_fastrand.pool import get_pool
    >>> pool = get_pool()
    >>> with pool.borrow() as rng:
    ...     value = rng.next_u32()
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

import aiologic
import msgspec

from klaw_fastrand._config import PoolMode, get_config
from klaw_fastrand._core import Rand

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

__all__ = [
    'GeneratorPool',
    'PoolMode',
    'PoolStats',
    'get_pool',
    'reset_pool',
]

_log = logging.getLogger(__name__)


class PoolStats(msgspec.Struct, frozen=True, gc=False):
    """Statistics snapshot for a generator pool.

    ``created`` counts generators built so far. It only grows when no idle
    instance was reachable: in SHARED mode that is the peak number of
    interleaved borrowers, in THREAD_LOCAL mode at most one per thread plus
    nested borrows.
    """

    mode: PoolMode
    created: int
    shared_idle: int


class GeneratorPool:
    """Unbounded pool of `Rand` instances with exclusive borrowing.

    `acquire()` returns an idle instance or builds a fresh, unseeded one;
    `release()` parks it again. The pool never hands an instance to a second
    borrower before the first has released it.

    Example:
        >>> pool = GeneratorPool()
        >>> rng = pool.acquire()
        >>> try:
        ...     value = rng.next_u32()
        ... finally:
        ...     pool.release(rng)

    Attributes:
        _mode: Parking strategy.
        _factory: Builds new generators when nothing is idle.
        _local: Thread-local one-slot cache (THREAD_LOCAL mode only).
        _free: Shared free list of idle generators.
        _lock: Guards `_free` and `_created`.
        _created: Number of generators built so far.
    """

    __slots__ = ('_created', '_factory', '_free', '_local', '_lock', '_mode')

    def __init__(
        self,
        mode: PoolMode | str = PoolMode.THREAD_LOCAL,
        *,
        factory: Callable[[], Rand] = Rand,
    ) -> None:
        """Initialize an empty pool.

        Args:
            mode: THREAD_LOCAL (default) or SHARED, enum or string.
            factory: Zero-argument callable building an unseeded generator.
        """
        self._mode = PoolMode(mode)
        self._factory = factory
        self._local = threading.local()
        self._free: list[Rand] = []
        self._lock = aiologic.Lock()
        self._created = 0

    @property
    def mode(self) -> PoolMode:
        return self._mode

    def acquire(self) -> Rand:
        """Take exclusive ownership of a generator.

        Returns:
            A generator no other borrower holds. Hand it back with `release()`.
        """
        if self._mode is PoolMode.THREAD_LOCAL:
            rng = getattr(self._local, 'rng', None)
            if rng is not None:
                self._local.rng = None
                return rng

        with self._lock:
            if self._free:
                return self._free.pop()
            self._created += 1
            created = self._created

        _log.debug('fastrand pool grew (created=%d, mode=%s)', created, self._mode.value)
        return self._factory()

    def release(self, rng: Rand) -> None:
        """Return a generator to the pool.

        The caller must not use ``rng`` after this call.
        """
        if self._mode is PoolMode.THREAD_LOCAL and getattr(self._local, 'rng', None) is None:
            self._local.rng = rng
            return

        with self._lock:
            self._free.append(rng)

    @contextmanager
    def borrow(self) -> Iterator[Rand]:
        """Scoped `acquire()`/`release()`; the generator goes back on every exit path.

        Example:
            >>> with get_pool().borrow() as rng:
            ...     value = rng.next_u64()
        """
        rng = self.acquire()
        try:
            yield rng
        finally:
            self.release(rng)

    def stats(self) -> PoolStats:
        """Snapshot of pool counters. Per-thread slots are not counted as idle."""
        with self._lock:
            return PoolStats(mode=self._mode, created=self._created, shared_idle=len(self._free))


# -----------------------------------------------------------------------------
# Module-Level Singleton
# -----------------------------------------------------------------------------

_pool: GeneratorPool | None = None
_pool_lock = threading.Lock()


def get_pool() -> GeneratorPool:
    """Get the global generator pool singleton.

    Uses double-checked locking for thread-safe lazy initialization. The mode
    comes from the active configuration (see `klaw_fastrand.init`).

    Example:
        >>> get_pool() is get_pool()
        True
    """
    global _pool  # noqa: PLW0603
    if _pool is None:
        mode = get_config().pool_mode
        with _pool_lock:
            if _pool is None:
                _pool = GeneratorPool(mode)
    return _pool


def reset_pool(mode: PoolMode | str | None = None) -> GeneratorPool:
    """Replace the global pool with a fresh, empty one.

    Generators still borrowed from the old pool are released back into it and
    then dropped together with it.

    Args:
        mode: Mode for the new pool. None = the active configuration's mode.

    Returns:
        The new global pool.
    """
    global _pool  # noqa: PLW0603
    if mode is None:
        mode = get_config().pool_mode
    new_pool = GeneratorPool(mode)
    with _pool_lock:
        _pool = new_pool
    _log.debug('fastrand pool reset (mode=%s)', new_pool.mode.value)
    return new_pool
