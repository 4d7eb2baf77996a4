"""Tests for the generator pool."""

from __future__ import annotations

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import msgspec
import pytest
from klaw_fastrand import GeneratorPool, PoolMode, PoolStats, Rand, get_pool, init, reset_pool


class OwnershipCheckingRand(Rand):
    """Rand that fails loudly when two borrowers hold it at once."""

    __slots__ = ('_holders',)

    def __init__(self) -> None:
        super().__init__()
        self._holders: list[int] = []

    def claim(self) -> None:
        self._holders.append(threading.get_ident())
        if len(self._holders) != 1:
            msg = f'generator shared by threads {self._holders}'
            raise AssertionError(msg)

    def unclaim(self) -> None:
        self._holders.remove(threading.get_ident())

    def next_u32(self) -> int:
        if self._holders != [threading.get_ident()]:
            msg = f'generator used by {threading.get_ident()} while held by {self._holders}'
            raise AssertionError(msg)
        return super().next_u32()


class TestPoolMode:
    """Tests for the PoolMode enum."""

    def test_values(self) -> None:
        assert PoolMode.THREAD_LOCAL.value == 'thread_local'
        assert PoolMode.SHARED.value == 'shared'

    def test_pool_accepts_strings(self) -> None:
        assert GeneratorPool('shared').mode is PoolMode.SHARED

    def test_invalid_mode_raises(self) -> None:
        with pytest.raises(ValueError):
            GeneratorPool('bogus')


@pytest.mark.parametrize('mode', list(PoolMode))
class TestAcquireRelease:
    """Acquire/release semantics common to both modes."""

    def test_acquire_builds_unseeded_generator(self, mode: PoolMode) -> None:
        """An empty pool builds a fresh generator with the 0 sentinel state."""
        pool = GeneratorPool(mode)
        rng = pool.acquire()
        assert isinstance(rng, Rand)
        assert rng.state == 0
        assert pool.stats().created == 1

    def test_released_generator_is_reused(self, mode: PoolMode) -> None:
        """Release then acquire hands back the same instance without growing."""
        pool = GeneratorPool(mode)
        rng = pool.acquire()
        rng.next_u32()
        pool.release(rng)
        assert pool.acquire() is rng
        assert pool.stats().created == 1

    def test_outstanding_borrows_are_distinct(self, mode: PoolMode) -> None:
        """Two simultaneous borrowers never share an instance."""
        pool = GeneratorPool(mode)
        first = pool.acquire()
        second = pool.acquire()
        assert first is not second
        assert pool.stats().created == 2

    def test_factory_is_used(self, mode: PoolMode) -> None:
        """Injected factories build the pooled generators."""
        pool = GeneratorPool(mode, factory=lambda: Rand(1))
        assert pool.acquire().next_u32() == 270369

    def test_borrow_releases_on_exit(self, mode: PoolMode) -> None:
        """The scoped borrow returns the generator afterwards."""
        pool = GeneratorPool(mode)
        with pool.borrow() as rng:
            pass
        assert pool.acquire() is rng

    def test_borrow_releases_on_exception(self, mode: PoolMode) -> None:
        """The generator goes back even when the block raises."""
        pool = GeneratorPool(mode)
        with pytest.raises(RuntimeError), pool.borrow() as rng:
            raise RuntimeError('boom')
        assert pool.acquire() is rng

    def test_generator_state_survives_reuse(self, mode: PoolMode) -> None:
        """A reused generator continues its sequence instead of reseeding."""
        pool = GeneratorPool(mode, factory=lambda: Rand(1))
        with pool.borrow() as rng:
            rng.next_u32()
        with pool.borrow() as rng:
            assert rng.state == 270369


class TestParking:
    """Where released generators end up."""

    def test_thread_local_fills_slot_first(self) -> None:
        """The first release goes to the thread's slot, the next to the shared list."""
        pool = GeneratorPool(PoolMode.THREAD_LOCAL)
        a = pool.acquire()
        b = pool.acquire()
        pool.release(a)
        assert pool.stats().shared_idle == 0
        pool.release(b)
        assert pool.stats().shared_idle == 1

    def test_shared_mode_uses_free_list_only(self) -> None:
        pool = GeneratorPool(PoolMode.SHARED)
        a = pool.acquire()
        b = pool.acquire()
        pool.release(a)
        pool.release(b)
        assert pool.stats().shared_idle == 2

    def test_thread_slot_invisible_to_other_threads(self) -> None:
        """A generator parked in one thread's slot is not handed to another thread."""
        pool = GeneratorPool(PoolMode.THREAD_LOCAL)
        parked: list[Rand] = []

        def park() -> None:
            rng = pool.acquire()
            parked.append(rng)
            pool.release(rng)

        t = threading.Thread(target=park)
        t.start()
        t.join()

        assert pool.acquire() is not parked[0]
        assert pool.stats().created == 2

    def test_shared_generators_cross_threads(self) -> None:
        """In SHARED mode another thread reuses a released generator."""
        pool = GeneratorPool(PoolMode.SHARED)
        rng = pool.acquire()
        pool.release(rng)
        got: list[Rand] = []

        t = threading.Thread(target=lambda: got.append(pool.acquire()))
        t.start()
        t.join()

        assert got[0] is rng
        assert pool.stats().created == 1


class TestPoolStats:
    """Tests for PoolStats snapshots."""

    def test_empty_pool(self) -> None:
        stats = GeneratorPool().stats()
        assert stats == PoolStats(mode=PoolMode.THREAD_LOCAL, created=0, shared_idle=0)

    def test_stats_is_frozen(self) -> None:
        stats = GeneratorPool().stats()
        with pytest.raises(AttributeError):
            stats.created = 5  # type: ignore[misc]

    def test_stats_serializable(self) -> None:
        """Stats encode as plain JSON for diagnostics endpoints."""
        encoded = msgspec.json.encode(GeneratorPool('shared').stats())
        assert msgspec.json.decode(encoded) == {'mode': 'shared', 'created': 0, 'shared_idle': 0}

    def test_created_counts_one_per_thread_in_thread_local_mode(self) -> None:
        """Non-overlapping borrows from separate threads each build a generator."""
        pool = GeneratorPool(PoolMode.THREAD_LOCAL)
        for _ in range(3):
            t = threading.Thread(target=lambda: pool.release(pool.acquire()))
            t.start()
            t.join()
        assert pool.stats().created == 3

    def test_created_is_peak_borrowers_in_shared_mode(self) -> None:
        pool = GeneratorPool(PoolMode.SHARED)
        for _ in range(3):
            t = threading.Thread(target=lambda: pool.release(pool.acquire()))
            t.start()
            t.join()
        assert pool.stats().created == 1

    def test_created_counts_nested_borrows(self) -> None:
        pool = GeneratorPool(PoolMode.THREAD_LOCAL)
        with pool.borrow(), pool.borrow():
            pass
        with pool.borrow(), pool.borrow():
            pass
        assert pool.stats().created == 2


@pytest.mark.parametrize('mode', list(PoolMode))
class TestExclusivityUnderContention:
    """No two concurrently active borrowers ever touch the same generator."""

    def test_single_owner(self, mode: PoolMode) -> None:
        pool = GeneratorPool(mode, factory=OwnershipCheckingRand)

        def worker() -> None:
            for _ in range(2_000):
                rng = pool.acquire()
                assert isinstance(rng, OwnershipCheckingRand)
                rng.claim()
                try:
                    for _ in range(3):
                        rng.next_u32()
                finally:
                    rng.unclaim()
                    pool.release(rng)

        with ThreadPoolExecutor(max_workers=16) as executor:
            futures = [executor.submit(worker) for _ in range(32)]
            for future in futures:
                future.result()

        assert 1 <= pool.stats().created <= 32


class TestGlobalPool:
    """Tests for get_pool() and reset_pool()."""

    def test_returns_singleton(self) -> None:
        assert get_pool() is get_pool()

    def test_default_mode(self) -> None:
        assert get_pool().mode is PoolMode.THREAD_LOCAL

    def test_mode_from_environment(self) -> None:
        with patch.dict(os.environ, {'KLAW_FASTRAND_POOL': 'shared'}):
            assert get_pool().mode is PoolMode.SHARED

    def test_reset_replaces_pool(self) -> None:
        old = get_pool()
        new = reset_pool('shared')
        assert new is not old
        assert get_pool() is new
        assert new.mode is PoolMode.SHARED

    def test_reset_uses_configured_mode(self) -> None:
        init(pool_mode='shared')
        assert reset_pool().mode is PoolMode.SHARED

    def test_concurrent_first_access_single_instance(self) -> None:
        """Racing first calls all observe the same pool."""
        with ThreadPoolExecutor(max_workers=8) as executor:
            pools = list(executor.map(lambda _: get_pool(), range(32)))
        assert all(p is pools[0] for p in pools)
