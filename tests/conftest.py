"""Pytest configuration for klaw-fastrand tests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import klaw_fastrand._config as config_module
import klaw_fastrand.pool as pool_module
import pytest
import structlog
from klaw_fastrand import GeneratorPool, PoolMode, Rand, clear_log_hooks

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture(autouse=True)
def fresh_globals(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Give every test an unset config, no global pool, and no log hooks."""
    monkeypatch.delenv('KLAW_FASTRAND_POOL', raising=False)
    monkeypatch.setattr(config_module, '_config', None)
    monkeypatch.setattr(pool_module, '_pool', None)
    clear_log_hooks()
    yield
    clear_log_hooks()


@pytest.fixture
def restore_root_logger() -> Generator[None]:
    """Undo configure_logging()'s changes to the root logger.

    Only the structlog handlers are removed; pytest manages its own capture handlers.
    """
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def install_pool(monkeypatch: pytest.MonkeyPatch) -> Callable[..., GeneratorPool]:
    """Install a global pool whose generators all start from a fixed state.

    Example:
        ```python
        def test_something(install_pool):
            pool = install_pool(state=1)
            assert klaw_fastrand.next_u32() == 270369
        ```
    """

    def _install(state: int = 1, mode: PoolMode | str = PoolMode.THREAD_LOCAL) -> GeneratorPool:
        pool = GeneratorPool(mode, factory=lambda: Rand(state))
        monkeypatch.setattr(pool_module, '_pool', pool)
        return pool

    return _install
