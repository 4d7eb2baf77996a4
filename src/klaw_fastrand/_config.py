"""Configuration: PoolMode enum, FastrandConfig, and initialization."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from enum import StrEnum

from klaw_fastrand._logging import configure_logging

__all__ = [
    'FastrandConfig',
    'PoolMode',
    'get_config',
    'init',
]

_log = logging.getLogger(__name__)


class PoolMode(StrEnum):
    """Where a generator pool parks released generators."""

    THREAD_LOCAL = 'thread_local'
    SHARED = 'shared'


@dataclass(frozen=True)
class FastrandConfig:
    """Configuration for klaw-fastrand.

    Attributes:
        pool_mode: Parking strategy of the global generator pool.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
    """

    pool_mode: PoolMode = PoolMode.THREAD_LOCAL
    log_level: str | None = None


# Global configuration (set by init() or lazily by get_config())
_config: FastrandConfig | None = None
_config_lock = threading.Lock()


def _detect_pool_mode() -> PoolMode:
    """Detect the pool mode from the environment.

    Reads KLAW_FASTRAND_POOL ("thread_local" or "shared", case-insensitive).
    Unset or unknown values fall back to THREAD_LOCAL.
    """
    env_mode = os.environ.get('KLAW_FASTRAND_POOL', '').strip().lower().replace('-', '_')
    if not env_mode:
        return PoolMode.THREAD_LOCAL
    try:
        return PoolMode(env_mode)
    except ValueError:
        logging.warning("Unknown KLAW_FASTRAND_POOL value '%s', defaulting to thread_local", env_mode)
        return PoolMode.THREAD_LOCAL


def init(
    pool_mode: PoolMode | str | None = None,
    log_level: str | None = None,
) -> FastrandConfig:
    """Initialize klaw-fastrand with the specified configuration.

    Installs a fresh global generator pool in the resolved mode.

    Args:
        pool_mode: Pool parking strategy. Auto-detected if None.
            Can be PoolMode enum or string ("thread_local", "shared").
        log_level: Logging level ("DEBUG", "INFO", etc.). None = leave logging alone.

    Returns:
        The FastrandConfig that was set.

    Example:
        ```python
        import klaw_fastrand

        # Auto-detect from KLAW_FASTRAND_POOL
        klaw_fastrand.init()

        # Explicit configuration
        klaw_fastrand.init(pool_mode='shared', log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603
    from klaw_fastrand.pool import reset_pool

    resolved_mode = _detect_pool_mode() if pool_mode is None else PoolMode(pool_mode.lower())

    config = FastrandConfig(pool_mode=resolved_mode, log_level=log_level)
    with _config_lock:
        _config = config

    if log_level is not None:
        configure_logging(log_level)

    reset_pool(resolved_mode)
    _log.debug('fastrand initialized (pool_mode=%s)', resolved_mode.value)
    return config


def get_config() -> FastrandConfig:
    """Get the current configuration.

    Calling `init()` first is optional: the defaults, with the environment
    applied, are used on first access.

    Returns:
        The current FastrandConfig.
    """
    global _config  # noqa: PLW0603
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = FastrandConfig(pool_mode=_detect_pool_mode())
    return _config
