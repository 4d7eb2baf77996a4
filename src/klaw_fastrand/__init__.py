"""Fast, contention-free pseudorandom numbers for multi-threaded code.

A 32-bit xorshift generator that seeds itself from the clock, pooled so that
any number of threads can draw numbers without sharing state or a global lock.
Built for high-frequency, low-stakes decisions: sampling, jitter, load shedding.

NOT cryptographically secure and NOT reproducible from a caller-supplied seed.
Use `secrets` wherever security matters.

Functions (thread-safe):
    next_u32(), next_u64(): Raw 32/64-bit draws.
    bounded_u32(max_exclusive): Draw in [0, max_exclusive), 0 when max_exclusive == 0.
    bounded_u64(max_exclusive): 64-bit bounded draw, compatible output (low word unreduced).
    bounded_u64_exact(max_exclusive): Correct 64-bit bounded draw.
    int31(), int31n(n), int63(), intn(n): Signed variants.
    fill_bytes(buffer): Fill a writable buffer in place.

    # Python random API compatible functions:
    random(), uniform(a, b), randint(a, b), choice(seq), shuffle(x), randbytes(n)

Classes:
    Rand: Single-owner generator (not thread-safe).
    GeneratorPool: Exclusive borrowing of Rand instances.
"""

from klaw_fastrand._config import FastrandConfig, PoolMode, get_config, init
from klaw_fastrand._core import Rand, seed_from_time
from klaw_fastrand._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)
from klaw_fastrand.bulk import fill_bytes
from klaw_fastrand.compat import choice, randbytes, randint, random, shuffle, uniform
from klaw_fastrand.errors import (
    BufferNotWritable,
    BufferNotWritableError,
    EmptySequence,
    EmptySequenceError,
    InvalidRange,
    InvalidRangeError,
)
from klaw_fastrand.facade import (
    bounded_u32,
    bounded_u64,
    bounded_u64_exact,
    int31,
    int31n,
    int63,
    intn,
    next_u32,
    next_u64,
)
from klaw_fastrand.pool import GeneratorPool, PoolStats, get_pool, reset_pool

__all__ = [
    # Errors - struct variants
    'BufferNotWritable',
    # Errors - exception variants
    'BufferNotWritableError',
    'EmptySequence',
    'EmptySequenceError',
    # Config
    'FastrandConfig',
    # Pool
    'GeneratorPool',
    'InvalidRange',
    'InvalidRangeError',
    'PoolMode',
    'PoolStats',
    # Core
    'Rand',
    # Logging
    'add_log_hook',
    # Thread-safe operations
    'bounded_u32',
    'bounded_u64',
    'bounded_u64_exact',
    # Python random API compatible functions
    'choice',
    'clear_log_hooks',
    'configure_logging',
    'fill_bytes',
    'get_config',
    'get_logger',
    'get_pool',
    'init',
    'int31',
    'int31n',
    'int63',
    'intn',
    'next_u32',
    'next_u64',
    'randbytes',
    'randint',
    'random',
    'remove_log_hook',
    'reset_pool',
    'seed_from_time',
    'shuffle',
    'uniform',
]
