"""Bulk byte fill.

Writes generator output straight into a caller-owned buffer. Words are
serialized least-significant byte first, so the bytes are the same on every
platform and identical between the short (<= 4 bytes) and the long path.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

from klaw_fastrand import facade
from klaw_fastrand.errors import BufferNotWritable
from klaw_fastrand.pool import get_pool

if TYPE_CHECKING:
    from collections.abc import Buffer

__all__ = ['fill_bytes']

# Words packed per struct call; bounds the temporary int list and argument tuple.
_CHUNK_WORDS = 1024


def fill_bytes(buffer: Buffer) -> int:
    """Fill ``buffer`` with pseudorandom bytes in place.

    Safe for concurrent use. Any C-contiguous writable buffer works
    (bytearray, memoryview, array.array, ...); it is treated as flat bytes.

    Args:
        buffer: Destination, overwritten entirely.

    Returns:
        Number of bytes written, always the buffer's size in bytes.

    Raises:
        BufferNotWritableError: If the buffer is read-only.
        TypeError: If ``buffer`` does not support the buffer protocol.

    Example:
        >>> buf = bytearray(16)
        >>> fill_bytes(buf)
        16
    """
    with memoryview(buffer) as view:
        if view.readonly:
            raise BufferNotWritable(type(buffer).__name__).to_exception()
        with view.cast('B') as out:
            return _fill(out)


def _fill(out: memoryview) -> int:
    size = out.nbytes
    if size == 0:
        return 0
    if size <= 4:
        out[:] = facade.next_u32().to_bytes(4, 'little')[:size]
        return size

    words, tail = divmod(size, 4)
    with get_pool().borrow() as rng:
        for start in range(0, words, _CHUNK_WORDS):
            n = min(_CHUNK_WORDS, words - start)
            struct.pack_into(f'<{n}I', out, start * 4, *rng.uint32s(n))
        if tail:
            out[words * 4 :] = rng.next_u32().to_bytes(4, 'little')[:tail]
    return size
