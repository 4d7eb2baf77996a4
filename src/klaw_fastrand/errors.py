"""Error types: dual struct+exception for Result and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'BufferNotWritable',
    'BufferNotWritableError',
    'EmptySequence',
    'EmptySequenceError',
    'InvalidRange',
    'InvalidRangeError',
]


# --- Buffer Errors ---


class BufferNotWritable(msgspec.Struct, frozen=True, gc=False):
    """Destination buffer is read-only - struct variant."""

    type_name: str

    def to_exception(self) -> BufferNotWritableError:
        """Convert to exception for raise-based code."""
        return BufferNotWritableError(self.type_name)


class BufferNotWritableError(TypeError):
    """Destination buffer is read-only - exception variant."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f'Buffer of type {type_name!r} is read-only')

    def to_struct(self) -> BufferNotWritable:
        """Convert to struct for Result-based code."""
        return BufferNotWritable(self.type_name)


# --- Sampling Errors ---


class EmptySequence(msgspec.Struct, frozen=True, gc=False):
    """Cannot pick from an empty sequence - struct variant."""

    def to_exception(self) -> EmptySequenceError:
        """Convert to exception for raise-based code."""
        return EmptySequenceError()


class EmptySequenceError(IndexError):
    """Cannot pick from an empty sequence - exception variant."""

    def __init__(self) -> None:
        super().__init__('Cannot choose from an empty sequence')

    def to_struct(self) -> EmptySequence:
        """Convert to struct for Result-based code."""
        return EmptySequence()


class InvalidRange(msgspec.Struct, frozen=True, gc=False):
    """Integer range is empty or too wide - struct variant."""

    low: int
    high: int
    reason: str | None = None

    def to_exception(self) -> InvalidRangeError:
        """Convert to exception for raise-based code."""
        return InvalidRangeError(self.low, self.high, self.reason)


class InvalidRangeError(ValueError):
    """Integer range is empty or too wide - exception variant."""

    def __init__(self, low: int, high: int, reason: str | None = None) -> None:
        self.low = low
        self.high = high
        self.reason = reason
        msg = f'Invalid range [{low}, {high}]'
        if reason:
            msg = f'{msg}: {reason}'
        super().__init__(msg)

    def to_struct(self) -> InvalidRange:
        """Convert to struct for Result-based code."""
        return InvalidRange(self.low, self.high, self.reason)
