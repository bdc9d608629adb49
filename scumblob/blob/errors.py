"""Exceptions raised by the blob decoder."""
from __future__ import annotations


class BlobError(Exception):
    """Base class for decoder errors."""


class InvalidInputError(BlobError, ValueError):
    """Caller passed an empty key, a non-bytes buffer, or a bad offset."""


class ValueOutOfBoundsError(BlobError, IndexError):
    """A fixed-width read would run past the end of the buffer."""

    def __init__(self, offset: int, width: int, size: int):
        super().__init__(
            f"read of {width} byte(s) at offset {offset} exceeds buffer of {size} byte(s)"
        )
        self.offset = offset
        self.width = width
        self.size = size
