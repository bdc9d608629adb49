"""Byte-pattern search over property blobs.

find/find_all are exact substring matches. find_key adds the identifier
boundary check used when locating property keys, so that a short key is
not matched inside a longer name that contains it.
"""
from __future__ import annotations

from typing import Union

from scumblob.blob.constants import IDENTIFIER_BYTES
from scumblob.blob.errors import InvalidInputError

Pattern = Union[str, bytes]

# Linear search is fine at single-row blob sizes.


def as_pattern(pattern: Pattern) -> bytes:
    """Encode a key or marker to bytes, rejecting empty or non-ASCII input."""
    if isinstance(pattern, str):
        try:
            pattern = pattern.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidInputError(f"Pattern must be ASCII: {pattern!r}") from e
    elif isinstance(pattern, (bytearray, memoryview)):
        pattern = bytes(pattern)
    elif not isinstance(pattern, bytes):
        raise InvalidInputError(f"Pattern must be str or bytes, got {type(pattern).__name__}")
    if not pattern:
        raise InvalidInputError("Pattern must not be empty")
    return pattern


def as_buffer(data) -> bytes:
    """Accept bytes-like blobs; anything else is a caller error."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise InvalidInputError(f"Blob must be bytes-like, got {type(data).__name__}")


def _check_start(start: int) -> None:
    if start < 0:
        raise InvalidInputError(f"Start offset must be >= 0, got {start}")


def find(data: bytes, pattern: Pattern, start: int = 0) -> int:
    """Offset of the first match at or after start, or -1."""
    pattern = as_pattern(pattern)
    _check_start(start)
    if start > len(data) - len(pattern):
        return -1
    return data.find(pattern, start)


def find_all(data: bytes, pattern: Pattern, start: int = 0) -> list[int]:
    """Offsets of all non-overlapping matches, ascending."""
    pattern = as_pattern(pattern)
    _check_start(start)
    offsets = []
    pos = data.find(pattern, start)
    while pos != -1:
        offsets.append(pos)
        pos = data.find(pattern, pos + len(pattern))
    return offsets


def is_key_boundary(data: bytes, offset: int, length: int) -> bool:
    """True if the match at offset is not glued to identifier bytes on either side."""
    if offset > 0 and data[offset - 1] in IDENTIFIER_BYTES:
        return False
    end = offset + length
    if end < len(data) and data[end] in IDENTIFIER_BYTES:
        return False
    return True


def find_key(data: bytes, key: Pattern, start: int = 0) -> int:
    """Offset of the first standalone occurrence of key at or after start, or -1."""
    key = as_pattern(key)
    _check_start(start)
    pos = data.find(key, start)
    while pos != -1:
        if is_key_boundary(data, pos, len(key)):
            return pos
        pos = data.find(key, pos + 1)
    return -1
