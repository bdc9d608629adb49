"""Fixed-width little-endian value reads from a property blob."""
from __future__ import annotations

from typing import Union

from scumblob.blob.constants import TAG_TERMINATOR
from scumblob.blob.errors import ValueOutOfBoundsError
from scumblob.blob.types import DecodeRule

Number = Union[int, float]


def read_value(data: bytes, offset: int, rule: DecodeRule) -> Number:
    """Read one scalar at offset.

    Raises ValueOutOfBoundsError instead of reading a short value. 64-bit
    integers come back as float (nearest double; exact only up to 2**53).
    """
    width = rule.width
    if offset < 0 or offset + width > len(data):
        raise ValueOutOfBoundsError(offset, width, len(data))

    value = rule.packer.unpack_from(data, offset)[0]
    if rule.is_wide_int:
        return float(value)
    return value


def read_type_tag(data: bytes, offset: int) -> bytes:
    """Read a NUL-terminated tag. Runs to end of buffer if unterminated."""
    if offset >= len(data):
        return b""
    end = data.find(TAG_TERMINATOR, offset)
    if end == -1:
        end = len(data)
    return bytes(data[offset:end])
