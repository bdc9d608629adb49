"""Builders for synthetic property blobs laid out like the real serializer."""
from __future__ import annotations

import struct

FORMATS = {
    "ByteProperty": "<B",
    "BoolProperty": "<B",
    "Int8Property": "<b",
    "Int16Property": "<h",
    "UInt16Property": "<H",
    "IntProperty": "<i",
    "Int32Property": "<i",
    "UInt32Property": "<I",
    "FloatProperty": "<f",
    "Int64Property": "<q",
    "UInt64Property": "<Q",
    "DoubleProperty": "<d",
}


def raw_prop(key: str, tag: str, value: bytes) -> bytes:
    """key ++ 5 zero bytes ++ tag NUL ++ 10 zero bytes ++ value."""
    return key.encode("ascii") + b"\x00" * 5 + tag.encode("ascii") + b"\x00" + b"\x00" * 10 + value


def prop(key: str, tag: str, value) -> bytes:
    """A property with length-prefixed names, as found in save blobs.

    value is packed with the tag's format; pass bytes to write it verbatim.
    """
    if not isinstance(value, bytes):
        value = struct.pack(FORMATS[tag], value)
    key_b = key.encode("ascii")
    tag_b = tag.encode("ascii")
    return (
        struct.pack("<i", len(key_b) + 1) + key_b + b"\x00"
        + struct.pack("<i", len(tag_b) + 1) + tag_b + b"\x00"
        + struct.pack("<ii", len(value), 0) + b"\x00\x00"
        + value
    )


def filler(n: int = 16) -> bytes:
    return bytes(range(0x80, 0x80 + n))
