"""Type registry: property type tags and their fixed-width decode rules."""
from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class DecodeRule(Enum):
    """Little-endian scalar layouts supported by the property format."""
    UINT8 = "<B"
    INT8 = "<b"
    INT16 = "<h"
    UINT16 = "<H"
    INT32 = "<i"
    UINT32 = "<I"
    FLOAT32 = "<f"
    INT64 = "<q"
    UINT64 = "<Q"
    FLOAT64 = "<d"

    def __init__(self, fmt: str):
        self.packer = struct.Struct(fmt)

    @property
    def width(self) -> int:
        return self.packer.size

    @property
    def is_float(self) -> bool:
        return self in (DecodeRule.FLOAT32, DecodeRule.FLOAT64)

    @property
    def is_wide_int(self) -> bool:
        """64-bit integers, widened to float on read."""
        return self in (DecodeRule.INT64, DecodeRule.UINT64)


@dataclass(frozen=True, slots=True)
class PropertyType:
    """A resolved type tag."""
    tag: str
    rule: DecodeRule

    @property
    def width(self) -> int:
        return self.rule.width


PROPERTY_TYPES: dict[str, PropertyType] = {
    tag: PropertyType(tag, rule)
    for tag, rule in (
        ("ByteProperty", DecodeRule.UINT8),
        ("BoolProperty", DecodeRule.UINT8),
        ("Int8Property", DecodeRule.INT8),
        ("Int16Property", DecodeRule.INT16),
        ("UInt16Property", DecodeRule.UINT16),
        ("IntProperty", DecodeRule.INT32),
        ("Int32Property", DecodeRule.INT32),
        ("UInt32Property", DecodeRule.UINT32),
        ("FloatProperty", DecodeRule.FLOAT32),
        ("Int64Property", DecodeRule.INT64),
        ("UInt64Property", DecodeRule.UINT64),
        ("DoubleProperty", DecodeRule.FLOAT64),
    )
}


def resolve(tag: Union[str, bytes]) -> Optional[PropertyType]:
    """Look up a type tag. Returns None for tags outside the registry."""
    if isinstance(tag, (bytes, bytearray)):
        try:
            tag = bytes(tag).decode("ascii")
        except UnicodeDecodeError:
            return None
    return PROPERTY_TYPES.get(tag)


def supported_tags() -> list[PropertyType]:
    """All registered types, narrowest first."""
    return sorted(PROPERTY_TYPES.values(), key=lambda t: (t.width, t.tag))
