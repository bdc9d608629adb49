"""Property lookups over untyped serialized-object blobs.

Three entry points share one single-key step (locate_property):

- decode_properties: first occurrence of each requested key anywhere in the blob.
- decode_all_occurrences: every occurrence of one key, for repeated sub-records.
- decode_after_marker: one key, searched only after a context marker.

Data problems (missing key, unknown type tag, truncated value) never raise;
they come back as DecodeWarning entries. Only bad caller input raises
InvalidInputError.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union

from scumblob.blob.constants import KEY_PADDING, TAG_TERMINATOR, VALUE_PADDING
from scumblob.blob.errors import InvalidInputError, ValueOutOfBoundsError
from scumblob.blob.reader import Number, read_type_tag, read_value
from scumblob.blob.scanner import Pattern, as_buffer, as_pattern, find, find_key
from scumblob.blob.types import PropertyType, resolve

logger = logging.getLogger(__name__)

# Longest tag text copied into a warning; unterminated tags can run to end of blob
MAX_TAG_ECHO = 64


class WarningKind(Enum):
    KEY_NOT_FOUND = "key_not_found"
    UNSUPPORTED_TYPE = "unsupported_type"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True, slots=True)
class DecodeWarning:
    """A key that could not be resolved to a value."""
    kind: WarningKind
    key: str
    message: str
    offset: Optional[int] = None      # Key offset, when the key was found
    type_tag: Optional[str] = None    # Raw tag text, when one was read

    def __str__(self) -> str:
        return self.message


@dataclass
class DecodeResult:
    """Decoded values keyed by property name, plus warnings for the rest."""
    values: dict[str, Number] = field(default_factory=dict)
    warnings: list[DecodeWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


@dataclass(frozen=True, slots=True)
class Occurrence:
    """One decoded instance of a repeated key."""
    offset: int          # Key offset
    value_offset: int
    type_tag: str
    value: Number


@dataclass(frozen=True, slots=True)
class Located:
    """A key whose type resolved and whose value was read."""
    offset: int
    value_offset: int
    type: PropertyType
    value: Number


def _key_name(key: bytes) -> str:
    return key.decode("ascii")


def tag_offset_for(key_offset: int, key: bytes) -> int:
    return key_offset + len(key) + KEY_PADDING


def value_offset_for(tag_offset: int, tag: bytes) -> int:
    # Tag bytes + NUL + fixed gap
    return tag_offset + len(tag) + 1 + VALUE_PADDING


def decode_at(data: bytes, key: bytes, key_offset: int) -> Union[Located, DecodeWarning]:
    """Resolve the type tag and value for a key already found at key_offset."""
    name = _key_name(key)
    tag_offset = tag_offset_for(key_offset, key)
    # Blob cut off before the tag's NUL: truncated, not an unknown type
    if tag_offset >= len(data) or data.find(TAG_TERMINATOR, tag_offset) == -1:
        return DecodeWarning(
            WarningKind.OUT_OF_BOUNDS, name,
            f"Type tag out of bounds for key: {name} "
            f"(tag at offset {tag_offset}, buffer of {len(data)} byte(s))",
            offset=key_offset,
        )
    raw_tag = read_type_tag(data, tag_offset)
    tag_text = raw_tag[:MAX_TAG_ECHO].decode("ascii", errors="replace")

    prop_type = resolve(raw_tag)
    if prop_type is None:
        return DecodeWarning(
            WarningKind.UNSUPPORTED_TYPE, name,
            f"Unsupported type for key: {name} (type: {tag_text!r})",
            offset=key_offset, type_tag=tag_text,
        )

    value_offset = value_offset_for(tag_offset, raw_tag)
    try:
        value = read_value(data, value_offset, prop_type.rule)
    except ValueOutOfBoundsError as e:
        return DecodeWarning(
            WarningKind.OUT_OF_BOUNDS, name,
            f"Value out of bounds for key: {name} ({e})",
            offset=key_offset, type_tag=tag_text,
        )
    return Located(key_offset, value_offset, prop_type, value)


def locate_property(data: bytes, key: bytes, start: int = 0) -> Union[Located, DecodeWarning]:
    """Find the first standalone occurrence of key at or after start and decode it.

    First match wins: a malformed first occurrence is reported, not retried
    further along the buffer.
    """
    key_offset = find_key(data, key, start)
    if key_offset == -1:
        name = _key_name(key)
        return DecodeWarning(WarningKind.KEY_NOT_FOUND, name, f"Key not found: {name}")
    return decode_at(data, key, key_offset)


def decode_properties(data: bytes, keys: Iterable[Pattern]) -> DecodeResult:
    """Decode the first occurrence of each key. Keys are searched independently."""
    data = as_buffer(data)
    if isinstance(keys, (str, bytes)):
        raise InvalidInputError("keys must be a list of key names, not a single string")
    # Validate everything before scanning anything
    patterns = [as_pattern(k) for k in keys]

    result = DecodeResult()
    seen: set[bytes] = set()
    for key in patterns:
        if key in seen:
            continue
        seen.add(key)

        found = locate_property(data, key)
        if isinstance(found, DecodeWarning):
            logger.debug("%s", found.message)
            result.warnings.append(found)
            continue
        logger.debug("%s = %r (%s @ 0x%X)", _key_name(key), found.value,
                     found.type.tag, found.value_offset)
        result.values[_key_name(key)] = found.value
    return result


def decode_all_occurrences(data: bytes, key: Pattern) -> list[Occurrence]:
    """Decode every occurrence of key, in buffer order.

    Occurrences with an unknown tag or a truncated value are skipped without
    a warning; compare len() against an expected count if completeness matters.
    """
    data = as_buffer(data)
    key = as_pattern(key)

    occurrences: list[Occurrence] = []
    pos = 0
    while pos < len(data):
        key_offset = find_key(data, key, pos)
        if key_offset == -1:
            break

        found = decode_at(data, key, key_offset)
        if isinstance(found, DecodeWarning):
            logger.debug("Skipping occurrence at 0x%X: %s", key_offset, found.message)
            # Resume after the tag window; always past the key
            tag_offset = tag_offset_for(key_offset, key)
            pos = value_offset_for(tag_offset, read_type_tag(data, tag_offset))
            continue

        occurrences.append(Occurrence(
            offset=found.offset,
            value_offset=found.value_offset,
            type_tag=found.type.tag,
            value=found.value,
        ))
        pos = found.value_offset + found.type.width

    logger.debug("%d occurrence(s) of %s", len(occurrences), _key_name(key))
    return occurrences


def decode_after_marker(data: bytes, marker: Pattern, key: Pattern) -> Optional[Number]:
    """Decode key from the bytes following marker. None if either is missing or unreadable."""
    data = as_buffer(data)
    marker = as_pattern(marker)
    key = as_pattern(key)

    marker_offset = find(data, marker)
    if marker_offset == -1:
        logger.debug("Marker not found: %s", marker.decode("ascii"))
        return None

    found = locate_property(data, key, marker_offset + len(marker))
    if isinstance(found, DecodeWarning):
        logger.debug("%s (after marker %s)", found.message, marker.decode("ascii"))
        return None
    return found.value
