"""Export decode results as JSON."""
from __future__ import annotations

import json
import math

from scumblob.blob.decoder import DecodeResult, DecodeWarning, Occurrence
from scumblob.blob.reader import Number


def _json_value(value: Number) -> Number | None:
    """NaN and infinities have no JSON form; they export as null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _warning_dict(w: DecodeWarning) -> dict:
    return {
        "kind": w.kind.value,
        "key": w.key,
        "message": w.message,
        "offset": w.offset,
        "type_tag": w.type_tag,
    }


def export_json(result: DecodeResult) -> str:
    """Export a flat lookup result as JSON string."""
    data = {
        "values": {key: _json_value(v) for key, v in result.values.items()},
        "warnings": [_warning_dict(w) for w in result.warnings],
    }
    return json.dumps(data, indent=2, allow_nan=False)


def export_occurrences_json(key: str, occurrences: list[Occurrence]) -> str:
    data = {
        "key": key,
        "count": len(occurrences),
        "occurrences": [
            {
                "offset": o.offset,
                "value_offset": o.value_offset,
                "type_tag": o.type_tag,
                "value": _json_value(o.value),
            }
            for o in occurrences
        ],
    }
    return json.dumps(data, indent=2, allow_nan=False)
