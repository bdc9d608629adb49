"""Export decode results as CSV."""
from __future__ import annotations

import csv
import io

from scumblob.blob.decoder import DecodeResult, Occurrence


def export_csv(result: DecodeResult) -> str:
    """Export a flat lookup result as CSV string. Decoded rows first, then warnings."""
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["key", "value", "status", "message"])

    for key, value in result.values.items():
        writer.writerow([key, value, "ok", ""])

    for w in result.warnings:
        writer.writerow([w.key, "", w.kind.value, w.message])

    return output.getvalue()


def export_occurrences_csv(occurrences: list[Occurrence]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["offset", "value_offset", "type_tag", "value"])
    for o in occurrences:
        writer.writerow([o.offset, o.value_offset, o.type_tag, o.value])
    return output.getvalue()
