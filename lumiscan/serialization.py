"""Text encodings of a row collection.

JSON is the lossless format, used both for export and for the persisted
snapshot. CSV is export-only: there is no CSV reader.
"""

import csv
import io
import json
import math
from typing import Any, Sequence

from pydantic import TypeAdapter, ValidationError

from lumiscan.errors import MalformedInputError
from lumiscan.row import DataRow

CSV_HEADER = ("section", "key", "value", "confidence", "sourceSpan")

_ROWS_ADAPTER = TypeAdapter(list[DataRow])


def format_confidence(confidence: float) -> str:
    """Shortest decimal text for a confidence; integral values drop the '.0'."""
    if math.isfinite(confidence) and float(confidence).is_integer():
        return str(int(confidence))
    return repr(confidence)


def to_csv(rows: Sequence[DataRow]) -> str:
    """Render rows as CSV with every data field double-quoted.

    The header is unquoted, embedded quotes are doubled, an absent source
    span becomes an empty field, and lines are joined with '\\n' with no
    trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow(
            [
                row.section,
                row.key,
                row.value,
                format_confidence(row.confidence),
                row.source_span if row.source_span is not None else "",
            ]
        )
    lines = [",".join(CSV_HEADER)]
    body = buffer.getvalue()
    if body:
        lines.append(body.removesuffix("\n"))
    return "\n".join(lines)


def row_to_dict(row: DataRow) -> dict[str, Any]:
    """JSON object for one row; sourceSpan is left out when absent."""
    data: dict[str, Any] = {
        "id": row.id,
        "section": row.section,
        "key": row.key,
        "value": row.value,
        "confidence": row.confidence,
    }
    if row.source_span is not None:
        data["sourceSpan"] = row.source_span
    return data


def to_json(rows: Sequence[DataRow]) -> str:
    return json.dumps([row_to_dict(row) for row in rows], indent=2, ensure_ascii=False, allow_nan=False)


def from_json(text: str) -> list[DataRow]:
    """Decode a snapshot produced by to_json.

    Field types are checked strictly: a confidence written as ``true`` or
    ``"0.5"`` is rejected rather than coerced.

    Raises:
        MalformedInputError: if the text is not JSON, is not a list of row
            objects, or repeats an identity.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise MalformedInputError(f"Snapshot must be a JSON array, got {type(data).__name__}")
    try:
        rows = _ROWS_ADAPTER.validate_json(text, strict=True)
    except ValidationError as e:
        raise MalformedInputError(f"Snapshot rows do not match the row shape: {e}") from e

    seen: set[str] = set()
    for row in rows:
        if row.id in seen:
            raise MalformedInputError(f"Snapshot repeats row id {row.id!r}")
        seen.add(row.id)
    return rows
