from __future__ import annotations

import json
import math
from typing import Any, Iterable, List

from .records import PropertyRecord

CONFIG_TABLE_HEADERS = ["Property", "Path", "Type", "Value", "Description", "Hierarchy"]
PREVIEW_ITEMS = 3
EMPTY_VALUE = "—"
LARGE_FLOAT = 1e16


def format_number(value: float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < LARGE_FLOAT:
            return str(int(value))
    return repr(value)


def _preview(parts: List[str], total: int) -> str:
    text = ", ".join(parts)
    if total > PREVIEW_ITEMS:
        text += f", ...and {total - PREVIEW_ITEMS} more"
    return text


def format_value(value: Any) -> str:
    """Render a value for the config table.

    Containers show their size and a preview of the first few entries.
    """
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list):
        if not value:
            return "[]"
        parts = [format_value(item) for item in value[:PREVIEW_ITEMS]]
        return f"Array [{len(value)}]: " + _preview(parts, len(value))
    if isinstance(value, dict):
        if not value:
            return "{}"
        keys = list(value)
        parts = [f"{key}: {format_value(value[key])}" for key in keys[:PREVIEW_ITEMS]]
        return f"Object {{{len(keys)}}}: " + _preview(parts, len(keys))
    return str(value)


def value_text(value: Any) -> str:
    """Plain text of a value used for searching."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    if isinstance(value, (int, float)):
        return format_number(value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def matches(record: PropertyRecord, term: str) -> bool:
    needle = term.lower()
    return any(
        needle in text.lower()
        for text in (record.key, record.path, value_text(record.value), record.type, record.description)
    )


def filter_records(records: Iterable[PropertyRecord], term: str) -> List[PropertyRecord]:
    """Keep records whose key, path, value, type or description contains `term`."""
    term = (term or "").strip()
    if not term:
        return list(records)
    return [record for record in records if matches(record, term)]


def count_text(shown: int, total: int) -> str:
    return f"{shown} of {total} properties"


def record_to_row(record: PropertyRecord) -> List[Any]:
    return [
        record.key,
        record.path,
        record.type,
        format_value(record.value),
        record.description,
        record.hierarchy_number or "",
    ]
