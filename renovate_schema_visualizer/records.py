from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


def value_type(value: Any) -> str:
    """Return the display type name of a parsed value.

    bool is checked before numbers since bool is a subclass of int.
    None reports as "object"; the type vocabulary has no separate null.
    """
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict) or value is None:
        return "object"
    return "undefined"


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


@dataclass(frozen=True)
class PropertyRecord:
    """One row of a flattened document."""

    key: str
    path: str
    value: Any
    type: str
    hierarchy_number: Optional[str] = None
    level: int = 0
    description: str = ""

    def with_description(self, description: str) -> "PropertyRecord":
        return replace(self, description=description)
