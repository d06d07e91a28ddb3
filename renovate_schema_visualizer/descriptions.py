from __future__ import annotations

from typing import Any, Iterable, List

from .records import PropertyRecord


def _description_of(node: Any) -> str:
    if not isinstance(node, dict):
        return ''
    description = node.get('description')
    return description if isinstance(description, str) else ''


def describe(schema: Any, path: str) -> str:
    """Look up the schema description for a flattened property path.

    Only `properties.<a>` and `properties.<a>.properties.<b>` are consulted;
    Renovate's options live at those two levels. Array indices, combinators
    and $ref are not followed, and deeper paths yield ''.
    """
    if not isinstance(schema, dict) or not path:
        return ''
    properties = schema.get('properties')
    if not isinstance(properties, dict):
        return ''

    parts = path.split('.')
    if len(parts) > 2:
        return ''

    root = properties.get(parts[0])
    if not isinstance(root, dict):
        return ''
    if len(parts) == 1:
        return _description_of(root)

    nested = root.get('properties')
    if not isinstance(nested, dict):
        return ''
    return _description_of(nested.get(parts[1]))


def annotate(records: Iterable[PropertyRecord], schema: Any) -> List[PropertyRecord]:
    """Return copies of `records` with descriptions looked up in `schema`."""
    return [record.with_description(describe(schema, record.path)) for record in records]
