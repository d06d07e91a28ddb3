from __future__ import annotations

import logging
from typing import Any, Iterable, List, Tuple

from .config import DEFAULT_MAX_DEPTH
from .paths import index_label, join_hierarchy, join_index, join_key
from .records import PropertyRecord, is_container, value_type

logger = logging.getLogger(__name__)


def _children(value: Any, parent_path: str) -> Iterable[Tuple[str, str, Any]]:
    """Yield (key, path, child) in visiting order: sorted keys, array index order."""
    if isinstance(value, list):
        for index, item in enumerate(value):
            yield index_label(index), join_index(parent_path, index), item
    else:
        for key in sorted(value):
            yield key, join_key(parent_path, key), value[key]


def flatten(
    value: Any,
    parent_path: str = '',
    parent_hierarchy: str = '',
    level: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[PropertyRecord]:
    """Flatten a parsed document into one PropertyRecord per node.

    Containers emit their own record before the records of their descendants.
    Scalars are emitted by their parent, so a scalar (or None) at the top call
    yields an empty list. Below `max_depth` levels, containers are still
    emitted but not descended into.
    """
    records: List[PropertyRecord] = []
    if not is_container(value):
        return records

    for position, (key, path, child) in enumerate(_children(value, parent_path), start=1):
        hierarchy = join_hierarchy(parent_hierarchy, position)
        records.append(PropertyRecord(
            key=key,
            path=path,
            value=child,
            type=value_type(child),
            hierarchy_number=hierarchy,
            level=level,
        ))
        if not is_container(child):
            continue
        if level + 1 >= max_depth:
            logger.warning("Nesting deeper than %d levels at %s; not expanding.", max_depth, path)
            continue
        records.extend(flatten(child, path, hierarchy, level + 1, max_depth))

    return records
