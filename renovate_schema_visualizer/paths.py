from __future__ import annotations

import re
from typing import List

_INDEX_RE = re.compile(r'\[(\d+)\]')
_DIGITS_RE = re.compile(r'[0-9]+')


def index_label(index: int) -> str:
    return f"[{index}]"


def join_key(parent_path: str, key: str) -> str:
    """Append an object key to a dotted path."""
    return f"{parent_path}.{key}" if parent_path else key


def join_index(parent_path: str, index: int) -> str:
    """Append an array index to a path as a bracket suffix."""
    return f"{parent_path}{index_label(index)}" if parent_path else index_label(index)


def join_hierarchy(parent_hierarchy: str, position: int) -> str:
    """Extend a dash-joined hierarchy number with a 1-based position."""
    return f"{parent_hierarchy}-{position}" if parent_hierarchy else str(position)


def split_path(path: str) -> List[str]:
    """Split a dotted/bracketed path into segments.

    Bracket indices become their own segments, so 'a[2].b' -> ['a', '2', 'b'].
    Keys are not escaped: a key containing '.' splits into several segments.
    """
    if path is None:
        return []
    if not isinstance(path, str):
        path = str(path)
    return _INDEX_RE.sub(r'.\1', path).split('.')


def is_index_segment(segment: str) -> bool:
    return bool(_DIGITS_RE.fullmatch(segment))
