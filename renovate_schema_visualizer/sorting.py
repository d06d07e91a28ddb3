from __future__ import annotations

import unicodedata
from functools import cmp_to_key
from typing import Iterable, List

from .paths import is_index_segment, split_path
from .records import PropertyRecord


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def compare_text(a: str, b: str) -> int:
    """Case- and accent-insensitive text order, then lowercase and unaccented first.

    'a' < 'A' < 'b' and 'e' < 'é' < 'f'; code-point order breaks any remaining tie.
    """
    return (
        _cmp(_fold(a), _fold(b))
        or _cmp(a.casefold(), b.casefold())
        or _cmp(a.swapcase(), b.swapcase())
        or _cmp(a, b)
    )


def compare_segments(a: str, b: str) -> int:
    if is_index_segment(a) and is_index_segment(b):
        return _cmp(int(a), int(b)) or _cmp(a, b)
    if a == b:
        return 0
    return compare_text(a, b)


def compare_paths(a: str, b: str) -> int:
    """Compare two record paths segment by segment.

    Array indices compare numerically, other segments as text. When one path
    is a prefix of the other, the shorter (the ancestor) comes first.
    """
    a_segments = split_path(a)
    b_segments = split_path(b)
    for a_segment, b_segment in zip(a_segments, b_segments):
        result = compare_segments(a_segment, b_segment)
        if result:
            return result
    return _cmp(len(a_segments), len(b_segments))


def sort_by_path(records: Iterable[PropertyRecord], descending: bool = False) -> List[PropertyRecord]:
    """Order records by path; `descending` reverses the whole sorted list."""
    ordered = sorted(records, key=cmp_to_key(lambda x, y: compare_paths(x.path, y.path)))
    if descending:
        ordered.reverse()
    return ordered
