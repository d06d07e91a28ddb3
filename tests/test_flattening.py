"""Tests for flatten: record shape, traversal order, hierarchy numbers and depth."""

from __future__ import annotations

import pytest

from renovate_schema_visualizer.flattening import flatten
from renovate_schema_visualizer.records import PropertyRecord, value_type

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _by_path(records):
    return {r.path: r for r in records}


def _is_structural_prefix(parent: str, child: str) -> bool:
    return child.startswith(parent + ".") or child.startswith(parent + "[")


NESTED = {
    "extends": ["config:base", ":timezone(Asia/Tokyo)"],
    "hostRules": [{"hostType": "maven", "matchHost": "https://example.com/"}],
    "packageRules": [
        {"matchPackageNames": ["a", "b"], "enabled": False, "labels": []},
        {"matchUpdateTypes": ["major"], "automerge": True},
    ],
    "prHourlyLimit": 20,
    "nested": {"deeper": {"deepest": {"value": None}}},
    "empty": {},
}


# ---------------------------------------------------------------------------
# Scalars and empty input
# ---------------------------------------------------------------------------


class TestScalarInput:
    @pytest.mark.parametrize("value", [None, True, 0, 1.5, "text"])
    def test_scalar_root_yields_nothing(self, value):
        assert flatten(value) == []

    def test_empty_object_root_yields_nothing(self):
        assert flatten({}) == []

    def test_empty_array_root_yields_nothing(self):
        assert flatten([]) == []


# ---------------------------------------------------------------------------
# End-to-end scenario
# ---------------------------------------------------------------------------


class TestKeyOrdering:
    def test_keys_numbered_in_sorted_order(self):
        records = flatten({"b": 1, "a": {"x": True}})

        assert [r.path for r in records] == ["a", "a.x", "b"]
        a, ax, b = records
        assert (a.type, a.hierarchy_number, a.level) == ("object", "1", 0)
        assert (ax.type, ax.hierarchy_number, ax.level) == ("boolean", "1-1", 1)
        assert (b.type, b.hierarchy_number, b.level) == ("number", "2", 0)

    def test_numbering_independent_of_source_key_order(self):
        first = flatten({"z": 1, "m": [1, 2], "a": "x"})
        second = flatten({"a": "x", "m": [1, 2], "z": 1})
        assert first == second

    def test_container_value_is_original_object(self):
        doc = {"a": {"x": True}}
        record = flatten(doc)[0]
        assert record.value is doc["a"]

    def test_keys_and_descriptions(self):
        record = flatten({"a": 1})[0]
        assert record == PropertyRecord(key="a", path="a", value=1, type="number", hierarchy_number="1", level=0)
        assert record.description == ""


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


class TestArrays:
    def test_root_array_paths(self):
        records = flatten(["x", {"y": 1}])
        assert [(r.key, r.path, r.hierarchy_number) for r in records] == [
            ("[0]", "[0]", "1"),
            ("[1]", "[1]", "2"),
            ("y", "[1].y", "2-1"),
        ]

    def test_nested_array_paths(self):
        records = _by_path(flatten({"a": {"b": [[1], 2]}}))
        assert records["a.b[0]"].type == "array"
        assert records["a.b[0][0]"].hierarchy_number == "1-1-1-1"
        assert records["a.b[0][0]"].level == 3
        assert records["a.b[1]"].key == "[1]"

    def test_elements_in_index_order(self):
        records = flatten({"items": list(range(12))})
        assert [r.key for r in records[1:]] == [f"[{i}]" for i in range(12)]

    def test_empty_array_single_record(self):
        records = flatten({"arr": []})
        assert len(records) == 1
        assert records[0].path == "arr"
        assert records[0].type == "array"


# ---------------------------------------------------------------------------
# Structural invariants
# ---------------------------------------------------------------------------


class TestInvariants:
    def test_paths_unique(self):
        records = flatten(NESTED)
        paths = [r.path for r in records]
        assert len(paths) == len(set(paths))

    def test_every_container_once(self):
        records = _by_path(flatten(NESTED))
        for path in ("extends", "hostRules", "hostRules[0]", "packageRules[0].labels", "nested.deeper", "empty"):
            assert records[path].type in ("object", "array")

    def test_container_precedes_descendants(self):
        records = flatten(NESTED)
        position = {r.path: i for i, r in enumerate(records)}
        for r in records:
            for other in records:
                if _is_structural_prefix(r.path, other.path):
                    assert position[r.path] < position[other.path]

    def test_each_child_has_exactly_one_parent(self):
        records = flatten(NESTED)
        for r in records:
            if r.level == 0:
                continue
            parents = [
                p for p in records
                if p.level == r.level - 1 and _is_structural_prefix(p.path, r.path)
            ]
            assert len(parents) == 1, r.path

    def test_null_leaf(self):
        record = _by_path(flatten(NESTED))["nested.deeper.deepest.value"]
        assert record.value is None
        assert record.type == "object"


# ---------------------------------------------------------------------------
# Depth guard
# ---------------------------------------------------------------------------


class TestDepthGuard:
    def test_stops_expanding_past_max_depth(self, caplog):
        doc = {"a": {"b": {"c": {"d": 1}}}}
        with caplog.at_level("WARNING"):
            records = flatten(doc, max_depth=2)
        assert [r.path for r in records] == ["a", "a.b"]
        assert records[-1].type == "object"
        assert "a.b" in caplog.text

    def test_deep_document_within_default_limit(self):
        doc = current = {}
        for _ in range(50):
            current["n"] = {}
            current = current["n"]
        records = flatten(doc)
        assert len(records) == 50
        assert records[-1].level == 49


# ---------------------------------------------------------------------------
# value_type dispatch
# ---------------------------------------------------------------------------


class TestValueType:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, "boolean"),
            (False, "boolean"),
            (0, "number"),
            (2.5, "number"),
            (float("nan"), "number"),
            ("", "string"),
            ([], "array"),
            ({}, "object"),
            (None, "object"),
            (object(), "undefined"),
        ],
    )
    def test_types(self, value, expected):
        assert value_type(value) == expected
