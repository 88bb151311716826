"""Tests for the parent/child tree builder behind treemap-style charts."""

from __future__ import annotations

import pytest

from charts.hierarchy import build_flat_hierarchy, build_hierarchy
from charts.processors import circle_packing, sunburst, treemap
from charts.table import DataTable

pytestmark = pytest.mark.unit


def test_two_unresolved_parents_are_wrapped_in_synthetic_root() -> None:
    rows = [
        {"id": "A", "parent": None, "v": 1},
        {"id": "B", "parent": "Z", "v": 2},
    ]

    tree = build_hierarchy(rows, "id", "v", "parent")

    assert tree == {
        "id": "root",
        "name": "Root",
        "children": [
            {"id": "A", "name": "A", "value": 1},
            {"id": "B", "name": "B", "value": 2},
        ],
    }


def test_single_root_is_returned_without_wrapper() -> None:
    rows = [
        {"id": "top", "parent": "", "v": 0},
        {"id": "c1", "parent": "top", "v": 3},
        {"id": "c2", "parent": "top", "v": 4},
    ]

    tree = build_hierarchy(rows, "id", "v", "parent")

    assert tree["id"] == "top"
    assert [child["id"] for child in tree["children"]] == ["c1", "c2"]
    assert "children" not in tree["children"][0]


def test_cycle_is_cut_at_first_member_in_row_order() -> None:
    rows = [
        {"id": "a", "parent": "b", "v": 1},
        {"id": "b", "parent": "a", "v": 1},
        {"id": "c", "parent": "a", "v": 1},
    ]

    tree = build_hierarchy(rows, "id", "v", "parent")

    assert tree["id"] == "a"
    assert [child["id"] for child in tree["children"]] == ["b", "c"]


def test_self_parent_becomes_root_and_negative_value_clamps() -> None:
    tree = build_hierarchy([{"id": "x", "parent": "x", "v": -5}], "id", "v", "parent")

    assert tree == {"id": "x", "name": "x", "value": 0}


def test_labels_and_repeated_ids() -> None:
    rows = [
        {"id": "a", "parent": None, "v": 1, "label": "Alpha"},
        {"id": "a", "parent": None, "v": 9, "label": "Alpha 2"},
    ]

    tree = build_hierarchy(rows, "id", "v", "parent", label_column="label")

    assert tree == {"id": "a", "name": "Alpha 2", "value": 9}


def test_flat_hierarchy_keeps_positive_values() -> None:
    rows = [{"id": "A", "v": 2}, {"id": None, "v": 3}, {"id": "C", "v": 0}]

    tree = build_flat_hierarchy(rows, "id", "v")

    assert tree["children"] == [
        {"id": "A", "name": "A", "value": 2},
        {"id": "item-1", "name": "item-1", "value": 3},
    ]


def test_treemap_without_parent_column_is_flat() -> None:
    table = DataTable.from_records([{"cat": "A", "v": 2, "label": "Apples"}])
    config = {"dataMapping": {"idColumn": "cat", "valueColumn": "v", "labelColumn": "label"}}

    assert treemap.process(table, config) == {
        "id": "root",
        "name": "Root",
        "children": [{"id": "A", "name": "Apples", "value": 2}],
    }


def test_sunburst_and_circle_packing_share_tree_shape() -> None:
    table = DataTable.from_records(
        [
            {"id": "all", "parent": None, "v": 0, "cat": "x"},
            {"id": "leaf", "parent": "all", "v": 5, "cat": "y"},
        ]
    )
    config = {
        "dataMapping": {
            "idColumn": "id",
            "valueColumn": "v",
            "parentColumn": "parent",
            "categoryColumn": "cat",
        }
    }

    expected = {
        "id": "all",
        "name": "all",
        "value": 0,
        "children": [{"id": "leaf", "name": "leaf", "value": 5}],
    }
    assert sunburst.process(table, config) == expected
    assert circle_packing.process(table, config) == expected


def test_hierarchy_on_empty_table() -> None:
    config = {"dataMapping": {"idColumn": "id", "valueColumn": "v"}}

    assert treemap.process(None, config) == {"id": "root", "name": "Root", "children": []}
