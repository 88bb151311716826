"""Tests for scalar coercion, column validation and chart data sorting."""

from __future__ import annotations

import math
from datetime import date, datetime

import pytest

from charts.table import DataTable
from charts.utils import (
    clean_string,
    process_x_value,
    sort_chart_data,
    to_date,
    to_number,
    validate_data_table_columns,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("value", [None, "", "null", "undefined", "abc"])
def test_to_number_returns_zero_for_unparseable_values(value: object) -> None:
    """Missing and non-numeric values coerce to 0."""

    assert to_number(value) == 0


def test_to_number_parses_numeric_strings() -> None:
    assert to_number("42.5") == 42.5
    assert to_number("  7 ") == 7
    assert to_number("12.5kg") == 12.5


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_to_number_maps_non_finite_numbers_to_zero(value: float) -> None:
    assert to_number(value) == 0


def test_to_number_keeps_integers_and_ignores_booleans() -> None:
    assert to_number(3) == 3
    assert isinstance(to_number(3), int)
    assert to_number(True) == 0


def test_clean_string() -> None:
    assert clean_string(None) == "Unknown"
    assert clean_string("  x  ") == "x"
    assert clean_string("   ") == "Unknown"
    assert clean_string(4.0) == "4"


def test_to_date_parses_strings_and_rejects_garbage() -> None:
    assert to_date("2024-03-15") == datetime(2024, 3, 15)
    assert to_date(date(2024, 1, 2)) == datetime(2024, 1, 2)
    assert to_date("not a date") is None
    assert to_date("null") is None
    assert to_date(None) is None


def test_process_x_value_follows_scale_type() -> None:
    assert process_x_value("5", "linear") == 5
    assert process_x_value("2024-01-01", "time") == datetime(2024, 1, 1)
    assert process_x_value(None) == "Unknown"


def test_validate_data_table_columns_reports_missing() -> None:
    table = DataTable.from_records([{"a": 1, "b": 2}])

    result = validate_data_table_columns(table, ["a", "c"])

    assert result.valid is False
    assert result.missing_columns == ["c"]
    assert result.available_columns == ["a", "b"]
    assert result.model_dump(by_alias=True) == {
        "valid": False,
        "missingColumns": ["c"],
        "availableColumns": ["a", "b"],
    }


def test_validate_data_table_columns_without_table() -> None:
    result = validate_data_table_columns(None, ["a"])

    assert result.valid is False
    assert result.available_columns == []


def test_sort_is_idempotent() -> None:
    records = [{"name": "b", "v": 2}, {"name": "A", "v": 1}, {"name": "c", "v": 3}]
    config = {"enabled": True, "direction": "asc", "sortBy": "index"}

    once = sort_chart_data(records, config, index_column="name")
    twice = sort_chart_data(once, config, index_column="name")

    assert [r["name"] for r in once] == ["A", "b", "c"]
    assert twice == once


def test_sort_by_value_desc_does_not_mutate_input() -> None:
    records = [{"k": "x", "a": 1, "b": 1}, {"k": "y", "a": 5, "b": 0}, {"k": "z", "a": 0, "b": 9}]
    original = list(records)

    result = sort_chart_data(
        records,
        {"direction": "desc", "sortBy": "value"},
        index_column="k",
        value_columns=["a", "b"],
    )

    assert [r["k"] for r in result] == ["z", "y", "x"]
    assert records == original


def test_sort_by_named_value_column() -> None:
    records = [{"k": "x", "a": 1, "b": 9}, {"k": "y", "a": 5, "b": 0}]

    result = sort_chart_data(
        records,
        {"sortBy": "value", "valueColumn": "a"},
        value_columns=["a", "b"],
    )

    assert [r["k"] for r in result] == ["x", "y"]


def test_sort_disabled_returns_input_unchanged() -> None:
    records = [{"k": "b"}, {"k": "a"}]

    assert sort_chart_data(records, {"enabled": False}, index_column="k") is records


def test_sort_time_scale_compares_timestamps() -> None:
    records = [{"x": datetime(2024, 5, 1)}, {"x": datetime(2023, 1, 1)}]

    result = sort_chart_data(records, None, x_scale_type="time", index_column="x")

    assert result[0]["x"].year == 2023
