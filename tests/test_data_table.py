"""Tests for the DataTable model and its row/column accessors."""

from __future__ import annotations

import pandas as pd
import pytest

from charts.table import (
    Cell,
    CellType,
    ColumnSpec,
    DataRow,
    DataTable,
    DataTableContainer,
    DataTableSpec,
    get_data_table_headers,
    parse_data_table,
)

pytestmark = pytest.mark.unit


def test_spec_rejects_duplicate_column_names() -> None:
    with pytest.raises(ValueError, match="Duplicate column name: a"):
        DataTableSpec([ColumnSpec("a"), ColumnSpec("a")])


def test_spec_lookup() -> None:
    spec = DataTableSpec([ColumnSpec("a"), ColumnSpec("b", CellType.NUMBER)])

    assert spec.column_names == ["a", "b"]
    assert spec.find_column_index("b") == 1
    assert spec.find_column_index("zzz") == -1
    assert len(spec) == 2


def test_container_builds_table_and_refuses_rows_after_close() -> None:
    container = DataTableContainer(DataTableSpec([ColumnSpec("a")]))
    container.add_row(DataRow("row-0", [Cell("x")]))

    table = container.close()

    assert table.size == 1
    with pytest.raises(RuntimeError):
        container.add_row(DataRow("row-1", [Cell("y")]))


def test_container_rejects_wrong_row_width() -> None:
    container = DataTableContainer(DataTableSpec([ColumnSpec("a"), ColumnSpec("b")]))

    with pytest.raises(ValueError):
        container.add_row(DataRow("row-0", [Cell("only one")]))


def test_from_records_infers_number_columns() -> None:
    table = DataTable.from_records(
        [{"name": "a", "n": 1, "flag": True}, {"name": "b", "n": 2.5, "flag": None}]
    )

    types = {column.name: column.type for column in table.spec.columns}
    assert types == {"name": CellType.STRING, "n": CellType.NUMBER, "flag": CellType.STRING}


def test_from_dataframe_turns_nan_into_none() -> None:
    df = pd.DataFrame({"city": ["Oslo", "Rome"], "temp": [3.5, float("nan")]})

    table = DataTable.from_dataframe(df)
    headers, data = parse_data_table(table)

    assert headers == ["city", "temp"]
    assert table.spec.columns[1].type == CellType.NUMBER
    assert data[1] == {"city": "Rome", "temp": None}


def test_to_dataframe_keeps_column_order_and_values(sales_table: DataTable) -> None:
    df = sales_table.to_dataframe()

    assert list(df.columns) == ["Product", "Q1", "Q2"]
    assert df["Product"].tolist() == ["Widget", "gadget", "Bolt"]
    assert df["Q2"].tolist() == [5, 0, 8]

    round_trip = DataTable.from_dataframe(df)
    assert round_trip.spec == sales_table.spec
    assert parse_data_table(round_trip) == parse_data_table(sales_table)


def test_parse_data_table_handles_missing_and_empty_tables() -> None:
    empty = DataTable(DataTableSpec([ColumnSpec("a")]), [])

    assert parse_data_table(None) == ([], [])
    assert parse_data_table(empty) == ([], [])
    assert get_data_table_headers(empty) == []


def test_parse_data_table_keys_rows_by_header(sales_table: DataTable) -> None:
    headers, data = parse_data_table(sales_table)

    assert headers == ["Product", "Q1", "Q2"]
    assert data[0] == {"Product": "Widget", "Q1": 10, "Q2": 5}
