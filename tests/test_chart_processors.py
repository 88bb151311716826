"""Tests for the per-chart data processors."""

from __future__ import annotations

import pytest

from charts.processors import (
    area_bump,
    bar,
    boxplot,
    bullet,
    bump,
    calendar,
    chord,
    funnel,
    geomap,
    heatmap,
    line,
    network,
    pie,
    radar,
    sankey,
    scatter,
    stream,
    swarmplot,
    waffle,
)
from charts.processors.boxplot import box_stats
from charts.table import DataTable

pytestmark = pytest.mark.unit


# ----- Flat series -----

def test_pie_drops_non_positive_values_and_sorts_desc() -> None:
    table = DataTable.from_records(
        [{"cat": "A", "val": 5}, {"cat": "B", "val": -1}, {"cat": "C", "val": 3}]
    )
    config = {"dataMapping": {"idColumn": "cat", "valueColumn": "val"}}

    assert pie.process(table, config) == [{"id": "A", "value": 5}, {"id": "C", "value": 3}]


def test_pie_keeps_row_order_when_sort_by_value_is_off() -> None:
    table = DataTable.from_records([{"cat": "A", "val": 1}, {"cat": "B", "val": 9}])
    config = {"dataMapping": {"idColumn": "cat", "valueColumn": "val"}, "sortByValue": False}

    assert [s["id"] for s in pie.process(table, config)] == ["A", "B"]


def test_bar_drops_all_zero_rows_and_sorts_by_index(sales_table: DataTable) -> None:
    config = {"dataMapping": {"indexBy": "Product", "valueColumns": ["Q1", "Q2"]}}

    assert bar.process(sales_table, config) == [
        {"Product": "Bolt", "Q1": 3, "Q2": 8},
        {"Product": "Widget", "Q1": 10, "Q2": 5},
    ]


def test_bar_value_sort_desc(sales_table: DataTable) -> None:
    config = {
        "dataMapping": {"indexBy": "Product", "valueColumns": ["Q1", "Q2"]},
        "sorting": {"sortBy": "value", "direction": "desc", "valueColumn": "Q2"},
    }

    assert [r["Product"] for r in bar.process(sales_table, config)] == ["Bolt", "Widget"]


def test_radar_keeps_row_order(sales_table: DataTable) -> None:
    config = {"dataMapping": {"indexBy": "Product", "valueColumns": ["Q1", "Q2"]}}

    assert [r["Product"] for r in radar.process(sales_table, config)] == ["Widget", "Bolt"]


def test_bar_without_table_returns_empty_list() -> None:
    config = {"dataMapping": {"indexBy": "Product", "valueColumns": ["Q1"]}}

    assert bar.process(None, config) == []


def test_line_one_series_per_y_column_sorted_by_x() -> None:
    table = DataTable.from_records(
        [
            {"month": "Mar", "sales": 3, "profit": 1},
            {"month": "Jan", "sales": 1, "profit": None},
            {"month": "Feb", "sales": 2, "profit": 4},
        ]
    )
    config = {"dataMapping": {"xColumn": "month", "yColumns": ["sales", "profit"]}}

    result = line.process(table, config)

    assert [s["id"] for s in result] == ["sales", "profit"]
    assert result[0]["data"] == [
        {"x": "Feb", "y": 2},
        {"x": "Jan", "y": 1},
        {"x": "Mar", "y": 3},
    ]
    assert result[1]["data"][1] == {"x": "Jan", "y": 0}


def test_line_groups_rows_by_id_column() -> None:
    table = DataTable.from_records(
        [
            {"x": 2, "y": 20, "country": "NO"},
            {"x": 1, "y": 10, "country": "NO"},
            {"x": 1, "y": 5, "country": "SE"},
        ]
    )
    config = {
        "dataMapping": {"xColumn": "x", "yColumns": ["y"], "idColumn": "country"},
        "xScale": {"type": "linear"},
    }

    result = line.process(table, config)

    assert result == [
        {"id": "NO", "data": [{"x": 1, "y": 10}, {"x": 2, "y": 20}]},
        {"id": "SE", "data": [{"x": 1, "y": 5}]},
    ]


def test_line_required_columns() -> None:
    grouped = {"dataMapping": {"xColumn": "x", "yColumns": ["y", "z"], "idColumn": "id"}}
    multi = {"dataMapping": {"xColumn": "x", "yColumns": ["y", "z"]}}

    assert line.get_required_columns(grouped) == ["x", "id", "y"]
    assert line.get_required_columns(multi) == ["x", "y", "z"]


def test_scatter_single_series_and_size() -> None:
    table = DataTable.from_records([{"x": 1, "y": 2, "s": 0}, {"x": "3", "y": 4, "s": 7}])
    config = {"dataMapping": {"xColumn": "x", "yColumn": "y", "sizeColumn": "s"}}

    assert scatter.process(table, config) == [
        {"id": "data", "data": [{"x": 1, "y": 2}, {"x": 3, "y": 4, "size": 7}]}
    ]


def test_scatter_groups_by_series_column() -> None:
    table = DataTable.from_records(
        [{"x": 1, "y": 1, "g": "a"}, {"x": 2, "y": 2, "g": "b"}, {"x": 3, "y": 3, "g": "a"}]
    )
    config = {"dataMapping": {"xColumn": "x", "yColumn": "y", "seriesColumn": "g"}}

    result = scatter.process(table, config)

    assert [s["id"] for s in result] == ["a", "b"]
    assert len(result[0]["data"]) == 2


def test_heatmap_skips_unknown_cells() -> None:
    table = DataTable.from_records(
        [{"x": "Mon", "y": "9am", "v": 3}, {"x": None, "y": "10am", "v": 1}]
    )
    config = {"dataMapping": {"xColumn": "x", "yColumn": "y", "valueColumn": "v"}}

    assert heatmap.process(table, config) == [{"x": "Mon", "y": "9am", "v": 3}]


def test_area_bump_allows_zero_but_bump_does_not() -> None:
    table = DataTable.from_records(
        [{"year": 2020, "A": 0, "B": 2}, {"year": 2021, "A": 1, "B": -1}]
    )
    config = {"dataMapping": {"xColumn": "year", "seriesColumns": ["A", "B"]}}

    assert area_bump.process(table, config) == [
        {"id": "A", "data": [{"x": "2020", "y": 0}, {"x": "2021", "y": 1}]},
        {"id": "B", "data": [{"x": "2020", "y": 2}]},
    ]
    assert bump.process(table, config)[0] == {"id": "A", "data": [{"x": "2021", "y": 1}]}


def test_stream_keeps_rows_with_any_non_negative_value() -> None:
    table = DataTable.from_records(
        [{"t": "a", "v": -1, "w": -2}, {"t": "b", "v": 0, "w": -2}, {"t": None, "v": 5, "w": 5}]
    )
    config = {"dataMapping": {"xColumn": "t", "valueColumns": ["v", "w"]}}

    assert stream.process(table, config) == [{"t": "b", "v": 0, "w": -2}]


def test_funnel_sorted_desc_and_waffle_unsorted() -> None:
    table = DataTable.from_records(
        [
            {"stage": "Visit", "n": 10, "label": "Visits"},
            {"stage": "Buy", "n": 40, "label": None},
            {"stage": "Lost", "n": 0, "label": "Lost"},
        ]
    )
    config = {"dataMapping": {"idColumn": "stage", "valueColumn": "n", "labelColumn": "label"}}

    assert funnel.process(table, config) == [
        {"id": "Buy", "label": "Unknown", "value": 40},
        {"id": "Visit", "label": "Visits", "value": 10},
    ]
    assert [item["id"] for item in waffle.process(table, config)] == ["Visit", "Buy"]


def test_bullet_markers_and_ranges() -> None:
    table = DataTable.from_records(
        [
            {"kpi": "Revenue", "actual": 80, "target": 100, "low": 50, "high": 0},
            {"kpi": "Cost", "actual": 0, "target": 10, "low": 1, "high": 2},
        ]
    )
    config = {
        "dataMapping": {
            "idColumn": "kpi",
            "actualColumn": "actual",
            "targetColumn": "target",
            "rangeColumns": ["low", "high"],
        }
    }

    assert bullet.process(table, config) == [
        {"id": "Revenue", "measures": [80], "markers": [100], "ranges": [50]}
    ]


def test_swarmplot_generates_ids_and_volume() -> None:
    table = DataTable.from_records([{"g": "a", "v": 1, "s": 4}])
    config = {"dataMapping": {"groupBy": "g", "value": "v", "size": "s"}}

    assert swarmplot.process(table, config) == [
        {"id": "point-0", "group": "a", "value": 1, "volume": 4}
    ]


def test_geomap_skips_blank_coordinates() -> None:
    table = DataTable.from_records(
        [
            {"lat": 59.9, "lng": 10.7, "city": "Oslo", "pop": 700},
            {"lat": "", "lng": 12.5, "city": "Rome", "pop": 2800},
        ]
    )
    config = {
        "dataMapping": {
            "latitudeColumn": "lat",
            "longitudeColumn": "lng",
            "labelColumn": "city",
            "valueColumn": "pop",
        }
    }

    assert geomap.process(table, config) == [
        {"lat": 59.9, "lng": 10.7, "value": 700, "label": "Oslo"}
    ]


# ----- Calendar -----

def test_calendar_formats_days_and_skips_bad_rows() -> None:
    table = DataTable.from_records(
        [
            {"date": "2024-01-05", "value": 3},
            {"date": "garbage", "value": 1},
            {"date": "2024-01-06", "value": None},
        ]
    )
    config = {"dataMapping": {"dateColumn": "date", "valueColumn": "value"}}

    assert calendar.process(table, config) == [{"day": "2024-01-05", "value": 3}]


def test_calendar_validation_fails_without_values() -> None:
    table = DataTable.from_records([{"date": "2024-01-05", "value": None}])
    config = {"dataMapping": {"dateColumn": "date", "valueColumn": "value"}}

    check = calendar.check_calendar_data(table, config)

    assert check.valid is False
    assert check.errors == ["No valid data rows found"]
    assert calendar.validate(table, config).valid is False


def test_calendar_check_reports_invalid_dates_as_warnings() -> None:
    table = DataTable.from_records([{"date": "2024-01-05", "value": 1}, {"date": "nope", "value": 2}])
    config = {"dataMapping": {"dateColumn": "date", "valueColumn": "value"}}

    check = calendar.check_calendar_data(table, config)

    assert check.valid is True
    assert check.warnings == ["1 rows have invalid dates"]


# ----- Matrix and graphs -----

def test_chord_last_write_wins_and_keys_sorted() -> None:
    table = DataTable.from_records(
        [{"f": "Y", "t": "X", "v": 1}, {"f": "X", "t": "Y", "v": 3}, {"f": "X", "t": "Y", "v": 7}]
    )
    config = {"dataMapping": {"fromColumn": "f", "toColumn": "t", "valueColumn": "v"}}

    result = chord.process(table, config)

    assert result["keys"] == ["X", "Y"]
    assert result["matrix"][0][1] == 7
    assert result["matrix"] == [[0, 7], [1, 0]]


def test_chord_passes_matrix_through() -> None:
    config = {"dataMapping": {"matrix": [[0, 1], [2, 0]]}}

    assert chord.process(None, config) == {"matrix": [[0, 1], [2, 0]], "keys": ["Node 1", "Node 2"]}
    assert chord.get_required_columns(config) == []


def test_sankey_drops_self_loops_and_non_positive_links() -> None:
    table = DataTable.from_records(
        [
            {"s": "A", "t": "B", "v": 5},
            {"s": "B", "t": "B", "v": 2},
            {"s": "B", "t": "C", "v": 0},
            {"s": "B", "t": "D", "v": 1},
        ]
    )
    config = {"dataMapping": {"sourceColumn": "s", "targetColumn": "t", "valueColumn": "v"}}

    result = sankey.process(table, config)

    assert [node["id"] for node in result["nodes"]] == ["A", "B", "D"]
    assert result["nodes"][0]["nodeColor"] == sankey.DEFAULT_NODE_COLOR
    assert result["links"] == [
        {"source": "A", "target": "B", "value": 5},
        {"source": "B", "target": "D", "value": 1},
    ]


def test_sankey_empty_result_shape() -> None:
    table = DataTable.from_records([{"s": "A", "t": "A", "v": 5}])
    config = {"dataMapping": {"sourceColumn": "s", "targetColumn": "t", "valueColumn": "v"}}

    assert sankey.process(table, config) == {"nodes": [], "links": []}


def test_network_adds_missing_endpoints() -> None:
    table = DataTable.from_records(
        [
            {"id": "a", "grp": "g1", "src": "a", "dst": "b"},
            {"id": "c", "grp": "g2", "src": "c", "dst": "c"},
        ]
    )
    config = {
        "dataMapping": {
            "nodeIdColumn": "id",
            "nodeGroupColumn": "grp",
            "linkSourceColumn": "src",
            "linkTargetColumn": "dst",
        }
    }

    result = network.process(table, config)

    assert result["nodes"] == [
        {"id": "a", "radius": 8, "group": "g1"},
        {"id": "b", "radius": 8},
        {"id": "c", "radius": 8, "group": "g2"},
    ]
    assert result["links"] == [{"source": "a", "target": "b", "distance": 100}]


# ----- Box plot -----

def test_box_stats_uses_index_quartiles() -> None:
    stats = box_stats([10, 9, 8, 7, 6, 5, 4, 3, 2, 1])

    assert stats == {"min": 1, "q1": 3, "median": 5.5, "q3": 8, "max": 10}


def test_box_stats_reports_outliers() -> None:
    stats = box_stats([1, 2, 3, 4, 100])

    assert stats["q1"] == 2
    assert stats["q3"] == 4
    assert stats["max"] == 7
    assert stats["outliers"] == [100]


def test_boxplot_groups_with_sub_group() -> None:
    table = DataTable.from_records(
        [{"g": "A", "s": "x", "v": 1}, {"g": "A", "s": "x", "v": 3}, {"g": "A", "s": "y", "v": 2}]
    )
    config = {"dataMapping": {"groupBy": "g", "value": "v", "subGroup": "s"}}

    result = boxplot.process(table, config)

    assert [item["group"] for item in result] == ["A - x", "A - y"]
    assert result[0]["median"] == 2
