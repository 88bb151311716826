"""
Line Chart
==========
Produces `[{id, data: [{x, y}, ...]}, ...]` series.

Two mapping styles are supported:
- several y columns, each becoming its own series over the shared x values
- one y column plus an id column, rows grouped into one series per id
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from charts.base import BaseChartConfig, DataMapping, ScaleConfig, SortingConfig
from charts.table import DataTable, parse_data_table
from charts.utils import (
    clean_string,
    column_validator,
    process_x_value,
    sort_chart_data,
    to_number,
)

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Line charts show trends over time or sequential data. Multiple Y "
        "columns become separate series, or a single Y column is grouped "
        "into series by an ID column."
    ),
    "csvColumns": ["Month", "Sales", "Profit", "Revenue", "Country"],
    "dataMapping": {
        "xColumn": "Month",
        "yColumns": ["Sales", "Profit", "Revenue"],
        "idColumn": "Country",
    },
}


class LineDataMapping(DataMapping):
    x_column: str
    y_columns: List[str] = Field(default_factory=list)
    id_column: Optional[str] = None


class LineChartConfig(BaseChartConfig):
    chart_type: Literal["line"] = "line"
    data_mapping: LineDataMapping
    x_scale: Optional[ScaleConfig] = None
    y_scale: Optional[ScaleConfig] = None
    sorting: Optional[SortingConfig] = None


def _sort_points(points: List[Dict[str, Any]], config: LineChartConfig) -> List[Dict[str, Any]]:
    sorting = config.sorting or SortingConfig()
    return sort_chart_data(
        points,
        SortingConfig(enabled=sorting.enabled, direction=sorting.direction, sort_by="index"),
        x_scale_type=config.x_scale.type if config.x_scale else None,
        index_column="x",
    )


def _process_grouped(
    headers: List[str],
    data: List[Dict[str, Any]],
    config: LineChartConfig,
) -> List[Dict[str, Any]]:
    mapping = config.data_mapping
    scale_type = config.x_scale.type if config.x_scale else None
    y_column = mapping.y_columns[0] if mapping.y_columns else None
    if y_column not in headers:
        return []

    series: Dict[str, List[Dict[str, Any]]] = {}
    for row in data:
        series_id = clean_string(row.get(mapping.id_column))
        x = process_x_value(row.get(mapping.x_column), scale_type)
        y = to_number(row.get(y_column))
        series.setdefault(series_id, []).append({"x": x, "y": y})

    return [
        {"id": series_id, "data": _sort_points(points, config)}
        for series_id, points in series.items()
        if points
    ]


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = LineChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.x_column not in headers:
        return []

    if mapping.id_column and mapping.id_column in headers:
        return _process_grouped(headers, data, config)

    scale_type = config.x_scale.type if config.x_scale else None
    y_columns = [col for col in mapping.y_columns if col in headers]

    # x value -> {y column: value}; the first row for an x fixes its position
    points: Dict[Any, Dict[str, float]] = {}
    for row in data:
        x = process_x_value(row.get(mapping.x_column), scale_type)
        y_values = points.setdefault(x, {})
        for col in y_columns:
            y_values[col] = to_number(row.get(col))

    ordered = _sort_points(
        [{"x": x, "y_values": y_values} for x, y_values in points.items()],
        config,
    )

    result = []
    for col in y_columns:
        series_data = [
            {"x": point["x"], "y": point["y_values"][col]}
            for point in ordered
            if col in point["y_values"]
        ]
        if series_data:
            result.append({"id": clean_string(col), "data": series_data})
    return result


def get_required_columns(config: Any) -> List[str]:
    mapping = LineChartConfig.coerce(config).data_mapping
    columns = [mapping.x_column]
    if mapping.id_column:
        columns.append(mapping.id_column)
        if mapping.y_columns:
            columns.append(mapping.y_columns[0])
    else:
        columns.extend(mapping.y_columns)
    return columns


validate = column_validator(get_required_columns)
