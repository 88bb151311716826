"""
Scatter Plot
============
Points `{x, y}` (plus `size` when a positive size column value exists),
grouped into one series per distinct value of the series column, or a
single "data" series without one.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "For scatter plots, specify X and Y value columns. Use seriesColumn "
        "to create multiple series groups."
    ),
    "csvColumns": ["x_value", "y_value", "group_id", "size_value"],
    "dataMapping": {
        "xColumn": "x_value",
        "yColumn": "y_value",
        "seriesColumn": "group_id",
        "sizeColumn": "size_value",
    },
}


class ScatterDataMapping(DataMapping):
    x_column: str
    y_column: str
    series_column: Optional[str] = None
    size_column: Optional[str] = None


class ScatterChartConfig(BaseChartConfig):
    chart_type: Literal["scatter"] = "scatter"
    data_mapping: ScatterDataMapping
    node_size: Optional[float] = None


def _point(row: Dict[str, Any], mapping: ScatterDataMapping, headers: List[str]) -> Dict[str, Any]:
    point: Dict[str, Any] = {
        "x": to_number(row.get(mapping.x_column)),
        "y": to_number(row.get(mapping.y_column)),
    }
    if mapping.size_column and mapping.size_column in headers:
        size = to_number(row.get(mapping.size_column))
        if size > 0:
            point["size"] = size
    return point


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = ScatterChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.x_column not in headers or mapping.y_column not in headers:
        return []

    if not mapping.series_column or mapping.series_column not in headers:
        return [{"id": "data", "data": [_point(row, mapping, headers) for row in data]}]

    series: Dict[str, List[Dict[str, Any]]] = {}
    for row in data:
        series_id = clean_string(row.get(mapping.series_column))
        series.setdefault(series_id, []).append(_point(row, mapping, headers))

    return [{"id": series_id, "data": points} for series_id, points in series.items()]


def get_required_columns(config: Any) -> List[str]:
    mapping = ScatterChartConfig.coerce(config).data_mapping
    return compact([mapping.x_column, mapping.y_column, mapping.series_column, mapping.size_column])


validate = column_validator(get_required_columns)
