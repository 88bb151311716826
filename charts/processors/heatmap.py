"""
Heatmap
=======
One `{x, y, v}` cell per row. Rows missing either category are dropped.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Heatmaps visualize data intensity across two categorical dimensions "
        "using color intensity."
    ),
    "csvColumns": ["Day", "Hour", "Temperature", "Region"],
    "dataMapping": {"xColumn": "Day", "yColumn": "Hour", "valueColumn": "Temperature"},
}


class HeatmapDataMapping(DataMapping):
    x_column: str
    y_column: str
    value_column: str


class HeatmapChartConfig(BaseChartConfig):
    chart_type: Literal["heatmap"] = "heatmap"
    data_mapping: HeatmapDataMapping


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = HeatmapChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or any(
        col not in headers
        for col in (mapping.x_column, mapping.y_column, mapping.value_column)
    ):
        return []

    cells = []
    for row in data:
        x = clean_string(row.get(mapping.x_column))
        y = clean_string(row.get(mapping.y_column))
        if x == "Unknown" or y == "Unknown":
            continue
        cells.append({"x": x, "y": y, "v": to_number(row.get(mapping.value_column))})
    return cells


def get_required_columns(config: Any) -> List[str]:
    mapping = HeatmapChartConfig.coerce(config).data_mapping
    return [mapping.x_column, mapping.y_column, mapping.value_column]


validate = column_validator(get_required_columns)
