"""
Voronoi Diagram
===============
`{id, x, y}` sites, one per row.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Voronoi diagrams partition space based on proximity to points, for "
        "spatial analysis and territorial visualization."
    ),
    "csvColumns": ["Store_ID", "Longitude", "Latitude", "Sales"],
    "dataMapping": {"idColumn": "Store_ID", "xColumn": "Longitude", "yColumn": "Latitude"},
}


class VoronoiDataMapping(DataMapping):
    x_column: str
    y_column: str
    id_column: Optional[str] = None


class VoronoiChartConfig(BaseChartConfig):
    chart_type: Literal["voronoi"] = "voronoi"
    data_mapping: VoronoiDataMapping


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = VoronoiChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.x_column not in headers or mapping.y_column not in headers:
        return []

    with_id = bool(mapping.id_column) and mapping.id_column in headers
    return [
        {
            "id": clean_string(row.get(mapping.id_column)) if with_id else f"point-{index}",
            "x": to_number(row.get(mapping.x_column)),
            "y": to_number(row.get(mapping.y_column)),
        }
        for index, row in enumerate(data)
    ]


def get_required_columns(config: Any) -> List[str]:
    mapping = VoronoiChartConfig.coerce(config).data_mapping
    return compact([mapping.x_column, mapping.y_column, mapping.id_column])


validate = column_validator(get_required_columns)
