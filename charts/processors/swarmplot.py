"""
Swarm Plot
==========
One point per row: `{id, group, value}` plus `volume` when a size column
is mapped. Rows without an id column get `point-<row index>`.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Swarm plots show individual data points distributed to avoid "
        "overlap, for distributions within categories."
    ),
    "csvColumns": ["Species", "Measurement", "Weight", "ID"],
    "dataMapping": {"groupBy": "Species", "value": "Measurement", "size": "Weight", "id": "ID"},
}


class SwarmplotDataMapping(DataMapping):
    group_by: str
    value: str
    size: Optional[str] = None
    id: Optional[str] = None


class SwarmplotChartConfig(BaseChartConfig):
    chart_type: Literal["swarmplot"] = "swarmplot"
    data_mapping: SwarmplotDataMapping


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = SwarmplotChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.group_by not in headers or mapping.value not in headers:
        return []

    with_id = bool(mapping.id) and mapping.id in headers
    with_size = bool(mapping.size) and mapping.size in headers

    points = []
    for index, row in enumerate(data):
        point: Dict[str, Any] = {
            "id": clean_string(row.get(mapping.id)) if with_id else f"point-{index}",
            "group": clean_string(row.get(mapping.group_by)),
            "value": to_number(row.get(mapping.value)),
        }
        if with_size:
            point["volume"] = to_number(row.get(mapping.size))
        points.append(point)
    return points


def get_required_columns(config: Any) -> List[str]:
    mapping = SwarmplotChartConfig.coerce(config).data_mapping
    return compact([mapping.group_by, mapping.value, mapping.size, mapping.id])


validate = column_validator(get_required_columns)
