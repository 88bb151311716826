"""
Radar Chart
===========
Same record shape as the bar chart (`indexBy` plus one numeric field per
value column), kept in row order.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Radar charts show multi-dimensional data as overlapping polygons, "
        "for comparing entities across multiple metrics."
    ),
    "csvColumns": ["Player", "Speed", "Strength", "Agility", "Defense", "Attack"],
    "dataMapping": {
        "indexBy": "Player",
        "valueColumns": ["Speed", "Strength", "Agility", "Defense", "Attack"],
    },
}


class RadarDataMapping(DataMapping):
    index_by: str
    value_columns: List[str]


class RadarChartConfig(BaseChartConfig):
    chart_type: Literal["radar"] = "radar"
    data_mapping: RadarDataMapping


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = RadarChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    index_by = config.data_mapping.index_by

    if not data or index_by not in headers:
        return []

    present = [col for col in config.data_mapping.value_columns if col in headers]
    records = []
    for row in data:
        record: Dict[str, Any] = {index_by: clean_string(row.get(index_by))}
        for col in present:
            record[col] = to_number(row.get(col))
        if any(record[col] > 0 for col in present):
            records.append(record)
    return records


def get_required_columns(config: Any) -> List[str]:
    mapping = RadarChartConfig.coerce(config).data_mapping
    return [mapping.index_by, *mapping.value_columns]


validate = column_validator(get_required_columns)
