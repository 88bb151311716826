"""
Radial Bar Chart
================
`{id, value}` bars with a positive value, in row order.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, to_number

DATA_MAPPING_EXAMPLE = {
    "description": "Radial bar charts display data in a circular format, for cyclical data.",
    "csvColumns": ["Month", "Sales", "Target"],
    "dataMapping": {"idColumn": "Month", "valueColumn": "Sales"},
}


class RadialBarDataMapping(DataMapping):
    id_column: str
    value_column: str


class RadialBarChartConfig(BaseChartConfig):
    chart_type: Literal["radialbar"] = "radialbar"
    data_mapping: RadialBarDataMapping
    max_value: Optional[float] = None


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = RadialBarChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.id_column not in headers or mapping.value_column not in headers:
        return []

    bars = []
    for row in data:
        value = to_number(row.get(mapping.value_column))
        if value > 0:
            bars.append({"id": clean_string(row.get(mapping.id_column)), "value": value})
    return bars


def get_required_columns(config: Any) -> List[str]:
    mapping = RadialBarChartConfig.coerce(config).data_mapping
    return [mapping.id_column, mapping.value_column]


validate = column_validator(get_required_columns)
