"""
Stream Chart
============
One layer record per row: the x category plus one numeric field per
value column. A row is kept when at least one value is non-negative.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Stream charts show flowing stacked areas over time, for composition "
        "changes and trends."
    ),
    "csvColumns": ["Month", "Product_A", "Product_B", "Product_C", "Product_D"],
    "dataMapping": {
        "xColumn": "Month",
        "valueColumns": ["Product_A", "Product_B", "Product_C", "Product_D"],
    },
}


class StreamDataMapping(DataMapping):
    x_column: str
    value_columns: List[str]


class StreamChartConfig(BaseChartConfig):
    chart_type: Literal["stream"] = "stream"
    data_mapping: StreamDataMapping
    offset_type: Optional[str] = None


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = StreamChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.x_column not in headers:
        return []

    present = [col for col in mapping.value_columns if col in headers]
    layers = []
    for row in data:
        x = clean_string(row.get(mapping.x_column))
        if x == "Unknown":
            continue
        record: Dict[str, Any] = {mapping.x_column: x}
        for col in present:
            record[col] = to_number(row.get(col))
        if any(record[col] >= 0 for col in present):
            layers.append(record)
    return layers


def get_required_columns(config: Any) -> List[str]:
    mapping = StreamChartConfig.coerce(config).data_mapping
    return [mapping.x_column, *mapping.value_columns]


validate = column_validator(get_required_columns)
