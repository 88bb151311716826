"""
Pie Chart
=========
One slice per row with a positive value, largest first unless
`sortByValue` is turned off.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping, SortingConfig
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, sort_chart_data, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Pie charts show part-to-whole relationships in categorical data. "
        "Each category becomes a slice with size proportional to its value."
    ),
    "csvColumns": ["Category", "Sales", "Quantity", "Region"],
    "dataMapping": {"idColumn": "Category", "valueColumn": "Sales"},
}


class PieDataMapping(DataMapping):
    id_column: str
    value_column: str


class PieChartConfig(BaseChartConfig):
    chart_type: Literal["pie"] = "pie"
    data_mapping: PieDataMapping
    sort_by_value: Optional[bool] = None
    inner_radius: Optional[float] = None


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = PieChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.id_column not in headers or mapping.value_column not in headers:
        return []

    slices = []
    for row in data:
        value = to_number(row.get(mapping.value_column))
        if value > 0:
            slices.append({"id": clean_string(row.get(mapping.id_column)), "value": value})

    return sort_chart_data(
        slices,
        SortingConfig(
            enabled=config.sort_by_value is not False,
            direction="desc",
            sort_by="value",
        ),
        value_columns=["value"],
    )


def get_required_columns(config: Any) -> List[str]:
    mapping = PieChartConfig.coerce(config).data_mapping
    return [mapping.id_column, mapping.value_column]


validate = column_validator(get_required_columns)
