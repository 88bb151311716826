"""
Bar Chart
=========
One record per row: the category under `indexBy` plus one numeric field
per value column. Rows with no positive value are dropped. Records are
sorted by category (ascending) unless the config says otherwise.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping, SortingConfig
from charts.table import DataTable, parse_data_table
from charts.utils import (
    clean_string,
    column_validator,
    sort_chart_data,
    to_number,
)

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Bar charts display categorical data with rectangular bars. Each "
        "category (indexBy) can have multiple values (valueColumns) shown as "
        "grouped or stacked bars."
    ),
    "csvColumns": ["Product", "Q1_Sales", "Q2_Sales", "Q3_Sales", "Q4_Sales"],
    "dataMapping": {
        "indexBy": "Product",
        "valueColumns": ["Q1_Sales", "Q2_Sales", "Q3_Sales", "Q4_Sales"],
    },
}


class BarDataMapping(DataMapping):
    index_by: str
    value_columns: List[str]


class BarChartConfig(BaseChartConfig):
    chart_type: Literal["bar"] = "bar"
    data_mapping: BarDataMapping
    sorting: Optional[SortingConfig] = None
    layout: Optional[Literal["horizontal", "vertical"]] = None
    group_mode: Optional[Literal["grouped", "stacked"]] = None


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = BarChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    index_by = config.data_mapping.index_by
    value_columns = config.data_mapping.value_columns

    if not data or index_by not in headers:
        return []

    present = [col for col in value_columns if col in headers]
    records = []
    for row in data:
        record: Dict[str, Any] = {index_by: clean_string(row.get(index_by))}
        for col in present:
            record[col] = to_number(row.get(col))
        if any(record[col] > 0 for col in present):
            records.append(record)

    return sort_chart_data(
        records,
        config.sorting,
        index_column=index_by,
        value_columns=value_columns,
    )


def get_required_columns(config: Any) -> List[str]:
    mapping = BarChartConfig.coerce(config).data_mapping
    return [mapping.index_by, *mapping.value_columns]


validate = column_validator(get_required_columns)
