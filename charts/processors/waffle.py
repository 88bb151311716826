"""
Waffle Chart
============
`{id, label, value}` cells with a positive value, in row order.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig
from charts.processors.funnel import LabeledValueMapping, labeled_values
from charts.table import DataTable, parse_data_table
from charts.utils import column_validator, compact

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Waffle charts display proportions as filled squares in a grid "
        "(each square = 1%)."
    ),
    "csvColumns": ["Category", "Percentage"],
    "dataMapping": {"idColumn": "Category", "valueColumn": "Percentage"},
}


class WaffleChartConfig(BaseChartConfig):
    chart_type: Literal["waffle"] = "waffle"
    data_mapping: LabeledValueMapping
    total: Optional[float] = None
    rows: Optional[int] = None
    columns: Optional[int] = None


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = WaffleChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.id_column not in headers or mapping.value_column not in headers:
        return []
    return labeled_values(headers, data, mapping)


def get_required_columns(config: Any) -> List[str]:
    mapping = WaffleChartConfig.coerce(config).data_mapping
    return compact([mapping.id_column, mapping.value_column, mapping.label_column])


validate = column_validator(get_required_columns)
