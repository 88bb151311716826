"""
Funnel Chart
============
`{id, label, value}` steps with a positive value, largest first.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping, SortingConfig
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, sort_chart_data, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Funnel charts show conversion flow through sequential steps, such "
        "as sales pipelines or user journeys."
    ),
    "csvColumns": ["Stage", "Users", "Label"],
    "dataMapping": {"idColumn": "Stage", "valueColumn": "Users", "labelColumn": "Label"},
}


class LabeledValueMapping(DataMapping):
    id_column: str
    value_column: str
    label_column: Optional[str] = None


class FunnelChartConfig(BaseChartConfig):
    chart_type: Literal["funnel"] = "funnel"
    data_mapping: LabeledValueMapping


def labeled_values(
    headers: List[str],
    data: List[Dict[str, Any]],
    mapping: LabeledValueMapping,
) -> List[Dict[str, Any]]:
    """Rows as `{id, label, value}` with a positive value."""
    with_label = bool(mapping.label_column) and mapping.label_column in headers
    items = []
    for row in data:
        value = to_number(row.get(mapping.value_column))
        if value <= 0:
            continue
        item_id = clean_string(row.get(mapping.id_column))
        label = clean_string(row.get(mapping.label_column)) if with_label else item_id
        items.append({"id": item_id, "label": label, "value": value})
    return items


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = FunnelChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.id_column not in headers or mapping.value_column not in headers:
        return []

    return sort_chart_data(
        labeled_values(headers, data, mapping),
        SortingConfig(direction="desc", sort_by="value"),
        value_columns=["value"],
    )


def get_required_columns(config: Any) -> List[str]:
    mapping = FunnelChartConfig.coerce(config).data_mapping
    return compact([mapping.id_column, mapping.value_column, mapping.label_column])


validate = column_validator(get_required_columns)
