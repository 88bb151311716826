"""
Choropleth Map
==============
`{id, value}` per region (plus `label` when a label column is mapped).
Region ids are expected to match the feature ids of the map projection.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Choropleth charts display geographic data with regions colored by "
        "data values."
    ),
    "csvColumns": ["Country_Code", "Population", "Country_Name"],
    "dataMapping": {
        "idColumn": "Country_Code",
        "valueColumn": "Population",
        "labelColumn": "Country_Name",
    },
}


class ChoroplethDataMapping(DataMapping):
    id_column: str
    value_column: str
    label_column: Optional[str] = None


class ChoroplethChartConfig(BaseChartConfig):
    chart_type: Literal["choropleth"] = "choropleth"
    data_mapping: ChoroplethDataMapping
    projection_type: Optional[str] = None
    domain: Optional[List[float]] = None


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = ChoroplethChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.id_column not in headers or mapping.value_column not in headers:
        return []

    with_label = bool(mapping.label_column) and mapping.label_column in headers
    regions = []
    for row in data:
        region: Dict[str, Any] = {
            "id": clean_string(row.get(mapping.id_column)),
            "value": to_number(row.get(mapping.value_column)),
        }
        if with_label:
            region["label"] = clean_string(row.get(mapping.label_column))
        regions.append(region)
    return regions


def get_required_columns(config: Any) -> List[str]:
    mapping = ChoroplethChartConfig.coerce(config).data_mapping
    return compact([mapping.id_column, mapping.value_column, mapping.label_column])


validate = column_validator(get_required_columns)
