"""
Bullet Chart
============
One bullet per row with a positive actual value: the actual as the single
measure, the target as a marker and positive range values as the
qualitative ranges.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, positive_values, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Bullet charts show performance against targets with qualitative "
        "ranges. Suited to KPI dashboards."
    ),
    "csvColumns": ["KPI", "Actual", "Target", "Poor", "OK", "Good"],
    "dataMapping": {
        "idColumn": "KPI",
        "actualColumn": "Actual",
        "targetColumn": "Target",
        "rangeColumns": ["Poor", "OK", "Good"],
    },
}


class BulletDataMapping(DataMapping):
    id_column: str
    actual_column: str
    target_column: Optional[str] = None
    range_columns: List[str] = Field(default_factory=list)


class BulletChartConfig(BaseChartConfig):
    chart_type: Literal["bullet"] = "bullet"
    data_mapping: BulletDataMapping


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = BulletChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.id_column not in headers or mapping.actual_column not in headers:
        return []

    with_target = bool(mapping.target_column) and mapping.target_column in headers
    range_columns = [col for col in mapping.range_columns if col in headers]

    bullets = []
    for row in data:
        actual = to_number(row.get(mapping.actual_column))
        if actual <= 0:
            continue
        bullet: Dict[str, Any] = {
            "id": clean_string(row.get(mapping.id_column)),
            "measures": [actual],
        }
        if with_target:
            target = to_number(row.get(mapping.target_column))
            if target > 0:
                bullet["markers"] = [target]
        ranges = positive_values([row.get(col) for col in range_columns])
        if ranges:
            bullet["ranges"] = ranges
        bullets.append(bullet)
    return bullets


def get_required_columns(config: Any) -> List[str]:
    mapping = BulletChartConfig.coerce(config).data_mapping
    return compact([mapping.id_column, mapping.actual_column, mapping.target_column, *mapping.range_columns])


validate = column_validator(get_required_columns)
