"""
Area Bump Chart
===============
One series per series column, `{x, y}` points over the x column.
Negative values are dropped; zero is allowed.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Area bump charts show ranking changes over time with filled areas "
        "representing different categories."
    ),
    "csvColumns": ["Year", "CompanyA", "CompanyB", "CompanyC", "CompanyD"],
    "dataMapping": {
        "xColumn": "Year",
        "seriesColumns": ["CompanyA", "CompanyB", "CompanyC", "CompanyD"],
    },
}


class SeriesDataMapping(DataMapping):
    x_column: str
    series_columns: List[str]


class AreaBumpChartConfig(BaseChartConfig):
    chart_type: Literal["areaBump"] = "areaBump"
    data_mapping: SeriesDataMapping


def build_ranking_series(
    table: Optional[DataTable],
    mapping: SeriesDataMapping,
    strictly_positive: bool,
) -> List[Dict[str, Any]]:
    headers, data = parse_data_table(table)
    if not data or mapping.x_column not in headers:
        return []

    result = []
    for col in mapping.series_columns:
        if col not in headers:
            continue
        points = []
        for row in data:
            x = clean_string(row.get(mapping.x_column))
            y = to_number(row.get(col))
            if x == "Unknown" or y < 0 or (strictly_positive and y == 0):
                continue
            points.append({"x": x, "y": y})
        if points:
            result.append({"id": clean_string(col), "data": points})
    return result


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = AreaBumpChartConfig.coerce(config)
    return build_ranking_series(table, config.data_mapping, strictly_positive=False)


def get_required_columns(config: Any) -> List[str]:
    mapping = AreaBumpChartConfig.coerce(config).data_mapping
    return [mapping.x_column, *mapping.series_columns]


validate = column_validator(get_required_columns)
