"""
Box Plot
========
Groups numeric values by `groupBy` (optionally `"group - subGroup"`) and
computes per-group quartile statistics.

Quartiles are read straight from the sorted values at
`floor(n * 0.25)` and `floor(n * 0.75)`, without interpolation; only the
median is interpolated for even-length groups. Whiskers are clamped to
the Tukey fences (1.5 x IQR) and values beyond them are outliers.
"""

import math
from typing import Any, Dict, List, Literal, Optional, Sequence

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Box plots show the distribution of values through quartiles and "
        "outliers for different groups."
    ),
    "csvColumns": ["Category", "Score", "Group", "Region"],
    "dataMapping": {"groupBy": "Category", "value": "Score", "subGroup": "Group"},
}


class BoxPlotDataMapping(DataMapping):
    group_by: str
    value: str
    sub_group: Optional[str] = None


class BoxPlotChartConfig(BaseChartConfig):
    chart_type: Literal["boxplot"] = "boxplot"
    data_mapping: BoxPlotDataMapping


def box_stats(values: Sequence[float]) -> Optional[Dict[str, Any]]:
    """Quartile statistics for one group, or None for an empty group."""
    if not values:
        return None

    ordered = sorted(values)
    n = len(ordered)
    half = n // 2
    median = (ordered[half - 1] + ordered[half]) / 2 if n % 2 == 0 else ordered[half]

    q1 = ordered[math.floor(n * 0.25)]
    q3 = ordered[math.floor(n * 0.75)]
    iqr = q3 - q1
    low = max(ordered[0], q1 - 1.5 * iqr)
    high = min(ordered[-1], q3 + 1.5 * iqr)

    stats: Dict[str, Any] = {"min": low, "q1": q1, "median": median, "q3": q3, "max": high}
    outliers = [v for v in ordered if v < low or v > high]
    if outliers:
        stats["outliers"] = outliers
    return stats


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = BoxPlotChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.group_by not in headers or mapping.value not in headers:
        return []

    use_sub_group = bool(mapping.sub_group) and mapping.sub_group in headers
    groups: Dict[str, List[float]] = {}
    for row in data:
        key = clean_string(row.get(mapping.group_by))
        if use_sub_group:
            key = f"{key} - {clean_string(row.get(mapping.sub_group))}"
        groups.setdefault(key, []).append(to_number(row.get(mapping.value)))

    result = []
    for group, values in groups.items():
        stats = box_stats(values)
        if stats is not None:
            result.append({"group": group, **stats})
    return result


def get_required_columns(config: Any) -> List[str]:
    mapping = BoxPlotChartConfig.coerce(config).data_mapping
    return compact([mapping.group_by, mapping.value, mapping.sub_group])


validate = column_validator(get_required_columns)
