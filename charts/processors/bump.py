"""
Bump Chart
==========
Ranking series like the area bump chart, but ranks start at 1 so only
strictly positive values are kept.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig
from charts.processors.area_bump import SeriesDataMapping, build_ranking_series
from charts.table import DataTable
from charts.utils import column_validator

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Bump charts show ranking changes over time with lines connecting "
        "points. Lower numbers indicate better ranks."
    ),
    "csvColumns": ["Year", "TeamA_Rank", "TeamB_Rank", "TeamC_Rank", "TeamD_Rank"],
    "dataMapping": {
        "xColumn": "Year",
        "seriesColumns": ["TeamA_Rank", "TeamB_Rank", "TeamC_Rank", "TeamD_Rank"],
    },
}


class BumpChartConfig(BaseChartConfig):
    chart_type: Literal["bump"] = "bump"
    data_mapping: SeriesDataMapping


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = BumpChartConfig.coerce(config)
    return build_ranking_series(table, config.data_mapping, strictly_positive=True)


def get_required_columns(config: Any) -> List[str]:
    mapping = BumpChartConfig.coerce(config).data_mapping
    return [mapping.x_column, *mapping.series_columns]


validate = column_validator(get_required_columns)
