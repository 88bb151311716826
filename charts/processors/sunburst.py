"""
Sunburst
========
Same tree as the treemap. The category column is validated but does not
change the tree shape.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig
from charts.processors.treemap import HierarchyDataMapping, process_hierarchy
from charts.table import DataTable
from charts.utils import column_validator, compact

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Sunburst charts display hierarchical data in concentric circles, "
        "for nested categories and proportions."
    ),
    "csvColumns": ["Level1", "Level2", "Level3", "Value"],
    "dataMapping": {
        "idColumn": "Level1",
        "parentColumn": "Level2",
        "valueColumn": "Value",
        "categoryColumn": "Level3",
    },
}


class CategorizedHierarchyMapping(HierarchyDataMapping):
    category_column: Optional[str] = None


class SunburstChartConfig(BaseChartConfig):
    chart_type: Literal["sunburst"] = "sunburst"
    data_mapping: CategorizedHierarchyMapping
    corner_radius: Optional[float] = None


def process(table: Optional[DataTable], config: Any) -> Dict[str, Any]:
    config = SunburstChartConfig.coerce(config)
    return process_hierarchy(table, config.data_mapping)


def get_required_columns(config: Any) -> List[str]:
    mapping = SunburstChartConfig.coerce(config).data_mapping
    return compact([mapping.id_column, mapping.value_column, mapping.parent_column, mapping.category_column])


validate = column_validator(get_required_columns)
