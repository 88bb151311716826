"""
Circle Packing
==============
Nested circles from the same tree the treemap uses.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig
from charts.processors.sunburst import CategorizedHierarchyMapping
from charts.processors.treemap import process_hierarchy
from charts.table import DataTable
from charts.utils import column_validator, compact

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Circle packing displays hierarchical data as nested circles. Each "
        "circle size represents a value."
    ),
    "csvColumns": ["ID", "Parent", "Value", "Category", "Name"],
    "dataMapping": {
        "idColumn": "ID",
        "parentColumn": "Parent",
        "valueColumn": "Value",
        "categoryColumn": "Category",
    },
}


class CirclePackingChartConfig(BaseChartConfig):
    chart_type: Literal["circlePacking"] = "circlePacking"
    data_mapping: CategorizedHierarchyMapping
    padding: Optional[float] = None


def process(table: Optional[DataTable], config: Any) -> Dict[str, Any]:
    config = CirclePackingChartConfig.coerce(config)
    return process_hierarchy(table, config.data_mapping)


def get_required_columns(config: Any) -> List[str]:
    mapping = CirclePackingChartConfig.coerce(config).data_mapping
    return compact([mapping.id_column, mapping.value_column, mapping.parent_column])


validate = column_validator(get_required_columns)
