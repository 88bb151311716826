"""
Treemap
=======
Nested `{id, name, value, children}` tree. With a parent column the rows
are linked into a hierarchy (see charts.hierarchy); without one they hang
flat under a synthetic root.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.hierarchy import build_flat_hierarchy, build_hierarchy, empty_hierarchy
from charts.table import DataTable, parse_data_table
from charts.utils import column_validator, compact

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Treemaps display hierarchical data as nested rectangles, with size "
        "representing values."
    ),
    "csvColumns": ["Category", "Subcategory", "Value", "Label"],
    "dataMapping": {
        "idColumn": "Category",
        "parentColumn": "Subcategory",
        "valueColumn": "Value",
        "labelColumn": "Label",
    },
}


class HierarchyDataMapping(DataMapping):
    id_column: str
    value_column: str
    parent_column: Optional[str] = None


class TreemapDataMapping(HierarchyDataMapping):
    label_column: Optional[str] = None


class TreemapChartConfig(BaseChartConfig):
    chart_type: Literal["treemap"] = "treemap"
    data_mapping: TreemapDataMapping
    tile: Optional[str] = None


def process_hierarchy(
    table: Optional[DataTable],
    mapping: HierarchyDataMapping,
    label_column: Optional[str] = None,
) -> Dict[str, Any]:
    """Shared by treemap, sunburst and circle packing."""
    headers, data = parse_data_table(table)
    if not data or mapping.id_column not in headers or mapping.value_column not in headers:
        return empty_hierarchy()

    if label_column not in headers:
        label_column = None

    if not mapping.parent_column or mapping.parent_column not in headers:
        return build_flat_hierarchy(data, mapping.id_column, mapping.value_column, label_column)
    return build_hierarchy(
        data, mapping.id_column, mapping.value_column, mapping.parent_column, label_column
    )


def process(table: Optional[DataTable], config: Any) -> Dict[str, Any]:
    config = TreemapChartConfig.coerce(config)
    mapping = config.data_mapping
    return process_hierarchy(table, mapping, mapping.label_column)


def get_required_columns(config: Any) -> List[str]:
    mapping = TreemapChartConfig.coerce(config).data_mapping
    return compact([mapping.id_column, mapping.value_column, mapping.parent_column, mapping.label_column])


validate = column_validator(get_required_columns)
