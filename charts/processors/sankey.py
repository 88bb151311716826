"""
Sankey Diagram
==============
`{nodes, links}` graph built from source/target/value rows. Only links
with a positive value between two different nodes are kept; nodes are
the endpoints of kept links in first-seen order.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, to_number

DEFAULT_NODE_COLOR = "hsl(206, 70%, 50%)"

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Sankey diagrams show flows between nodes. Data should contain "
        "source-target-value triplets."
    ),
    "csvColumns": ["Source", "Target", "Value", "Category"],
    "dataMapping": {"sourceColumn": "Source", "targetColumn": "Target", "valueColumn": "Value"},
}


class SankeyDataMapping(DataMapping):
    source_column: str
    target_column: str
    value_column: str


class SankeyChartConfig(BaseChartConfig):
    chart_type: Literal["sankey"] = "sankey"
    data_mapping: SankeyDataMapping
    node_color: Optional[str] = None


def process(table: Optional[DataTable], config: Any) -> Dict[str, List[Dict[str, Any]]]:
    config = SankeyChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping
    empty: Dict[str, List[Dict[str, Any]]] = {"nodes": [], "links": []}

    if not data or any(
        col not in headers
        for col in (mapping.source_column, mapping.target_column, mapping.value_column)
    ):
        return empty

    node_ids: Dict[str, None] = {}
    links = []
    for row in data:
        source = clean_string(row.get(mapping.source_column))
        target = clean_string(row.get(mapping.target_column))
        value = to_number(row.get(mapping.value_column))
        if "Unknown" in (source, target) or source == target or value <= 0:
            continue
        node_ids.setdefault(source)
        node_ids.setdefault(target)
        links.append({"source": source, "target": target, "value": value})

    if not links:
        return empty

    color = config.node_color or DEFAULT_NODE_COLOR
    return {
        "nodes": [{"id": node_id, "nodeColor": color} for node_id in node_ids],
        "links": links,
    }


def get_required_columns(config: Any) -> List[str]:
    mapping = SankeyChartConfig.coerce(config).data_mapping
    return [mapping.source_column, mapping.target_column, mapping.value_column]


validate = column_validator(get_required_columns)
