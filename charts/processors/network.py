"""
Network Graph
=============
`{nodes, links}` graph. Each row may describe a node (id, group, size)
and a link (source, target, value). Link endpoints that never appear as
node rows are added with the default radius. Self-loops are dropped.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, to_number

DEFAULT_NODE_RADIUS = 8
DEFAULT_LINK_DISTANCE = 100

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Network charts display relationships between entities as nodes and "
        "links, for social networks, dependencies, or flow diagrams."
    ),
    "csvColumns": ["Node_ID", "Group", "Size", "Source", "Target", "Weight"],
    "dataMapping": {
        "nodeIdColumn": "Node_ID",
        "nodeGroupColumn": "Group",
        "nodeSizeColumn": "Size",
        "linkSourceColumn": "Source",
        "linkTargetColumn": "Target",
        "linkValueColumn": "Weight",
    },
}


class NetworkDataMapping(DataMapping):
    node_id_column: str
    node_group_column: Optional[str] = None
    node_size_column: Optional[str] = None
    link_source_column: Optional[str] = None
    link_target_column: Optional[str] = None
    link_value_column: Optional[str] = None


class NetworkChartConfig(BaseChartConfig):
    chart_type: Literal["network"] = "network"
    data_mapping: NetworkDataMapping
    repulsivity: Optional[float] = None
    iterations: Optional[int] = None


def _has(column: Optional[str], headers: List[str]) -> bool:
    return bool(column) and column in headers


def process(table: Optional[DataTable], config: Any) -> Dict[str, List[Dict[str, Any]]]:
    config = NetworkChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.node_id_column not in headers:
        return {"nodes": [], "links": []}

    with_links = _has(mapping.link_source_column, headers) and _has(mapping.link_target_column, headers)
    nodes: Dict[str, Dict[str, Any]] = {}
    links = []

    for row in data:
        node_id = clean_string(row.get(mapping.node_id_column))
        if node_id != "Unknown" and node_id not in nodes:
            node: Dict[str, Any] = {"id": node_id, "radius": DEFAULT_NODE_RADIUS}
            if _has(mapping.node_size_column, headers):
                node["radius"] = to_number(row.get(mapping.node_size_column))
            if _has(mapping.node_group_column, headers):
                node["group"] = clean_string(row.get(mapping.node_group_column))
            nodes[node_id] = node

        if not with_links:
            continue

        source = clean_string(row.get(mapping.link_source_column))
        target = clean_string(row.get(mapping.link_target_column))
        if "Unknown" in (source, target) or source == target:
            continue

        distance = DEFAULT_LINK_DISTANCE
        if _has(mapping.link_value_column, headers):
            distance = to_number(row.get(mapping.link_value_column))
        links.append({"source": source, "target": target, "distance": distance})

        for endpoint in (source, target):
            nodes.setdefault(endpoint, {"id": endpoint, "radius": DEFAULT_NODE_RADIUS})

    return {"nodes": list(nodes.values()), "links": links}


def get_required_columns(config: Any) -> List[str]:
    mapping = NetworkChartConfig.coerce(config).data_mapping
    return compact([
        mapping.node_id_column,
        mapping.node_group_column,
        mapping.node_size_column,
        mapping.link_source_column,
        mapping.link_target_column,
        mapping.link_value_column,
    ])


validate = column_validator(get_required_columns)
