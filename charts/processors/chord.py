"""
Chord Diagram
=============
Adjacency matrix plus key labels.

Keys are the distinct from/to values, sorted. The n x n matrix starts at
zero and each row writes `matrix[from][to] = value`; a repeated edge
overwrites the earlier one. A matrix given directly in the data mapping
is passed through without reading the table.
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Chord diagrams show relationships between entities using curved "
        "ribbons. Data can be provided as a matrix or as from/to/value rows."
    ),
    "csvColumns": ["From", "To", "Value", "Category"],
    "dataMapping": {"fromColumn": "From", "toColumn": "To", "valueColumn": "Value"},
}


class ChordDataMapping(DataMapping):
    from_column: Optional[str] = None
    to_column: Optional[str] = None
    value_column: Optional[str] = None
    matrix: Optional[List[List[float]]] = None
    keys: Optional[List[str]] = None


class ChordChartConfig(BaseChartConfig):
    chart_type: Literal["chord"] = "chord"
    data_mapping: ChordDataMapping


def empty_matrix() -> Dict[str, Any]:
    return {"matrix": [], "keys": []}


def build_matrix(
    data: List[Dict[str, Any]],
    from_column: str,
    to_column: str,
    value_column: str,
) -> Dict[str, Any]:
    edges = []
    for row in data:
        source = clean_string(row.get(from_column))
        target = clean_string(row.get(to_column))
        if source == "Unknown" or target == "Unknown":
            continue
        edges.append((source, target, to_number(row.get(value_column))))

    keys = sorted({node for source, target, _ in edges for node in (source, target)})
    index = {key: i for i, key in enumerate(keys)}
    matrix = [[0] * len(keys) for _ in keys]
    for source, target, value in edges:
        matrix[index[source]][index[target]] = value

    return {"matrix": matrix, "keys": keys}


def process(table: Optional[DataTable], config: Any) -> Dict[str, Any]:
    config = ChordChartConfig.coerce(config)
    mapping = config.data_mapping

    if mapping.matrix:
        keys = mapping.keys or [f"Node {i + 1}" for i in range(len(mapping.matrix))]
        return {"matrix": mapping.matrix, "keys": keys}

    headers, data = parse_data_table(table)
    columns = (mapping.from_column, mapping.to_column, mapping.value_column)
    if not data or not all(col and col in headers for col in columns):
        return empty_matrix()

    result = build_matrix(data, *columns)
    return result if result["matrix"] else empty_matrix()


def get_required_columns(config: Any) -> List[str]:
    mapping = ChordChartConfig.coerce(config).data_mapping
    if mapping.matrix:
        return []
    return [col for col in (mapping.from_column, mapping.to_column, mapping.value_column) if col]


validate = column_validator(get_required_columns)
