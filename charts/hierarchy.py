"""
Hierarchy Builder
=================
Turns parent/child rows into the nested `{id, name, value, children}`
tree used by treemap, sunburst and circle packing charts.

The build runs in two passes over an arena of nodes keyed by id:

1. index pass - one node per row (a repeated id replaces the earlier
   row's node in place)
2. attach pass - each node is attached to its parent, or becomes a
   root when the parent is blank, unknown or the node itself

Parent links that form a cycle are cut at the first cycle member in row
order, which becomes a root. A single root is returned as the tree; any
other number of roots is wrapped in a synthetic "root" node.
"""

from typing import Any, Dict, List, Optional

from charts.utils import clean_string, to_number

MISSING = "Unknown"


def empty_hierarchy() -> Dict[str, Any]:
    return {"id": "root", "name": "Root", "children": []}


def _wrap(children: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"id": "root", "name": "Root", "children": children}


def build_flat_hierarchy(
    data: List[Dict[str, Any]],
    id_column: str,
    value_column: str,
    label_column: Optional[str] = None,
) -> Dict[str, Any]:
    """One level under a synthetic root; only positive values are kept."""
    children = []
    for index, row in enumerate(data):
        node_id = clean_string(row.get(id_column))
        if node_id == MISSING:
            node_id = f"item-{index}"
        value = to_number(row.get(value_column))
        if value <= 0:
            continue
        name = clean_string(row.get(label_column)) if label_column else node_id
        children.append({"id": node_id, "name": name, "value": value})
    return _wrap(children)


def _break_cycles(order: List[str], parent_of: Dict[str, Optional[str]]) -> None:
    """Cut parent links so every node reaches a root. Mutates parent_of."""
    position = {node_id: i for i, node_id in enumerate(order)}
    settled = set()

    for start in order:
        path: List[str] = []
        on_path = set()
        current: Optional[str] = start
        while current is not None and current not in settled:
            if current in on_path:
                cycle = path[path.index(current):]
                head = min(cycle, key=position.__getitem__)
                parent_of[head] = None
                break
            path.append(current)
            on_path.add(current)
            current = parent_of[current]
        settled.update(path)


def build_hierarchy(
    data: List[Dict[str, Any]],
    id_column: str,
    value_column: str,
    parent_column: str,
    label_column: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a nested tree from rows carrying an id and a parent id."""
    nodes: Dict[str, Dict[str, Any]] = {}
    parents: Dict[str, str] = {}

    # Pass 1: index
    for row in data:
        node_id = clean_string(row.get(id_column))
        if node_id == MISSING:
            continue
        value = to_number(row.get(value_column))
        name = clean_string(row.get(label_column)) if label_column else node_id
        nodes[node_id] = {"id": node_id, "name": name, "value": max(value, 0)}
        parents[node_id] = clean_string(row.get(parent_column))

    if not nodes:
        return empty_hierarchy()

    order = list(nodes)
    parent_of: Dict[str, Optional[str]] = {}
    for node_id in order:
        parent = parents[node_id]
        if parent == MISSING or parent == node_id or parent not in nodes:
            parent_of[node_id] = None
        else:
            parent_of[node_id] = parent

    _break_cycles(order, parent_of)

    # Pass 2: attach
    roots = []
    for node_id in order:
        parent = parent_of[node_id]
        if parent is None:
            roots.append(nodes[node_id])
        else:
            nodes[parent].setdefault("children", []).append(nodes[node_id])

    if len(roots) == 1:
        return roots[0]
    return _wrap(roots)
