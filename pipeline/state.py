"""
Workflow State Definition
=========================
Defines the state that flows through the LangGraph workflow.

The state carries:
- The table produced by the source node
- The column check for the configured chart
- The chart output published by the chart node
- Progress bookkeeping (current node, history, errors)
"""

import operator
from typing import Annotated, Any, Dict, List, Optional, TypedDict

from charts.table import DataTable
from charts.utils import ColumnValidation


class WorkflowState(TypedDict):
    """
    The state object that flows through the LangGraph workflow.

    Node models are not part of the state; they travel in the run
    config under `configurable` ("source" and "chart").
    """

    # ----- Input -----
    run_id: str

    # ----- Source -----
    table: Optional[DataTable]
    row_count: int

    # ----- Chart -----
    validation: Optional[ColumnValidation]
    chart_output: Optional[Dict[str, Any]]
    progress: Annotated[List[Dict[str, Any]], operator.add]  # Append-only

    # ----- Metadata -----
    current_node: str
    node_history: Annotated[List[str], operator.add]  # Append-only
    errors: Annotated[List[str], operator.add]  # Append-only


def create_initial_state(run_id: str) -> WorkflowState:
    """Create initial state for a new workflow run."""
    return WorkflowState(
        run_id=run_id,
        table=None,
        row_count=0,
        validation=None,
        chart_output=None,
        progress=[],
        current_node="start",
        node_history=[],
        errors=[],
    )
