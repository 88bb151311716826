"""
Workflow Pipeline Package
=========================
Node models and the LangGraph workflow that feeds the chart layer.

Usage:
    from pipeline import run_workflow_sync
    from pipeline.nodes import ChartNodeModel, DataInputNodeModel

    source = DataInputNodeModel()
    source.load_settings({"csv_url": "https://example.com/sales.csv"})
    chart = ChartNodeModel()
    chart.load_settings({"chartType": "pie", "dataMapping": {...}})

    result = run_workflow_sync(source, chart)
"""

from pipeline.context import ExecutionContext
from pipeline.errors import (
    ExecutionCanceledError,
    NodeConfigurationError,
    NodeError,
    NodeExecutionError,
    SettingsValidationError,
)
from pipeline.graph import build_graph, create_app, get_app, run_workflow, run_workflow_sync
from pipeline.settings import NodeSettings
from pipeline.state import WorkflowState, create_initial_state

__all__ = [
    "ExecutionCanceledError",
    "ExecutionContext",
    "NodeConfigurationError",
    "NodeError",
    "NodeExecutionError",
    "NodeSettings",
    "SettingsValidationError",
    "WorkflowState",
    "build_graph",
    "create_app",
    "create_initial_state",
    "get_app",
    "run_workflow",
    "run_workflow_sync",
]
