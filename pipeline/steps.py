"""
Workflow Steps
==============
The LangGraph nodes of the chart workflow.

Each step reads the node models it drives from
`config["configurable"]`:
- source: a NodeModel with no inputs (CSV or PostgreSQL input node)
- chart:  a ChartNodeModel

Steps never raise; failures are appended to `errors` and the graph
routes to handle_error.
"""

from typing import Any, Dict, List

import structlog
from langchain_core.runnables import RunnableConfig

from charts.registry import validate_data_table_for_chart
from pipeline.context import ExecutionContext
from pipeline.nodes.base import NodeModel
from pipeline.nodes.chart import ChartNodeModel
from pipeline.state import WorkflowState

logger = structlog.get_logger(__name__)


def _configurable(config: RunnableConfig, key: str) -> Any:
    value = (config or {}).get("configurable", {}).get(key)
    if value is None:
        raise ValueError(f"No '{key}' node configured for this run")
    return value


def _progress_entries(context: ExecutionContext) -> List[Dict[str, Any]]:
    return [
        {"node": context.node_id, "progress": progress, "message": message}
        for progress, message in context.progress_history
    ]


async def load_source(state: WorkflowState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Execute the source node and keep its single output table.
    """
    try:
        source: NodeModel = _configurable(config, "source")
        context = ExecutionContext(f"{state['run_id']}:{source.node_type}")
        tables = await source.execute([], context)
        table = tables[0]

        return {
            "table": table,
            "row_count": table.size,
            "progress": _progress_entries(context),
            "current_node": "load_source",
            "node_history": ["load_source"],
        }
    except Exception as e:
        logger.error("Source step failed", run_id=state["run_id"], error=str(e))
        return {
            "errors": [f"Source loading failed: {str(e)}"],
            "current_node": "load_source",
            "node_history": ["load_source"],
        }


def validate_chart(state: WorkflowState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Check that the loaded table has every column the chart needs.
    """
    try:
        chart: ChartNodeModel = _configurable(config, "chart")
        table = state["table"]
        if not chart.is_configured():
            chart.auto_configure(table.spec)

        validation = validate_data_table_for_chart(
            chart.config.chart_type, table, chart.build_chart_config()
        )
        result: Dict[str, Any] = {
            "validation": validation,
            "current_node": "validate_chart",
            "node_history": ["validate_chart"],
        }
        if not validation.valid:
            missing = ", ".join(validation.missing_columns) or "chart mapping incomplete"
            result["errors"] = [f"Chart validation failed: {missing}"]
        return result
    except Exception as e:
        return {
            "errors": [f"Chart validation failed: {str(e)}"],
            "current_node": "validate_chart",
            "node_history": ["validate_chart"],
        }


async def render_chart(state: WorkflowState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Execute the chart node against the loaded table.
    """
    try:
        chart: ChartNodeModel = _configurable(config, "chart")
        context = ExecutionContext(f"{state['run_id']}:{chart.node_type}")
        await chart.execute([state["table"]], context)

        output = context.chart_outputs[-1].to_dict() if context.chart_outputs else None
        return {
            "chart_output": output,
            "progress": _progress_entries(context),
            "current_node": "render_chart",
            "node_history": ["render_chart"],
        }
    except Exception as e:
        logger.error("Chart step failed", run_id=state["run_id"], error=str(e))
        return {
            "errors": [f"Chart rendering failed: {str(e)}"],
            "current_node": "render_chart",
            "node_history": ["render_chart"],
        }


def handle_error(state: WorkflowState) -> Dict[str, Any]:
    """
    Record the failure; the run ends here.
    """
    errors = state.get("errors", []) or ["An unknown error occurred during the workflow"]
    logger.warning("Workflow failed", run_id=state["run_id"], errors=errors)

    return {
        "chart_output": None,
        "current_node": "handle_error",
        "node_history": ["handle_error"],
    }
