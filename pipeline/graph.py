"""
LangGraph Graph Definition
==========================
Defines the StateGraph that runs a source node into a chart node.

Flow:
    load_source
        → validate_chart
        → render_chart
        → END

Any step that appends to `errors` is routed to handle_error → END.
"""

import asyncio
import uuid
from typing import Any, Dict, Literal, Optional

from langgraph.graph import END, StateGraph

from pipeline.nodes.base import NodeModel
from pipeline.nodes.chart import ChartNodeModel
from pipeline.state import WorkflowState, create_initial_state
from pipeline.steps import handle_error, load_source, render_chart, validate_chart


# ----- Conditional Edge Functions -----

def check_source_loaded(state: WorkflowState) -> Literal["validate_chart", "handle_error"]:
    """Continue only when the source produced a table."""
    if state.get("errors") or state.get("table") is None:
        return "handle_error"
    return "validate_chart"


def check_chart_valid(state: WorkflowState) -> Literal["render_chart", "handle_error"]:
    if state.get("errors"):
        return "handle_error"
    return "render_chart"


def check_chart_rendered(state: WorkflowState) -> Literal["end", "handle_error"]:
    if state.get("errors"):
        return "handle_error"
    return "end"


def build_graph() -> StateGraph:
    """
    Build the workflow graph.

    Returns:
        StateGraph (not compiled)
    """
    graph = StateGraph(WorkflowState)

    graph.add_node("load_source", load_source)
    graph.add_node("validate_chart", validate_chart)
    graph.add_node("render_chart", render_chart)
    graph.add_node("handle_error", handle_error)

    graph.set_entry_point("load_source")

    graph.add_conditional_edges(
        "load_source",
        check_source_loaded,
        {
            "validate_chart": "validate_chart",
            "handle_error": "handle_error",
        }
    )
    graph.add_conditional_edges(
        "validate_chart",
        check_chart_valid,
        {
            "render_chart": "render_chart",
            "handle_error": "handle_error",
        }
    )
    graph.add_conditional_edges(
        "render_chart",
        check_chart_rendered,
        {
            "end": END,
            "handle_error": "handle_error",
        }
    )

    graph.add_edge("handle_error", END)

    return graph


def create_app():
    """
    Create the compiled LangGraph application.

    Tables in the state are not serializable, so no checkpointer is used.
    """
    return build_graph().compile()


# Singleton instance
_app_instance = None


def get_app():
    """Get or create the singleton app instance."""
    global _app_instance
    if _app_instance is None:
        _app_instance = create_app()
    return _app_instance


async def run_workflow(
    source: NodeModel,
    chart: ChartNodeModel,
    run_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Run a source node into a chart node.

    Args:
        source: Input node producing one table
        chart: Chart node rendering it
        run_id: Identifier used in logs and progress entries

    Returns:
        Final state; `chart_output` is set on success, `errors` otherwise
    """
    initial_state = create_initial_state(run_id or str(uuid.uuid4()))
    config = {"configurable": {"source": source, "chart": chart}}

    try:
        final_state = await get_app().ainvoke(initial_state, config)
    except Exception as e:
        return {**initial_state, "errors": [str(e)]}

    if final_state is None:
        return {**initial_state, "errors": ["Workflow returned no result"]}
    return final_state


def run_workflow_sync(
    source: NodeModel,
    chart: ChartNodeModel,
    run_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Synchronous version of run_workflow.
    """
    return asyncio.run(run_workflow(source, chart, run_id))
