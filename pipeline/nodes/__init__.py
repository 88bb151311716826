"""
Workflow Nodes Package
======================
Node models that can be wired into a workflow.

Nodes:
- DataInputNodeModel: CSV file from a URL
- PostgresInputNodeModel: one PostgreSQL table
- ChartNodeModel: renders its input into chart data
"""

from pipeline.nodes.base import NodeModel
from pipeline.nodes.chart import ChartNodeModel, ChartOutput
from pipeline.nodes.data_input import DataInputNodeModel
from pipeline.nodes.postgres_input import PostgresInputNodeModel

__all__ = [
    "ChartNodeModel",
    "ChartOutput",
    "DataInputNodeModel",
    "NodeModel",
    "PostgresInputNodeModel",
]
