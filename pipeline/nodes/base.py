"""
Node Model Contract
===================
Base class shared by every workflow node.

A node has a fixed number of input and output table ports. The engine
calls configure() with the input specs to learn the output specs before
running, then execute() with the actual input tables.
"""

from abc import ABC, abstractmethod
from typing import List

from charts.table import DataTable, DataTableSpec
from pipeline.context import ExecutionContext
from pipeline.settings import NodeSettings


class NodeModel(ABC):
    """Abstract workflow node with `in_ports` inputs and `out_ports` outputs."""

    node_type: str = "node"

    def __init__(self, in_ports: int, out_ports: int):
        self.in_ports = in_ports
        self.out_ports = out_ports

    def get_nr_in_ports(self) -> int:
        return self.in_ports

    def get_nr_out_ports(self) -> int:
        return self.out_ports

    @abstractmethod
    async def execute(self, inputs: List[DataTable], context: ExecutionContext) -> List[DataTable]:
        """Produce one table per output port."""

    @abstractmethod
    def configure(self, in_specs: List[DataTableSpec]) -> List[DataTableSpec]:
        """Derive output specs from input specs without executing."""

    @abstractmethod
    def load_settings(self, settings: NodeSettings) -> None:
        ...

    @abstractmethod
    def save_settings(self, settings: NodeSettings) -> None:
        ...

    @abstractmethod
    def validate_settings(self, settings: NodeSettings) -> None:
        """Raise SettingsValidationError if `settings` cannot be loaded."""

    def reset(self) -> None:
        """Drop any state cached by a previous execution."""
