"""
Execution Context
=================
Per-node handle passed to NodeModel.execute().

Gives the node a way to build its output tables, report progress and
notice cancellation. Chart nodes also publish their rendered output here.
"""

import threading
from typing import Any, Callable, List, Optional, Tuple

import structlog

from charts.table import DataTableContainer, DataTableSpec
from pipeline.errors import ExecutionCanceledError

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[str, float, Optional[str]], None]


class ExecutionContext:
    """Progress, cancellation and output sinks for one node run."""

    def __init__(self, node_id: str, on_progress: Optional[ProgressCallback] = None):
        self.node_id = node_id
        self.progress_history: List[Tuple[float, Optional[str]]] = []
        self.chart_outputs: List[Any] = []
        self._on_progress = on_progress
        self._canceled = threading.Event()

    def create_data_table(self, spec: DataTableSpec) -> DataTableContainer:
        return DataTableContainer(spec)

    def cancel(self) -> None:
        self._canceled.set()

    @property
    def is_canceled(self) -> bool:
        return self._canceled.is_set()

    def check_canceled(self) -> None:
        """Raise ExecutionCanceledError if cancel() has been called."""
        if self._canceled.is_set():
            raise ExecutionCanceledError(f"Execution of node {self.node_id} was canceled")

    def set_progress(self, progress: float, message: Optional[str] = None) -> None:
        progress = min(max(progress, 0.0), 1.0)
        self.progress_history.append((progress, message))
        logger.debug("Node progress", node_id=self.node_id, progress=progress, message=message)
        if self._on_progress is not None:
            self._on_progress(self.node_id, progress, message)

    @property
    def progress(self) -> float:
        return self.progress_history[-1][0] if self.progress_history else 0.0
