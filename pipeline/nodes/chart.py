"""
Chart Node
==========
Terminal node (1 input, 0 outputs) that turns its input table into the
data for one chart and publishes it on the execution context.

When no column mapping is configured the node picks the first input
columns for the chart's main channels, so a freshly dropped chart shows
something without configuration.
"""

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union

import structlog

from charts.registry import process_chart_data
from charts.table import DataTable, DataTableSpec
from charts.types import ChartType
from pipeline.context import ExecutionContext
from pipeline.errors import NodeExecutionError, SettingsValidationError
from pipeline.nodes.base import NodeModel
from pipeline.settings import NodeSettings

logger = structlog.get_logger(__name__)

MappingValue = Union[str, List[str]]

DEFAULT_TITLE = "Chart Visualization"


@dataclass
class ChartOutput:
    """Rendered chart payload handed to the dashboard."""
    chart_type: str
    title: str
    description: str
    data_mapping: Dict[str, MappingValue]
    config: Dict[str, Any]
    data: Any
    data_rows: int
    data_columns: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ChartNodeConfig:
    chart_type: str = ChartType.SCATTER.value
    title: str = DEFAULT_TITLE
    description: str = ""
    data_mapping: Dict[str, MappingValue] = field(default_factory=dict)
    chart_config: Dict[str, Any] = field(default_factory=dict)


def mapped_columns(data_mapping: Dict[str, MappingValue]) -> List[str]:
    """Every non-empty column name referenced by a mapping, in order."""
    columns: List[str] = []
    for value in data_mapping.values():
        values = value if isinstance(value, list) else [value]
        columns.extend(v for v in values if isinstance(v, str) and v.strip())
    return columns


def _load_json_object(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, dict):
        return dict(raw)
    if isinstance(raw, str) and raw.strip():
        try:
            value = json.loads(raw)
        except ValueError:
            return {}
        return value if isinstance(value, dict) else {}
    return {}


class ChartNodeModel(NodeModel):
    """Processes its input through the chart registry."""

    node_type = "chart"

    def __init__(self, config: Optional[ChartNodeConfig] = None):
        super().__init__(in_ports=1, out_ports=0)
        self.config = config or ChartNodeConfig()

    # ----- Accessors -----

    def set_chart_type(self, chart_type: Union[ChartType, str]) -> None:
        """Switch chart type; the old mapping no longer applies."""
        self.config.chart_type = ChartType(chart_type).value
        self.config.data_mapping = {}

    def set_data_mapping(self, data_mapping: Dict[str, MappingValue]) -> None:
        self.config.data_mapping = dict(data_mapping)

    def is_configured(self) -> bool:
        return bool(mapped_columns(self.config.data_mapping))

    def build_chart_config(self) -> Dict[str, Any]:
        """Stored styling config overlaid with the node's own fields."""
        return {
            **self.config.chart_config,
            "chartType": self.config.chart_type,
            "title": self.config.title,
            "description": self.config.description,
            "dataMapping": dict(self.config.data_mapping),
        }

    def auto_configure(self, spec: DataTableSpec) -> None:
        names = spec.column_names
        if len(names) < 2:
            return

        chart_type = self.config.chart_type
        if chart_type == ChartType.BAR.value:
            mapping: Dict[str, MappingValue] = {"indexBy": names[0], "valueColumns": [names[1]]}
        elif chart_type == ChartType.LINE.value:
            mapping = {"xColumn": names[0], "yColumns": [names[1]]}
        elif chart_type == ChartType.PIE.value:
            mapping = {"idColumn": names[0], "valueColumn": names[1]}
        elif chart_type == ChartType.HEATMAP.value:
            if len(names) < 3:
                return
            mapping = {"xColumn": names[0], "yColumn": names[1], "valueColumn": names[2]}
        elif chart_type == ChartType.SCATTER.value and len(names) > 2:
            mapping = {"xColumn": names[0], "yColumn": names[1], "seriesColumn": names[2]}
        else:
            mapping = {"xColumn": names[0], "yColumn": names[1]}

        logger.info("Chart auto-configured", chart_type=chart_type, data_mapping=mapping)
        self.config.data_mapping = mapping

    # ----- NodeModel -----

    async def execute(self, inputs: List[DataTable], context: ExecutionContext) -> List[DataTable]:
        table = inputs[0] if inputs else None

        if not self.is_configured():
            if table is None or not len(table.spec):
                return []
            self.auto_configure(table.spec)
            if not self.is_configured():
                return []

        if table is None:
            return []

        available = set(table.column_names)
        missing = [column for column in mapped_columns(self.config.data_mapping) if column not in available]
        if missing:
            raise NodeExecutionError(f"Mapped columns not found in input data: {', '.join(missing)}")

        context.set_progress(0.5, "Processing chart data...")
        chart_config = self.build_chart_config()
        data = process_chart_data(self.config.chart_type, table, chart_config)

        output = ChartOutput(
            chart_type=self.config.chart_type,
            title=self.config.title,
            description=self.config.description,
            data_mapping=dict(self.config.data_mapping),
            config=chart_config,
            data=data,
            data_rows=table.size,
            data_columns=len(table.spec),
        )
        context.chart_outputs.append(output)
        context.set_progress(1.0, "Chart ready")

        logger.info("Chart rendered", node_id=context.node_id, chart_type=output.chart_type, rows=output.data_rows)
        return []

    def configure(self, in_specs: List[DataTableSpec]) -> List[DataTableSpec]:
        return []

    def load_settings(self, settings: NodeSettings) -> None:
        settings = NodeSettings.wrap(settings)
        self.config = ChartNodeConfig(
            chart_type=settings.get_string("chartType") or ChartType.SCATTER.value,
            title=settings.get_string("title", DEFAULT_TITLE),
            description=settings.get_string("description"),
            data_mapping=_load_json_object(settings.get("dataMapping")),
            chart_config=_load_json_object(settings.get("chartConfig")),
        )

    def save_settings(self, settings: NodeSettings) -> None:
        settings.set("chartType", self.config.chart_type)
        settings.set("title", self.config.title)
        settings.set("description", self.config.description)
        settings.set("dataMapping", json.dumps(self.config.data_mapping))
        settings.set("chartConfig", json.dumps(self.config.chart_config))

    def validate_settings(self, settings: NodeSettings) -> None:
        chart_type = NodeSettings.wrap(settings).get_string("chartType")
        if chart_type and chart_type not in ChartType.values():
            raise SettingsValidationError(f"Unknown chart type: {chart_type}")
