"""
Chart Registry
==============
Single dispatch surface keyed by chart type.

Usage:
    from charts.registry import process_chart_data

    data = process_chart_data("bar", table, {"dataMapping": {...}})

The public functions never raise: an unknown chart type or a failing
processor is logged and replaced with a safe default (an empty list, or
an invalid ColumnValidation). run_chart_processor() exposes the same
call with an explicit ok / empty / failed outcome for callers that need
to tell "no rows survived" apart from "the processor crashed".
"""

from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Annotated, Any, Callable, Dict, List, Optional, Type, Union

import structlog
from pydantic import Field, TypeAdapter

from charts.base import BaseChartConfig
from charts.processors import (
    area_bump,
    bar,
    boxplot,
    bullet,
    bump,
    calendar,
    chord,
    choropleth,
    circle_packing,
    funnel,
    geomap,
    heatmap,
    line,
    network,
    pie,
    radar,
    radialbar,
    sankey,
    scatter,
    stream,
    sunburst,
    swarmplot,
    treemap,
    voronoi,
    waffle,
)
from charts.table import DataTable
from charts.types import ChartType
from charts.utils import ColumnValidation

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ChartProcessor:
    """The three operations every chart type provides, plus its config model."""
    process: Callable[[Optional[DataTable], Any], Any]
    validate: Callable[[Optional[DataTable], Any], ColumnValidation]
    get_required_columns: Callable[[Any], List[str]]
    config_model: Type[BaseChartConfig]
    data_mapping_example: Dict[str, Any]

    @classmethod
    def from_module(cls, module: ModuleType, config_model: Type[BaseChartConfig]) -> "ChartProcessor":
        return cls(
            process=module.process,
            validate=module.validate,
            get_required_columns=module.get_required_columns,
            config_model=config_model,
            data_mapping_example=module.DATA_MAPPING_EXAMPLE,
        )


CHART_PROCESSORS: Dict[ChartType, ChartProcessor] = {
    ChartType.SCATTER: ChartProcessor.from_module(scatter, scatter.ScatterChartConfig),
    ChartType.BAR: ChartProcessor.from_module(bar, bar.BarChartConfig),
    ChartType.LINE: ChartProcessor.from_module(line, line.LineChartConfig),
    ChartType.PIE: ChartProcessor.from_module(pie, pie.PieChartConfig),
    ChartType.HEATMAP: ChartProcessor.from_module(heatmap, heatmap.HeatmapChartConfig),
    ChartType.RADAR: ChartProcessor.from_module(radar, radar.RadarChartConfig),
    ChartType.AREA_BUMP: ChartProcessor.from_module(area_bump, area_bump.AreaBumpChartConfig),
    ChartType.CALENDAR: ChartProcessor.from_module(calendar, calendar.CalendarChartConfig),
    ChartType.CHORD: ChartProcessor.from_module(chord, chord.ChordChartConfig),
    ChartType.CIRCLE_PACKING: ChartProcessor.from_module(
        circle_packing, circle_packing.CirclePackingChartConfig
    ),
    ChartType.SANKEY: ChartProcessor.from_module(sankey, sankey.SankeyChartConfig),
    ChartType.BOXPLOT: ChartProcessor.from_module(boxplot, boxplot.BoxPlotChartConfig),
    ChartType.BUMP: ChartProcessor.from_module(bump, bump.BumpChartConfig),
    ChartType.BULLET: ChartProcessor.from_module(bullet, bullet.BulletChartConfig),
    ChartType.FUNNEL: ChartProcessor.from_module(funnel, funnel.FunnelChartConfig),
    ChartType.STREAM: ChartProcessor.from_module(stream, stream.StreamChartConfig),
    ChartType.SUNBURST: ChartProcessor.from_module(sunburst, sunburst.SunburstChartConfig),
    ChartType.WAFFLE: ChartProcessor.from_module(waffle, waffle.WaffleChartConfig),
    ChartType.NETWORK: ChartProcessor.from_module(network, network.NetworkChartConfig),
    ChartType.RADIALBAR: ChartProcessor.from_module(radialbar, radialbar.RadialBarChartConfig),
    ChartType.SWARMPLOT: ChartProcessor.from_module(swarmplot, swarmplot.SwarmplotChartConfig),
    ChartType.TREEMAP: ChartProcessor.from_module(treemap, treemap.TreemapChartConfig),
    ChartType.VORONOI: ChartProcessor.from_module(voronoi, voronoi.VoronoiChartConfig),
    ChartType.CHOROPLETH: ChartProcessor.from_module(choropleth, choropleth.ChoroplethChartConfig),
    ChartType.GEOMAP: ChartProcessor.from_module(geomap, geomap.GeomapChartConfig),
}

_missing = set(ChartType) - set(CHART_PROCESSORS)
if _missing:
    raise RuntimeError(f"No processor registered for: {sorted(t.value for t in _missing)}")

# Tagged union over every config model, keyed by `chartType`
ChartConfig = Annotated[
    Union[tuple(processor.config_model for processor in CHART_PROCESSORS.values())],
    Field(discriminator="chart_type"),
]

_chart_config_adapter: TypeAdapter = TypeAdapter(ChartConfig)


def get_chart_processor(chart_type: Union[ChartType, str]) -> Optional[ChartProcessor]:
    try:
        return CHART_PROCESSORS[ChartType(chart_type)]
    except ValueError:
        return None


def parse_chart_config(chart_type: Union[ChartType, str], config: Any) -> BaseChartConfig:
    """Validate a raw config against the model of its chart type.

    Raises:
        ValueError: unknown chart type or invalid config (pydantic's
            ValidationError is a ValueError)
    """
    processor = get_chart_processor(chart_type)
    if processor is None:
        raise ValueError(f"Unknown chart type: {chart_type}")
    if isinstance(config, processor.config_model):
        return config
    if isinstance(config, BaseChartConfig):
        config = config.model_dump(by_alias=True)

    tag = ChartType(chart_type).value
    return _chart_config_adapter.validate_python({**(config or {}), "chartType": tag})


def _empty_validation() -> ColumnValidation:
    return ColumnValidation(valid=False, missing_columns=[], available_columns=[])


# =============================================================================
# Public dispatch
# =============================================================================

def process_chart_data(
    chart_type: Union[ChartType, str],
    table: Optional[DataTable],
    config: Any,
) -> Any:
    """Run the chart's processor; [] on unknown type or error."""
    processor = get_chart_processor(chart_type)
    if processor is None:
        logger.warning("Unknown chart type", chart_type=str(chart_type))
        return []

    try:
        return processor.process(table, config)
    except Exception as e:
        logger.error("Chart processing failed", chart_type=str(chart_type), error=str(e), exc_info=True)
        return []


def validate_data_table_for_chart(
    chart_type: Union[ChartType, str],
    table: Optional[DataTable],
    config: Any,
) -> ColumnValidation:
    processor = get_chart_processor(chart_type)
    if processor is None:
        logger.warning("Unknown chart type", chart_type=str(chart_type))
        return _empty_validation()

    try:
        return processor.validate(table, config)
    except Exception as e:
        logger.error("Chart validation failed", chart_type=str(chart_type), error=str(e), exc_info=True)
        return _empty_validation()


def get_required_columns_for_chart(
    chart_type: Union[ChartType, str],
    config: Any,
) -> List[str]:
    processor = get_chart_processor(chart_type)
    if processor is None:
        logger.warning("Unknown chart type", chart_type=str(chart_type))
        return []

    try:
        return processor.get_required_columns(config)
    except Exception as e:
        logger.error(
            "Required column lookup failed", chart_type=str(chart_type), error=str(e), exc_info=True
        )
        return []


# =============================================================================
# Diagnostic result
# =============================================================================

class ChartStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class ChartResult:
    status: ChartStatus
    data: Any
    reason: Optional[str] = None


def _is_empty(data: Any) -> bool:
    if isinstance(data, dict):
        if "children" in data:
            return not data["children"] and "value" not in data
        if "matrix" in data:
            return not data["matrix"]
        if "nodes" in data:
            return not data["nodes"]
    return not data


def run_chart_processor(
    chart_type: Union[ChartType, str],
    table: Optional[DataTable],
    config: Any,
) -> ChartResult:
    """Like process_chart_data, but reports why a result is empty."""
    processor = get_chart_processor(chart_type)
    if processor is None:
        return ChartResult(ChartStatus.FAILED, [], f"Unknown chart type: {chart_type}")

    try:
        data = processor.process(table, config)
    except Exception as e:
        logger.error("Chart processing failed", chart_type=str(chart_type), error=str(e))
        return ChartResult(ChartStatus.FAILED, [], str(e))

    if _is_empty(data):
        return ChartResult(ChartStatus.EMPTY, data)
    return ChartResult(ChartStatus.OK, data)
