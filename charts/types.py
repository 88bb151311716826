"""
Chart Types
===========
The closed set of chart-type identifiers understood by the registry.
"""

from enum import Enum
from typing import List


class ChartType(str, Enum):
    """Chart-type tag. Values match the identifiers stored in dashboards."""
    SCATTER = "scatter"
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    HEATMAP = "heatmap"
    RADAR = "radar"
    AREA_BUMP = "areaBump"
    CALENDAR = "calendar"
    CHORD = "chord"
    CIRCLE_PACKING = "circlePacking"
    SANKEY = "sankey"
    BOXPLOT = "boxplot"
    BUMP = "bump"
    BULLET = "bullet"
    FUNNEL = "funnel"
    STREAM = "stream"
    SUNBURST = "sunburst"
    WAFFLE = "waffle"
    NETWORK = "network"
    RADIALBAR = "radialbar"
    SWARMPLOT = "swarmplot"
    TREEMAP = "treemap"
    VORONOI = "voronoi"
    CHOROPLETH = "choropleth"
    GEOMAP = "geomap"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]
