"""
Geo Map
=======
`{lat, lng}` points with optional `value`, `label` and `color`. Rows with
a blank latitude or longitude are skipped rather than plotted at (0, 0).
"""

from typing import Any, Dict, List, Literal, Optional

from charts.base import BaseChartConfig, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import clean_string, column_validator, compact, to_number

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Geomap charts display geographic point data on a map, for "
        "locations, events, or spatial distributions."
    ),
    "csvColumns": ["Latitude", "Longitude", "Population", "City_Name"],
    "dataMapping": {
        "latitudeColumn": "Latitude",
        "longitudeColumn": "Longitude",
        "valueColumn": "Population",
        "labelColumn": "City_Name",
    },
}


class GeomapDataMapping(DataMapping):
    latitude_column: str
    longitude_column: str
    value_column: Optional[str] = None
    label_column: Optional[str] = None
    color_column: Optional[str] = None


class GeomapChartConfig(BaseChartConfig):
    chart_type: Literal["geomap"] = "geomap"
    data_mapping: GeomapDataMapping
    projection_type: Optional[str] = None


def _blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = GeomapChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data or mapping.latitude_column not in headers or mapping.longitude_column not in headers:
        return []

    optional = [
        (key, column, to_number if key == "value" else clean_string)
        for key, column in (
            ("value", mapping.value_column),
            ("label", mapping.label_column),
            ("color", mapping.color_column),
        )
        if column and column in headers
    ]

    points = []
    for row in data:
        lat, lng = row.get(mapping.latitude_column), row.get(mapping.longitude_column)
        if _blank(lat) or _blank(lng):
            continue
        point: Dict[str, Any] = {"lat": to_number(lat), "lng": to_number(lng)}
        for key, column, coerce in optional:
            point[key] = coerce(row.get(column))
        points.append(point)
    return points


def get_required_columns(config: Any) -> List[str]:
    mapping = GeomapChartConfig.coerce(config).data_mapping
    return compact([
        mapping.latitude_column,
        mapping.longitude_column,
        mapping.value_column,
        mapping.label_column,
        mapping.color_column,
    ])


validate = column_validator(get_required_columns)
