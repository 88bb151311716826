"""
Column Mapping Helpers
======================
Metadata used by node dialogs and the API to build data-mapping forms.

The form fields for each chart type are derived from that chart's
DATA_MAPPING_EXAMPLE, so adding a key to an example adds it to the form.
"""

import re
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Union

from charts.registry import CHART_PROCESSORS
from charts.types import ChartType

_CAPITAL = re.compile(r"([A-Z])")


def get_available_chart_types() -> List[str]:
    return ChartType.values()


def is_chart_type_supported(chart_type: str) -> bool:
    return chart_type in get_available_chart_types()


def get_data_mapping_examples() -> Dict[str, Dict[str, Any]]:
    return {
        chart_type.value: processor.data_mapping_example
        for chart_type, processor in CHART_PROCESSORS.items()
    }


def mapping_label(key: str) -> str:
    """`xColumn` -> `X Column`."""
    spaced = _CAPITAL.sub(r" \1", key)
    return spaced[:1].upper() + spaced[1:]


@lru_cache()
def _column_mappings() -> Dict[str, Dict[str, Dict[str, Any]]]:
    mappings = {}
    for chart_type, example in get_data_mapping_examples().items():
        fields = example.get("dataMapping") or {}
        mappings[chart_type] = {
            key: {
                "key": key,
                "label": mapping_label(key),
                "example": value,
                "multiple": isinstance(value, list),
            }
            for key, value in fields.items()
        }
    return mappings


def get_column_mapping_config(chart_type: Union[ChartType, str]) -> Dict[str, Dict[str, Any]]:
    """Form field definitions for a chart type; {} when unknown."""
    key = chart_type.value if isinstance(chart_type, ChartType) else chart_type
    return dict(_column_mappings().get(key, {}))


def is_data_mapping_provided(data_mapping: Mapping[str, Any]) -> bool:
    """True when at least one mapping field names a column."""
    for value in (data_mapping or {}).values():
        if isinstance(value, (list, tuple)):
            if value:
                return True
        elif isinstance(value, str) and value:
            return True
    return False
