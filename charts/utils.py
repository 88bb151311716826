"""
Chart Data Utilities
====================
Lenient scalar coercion, column validation and sorting shared by all
chart processors.

None of these functions raise on malformed values: bad numbers become 0,
bad strings become "Unknown", bad dates become None.
"""

import math
import numbers
import re
from datetime import date, datetime
from decimal import Decimal
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import pandas as pd
from pydantic import Field

from charts.base import ChartModel, SortingConfig
from charts.table import DataTable, get_data_table_headers

# Leading float literal, the way browsers' parseFloat reads "12.5kg"
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_NULL_STRINGS = ("", "null", "undefined")

SortConfig = SortingConfig


# =============================================================================
# Scalar Coercers
# =============================================================================

def _is_numeric(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def to_number(value: Any) -> float:
    """Coerce any value to a finite number, falling back to 0."""
    if _is_numeric(value):
        number = float(value)
        if not math.isfinite(number):
            return 0
        return value if isinstance(value, int) else number

    if value is None:
        return 0

    cleaned = _stringify(value).strip()
    if cleaned in _NULL_STRINGS:
        return 0

    match = _FLOAT_PREFIX.match(cleaned)
    if not match:
        return 0
    try:
        number = float(match.group(0))
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def clean_string(value: Any) -> str:
    """Stringify and trim; missing or blank values become "Unknown"."""
    if value is None:
        return "Unknown"
    cleaned = _stringify(value).strip()
    return cleaned or "Unknown"


def to_date(value: Any) -> Optional[datetime]:
    """Parse a value into a datetime, or None when it is not a date."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None

    cleaned = str(value).strip()
    if cleaned in _NULL_STRINGS:
        return None

    try:
        parsed = pd.to_datetime(cleaned, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def process_x_value(value: Any, scale_type: Optional[str] = None) -> Any:
    """Coerce an x value according to the axis scale type."""
    if scale_type == "time":
        return to_date(value) or datetime.now()
    if scale_type == "linear":
        return to_number(value)
    return clean_string(value)


def positive_values(values: Sequence[Any]) -> List[float]:
    return [v for v in (to_number(value) for value in values) if v > 0]


# =============================================================================
# Column Validator
# =============================================================================

class ColumnValidation(ChartModel):
    valid: bool
    missing_columns: List[str] = Field(default_factory=list)
    available_columns: List[str] = Field(default_factory=list)


def validate_data_table_columns(
    table: Optional[DataTable],
    required_columns: Sequence[str],
) -> ColumnValidation:
    """Check that every required column is present in the table headers."""
    headers = get_data_table_headers(table)
    missing = [col for col in required_columns if col not in headers]
    return ColumnValidation(
        valid=not missing,
        missing_columns=missing,
        available_columns=headers,
    )


def column_validator(
    get_required_columns: Callable[[Any], List[str]],
) -> Callable[[Optional[DataTable], Any], ColumnValidation]:
    """Build the standard validate(table, config) for a processor."""

    def validate(table: Optional[DataTable], config: Any) -> ColumnValidation:
        return validate_data_table_columns(table, get_required_columns(config))

    return validate


def compact(columns: Sequence[Optional[str]]) -> List[str]:
    """Drop unset column references from a required-columns list."""
    return [col for col in columns if col]


# =============================================================================
# Sort Engine
# =============================================================================

def _sort_number(value: Any) -> float:
    return value if _is_numeric(value) else 0


def _sort_timestamp(value: Any) -> float:
    return value.timestamp() if isinstance(value, datetime) else 0


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def sort_chart_data(
    records: List[Dict[str, Any]],
    config: Union[SortConfig, Dict[str, Any], None] = None,
    x_scale_type: Optional[str] = None,
    index_column: Optional[str] = None,
    value_columns: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """
    Order processed chart records by index or by value.

    sort_by="value" compares `value_column` when it is one of
    `value_columns`, otherwise the row total across `value_columns`.
    sort_by="index" compares the index column as a timestamp ("time"
    scale), a number ("linear") or a case-insensitive string.

    Returns the input unchanged when disabled or empty, otherwise a new
    sorted list. The input list is never mutated.
    """
    config = SortConfig.coerce(config)
    value_columns = list(value_columns or [])

    if not config.enabled or not records:
        return records

    def index_key(record: Dict[str, Any]) -> Any:
        if index_column:
            return record.get(index_column)
        return next(iter(record.values()), None)

    def compare(a: Dict[str, Any], b: Dict[str, Any]) -> int:
        if config.sort_by == "value":
            if config.value_column and config.value_column in value_columns:
                result = _cmp(
                    _sort_number(a.get(config.value_column)),
                    _sort_number(b.get(config.value_column)),
                )
            else:
                total_a = sum(_sort_number(a.get(col)) for col in value_columns)
                total_b = sum(_sort_number(b.get(col)) for col in value_columns)
                result = _cmp(total_a, total_b)
        else:
            key_a, key_b = index_key(a), index_key(b)
            if x_scale_type == "time":
                result = _cmp(_sort_timestamp(key_a), _sort_timestamp(key_b))
            elif x_scale_type == "linear":
                result = _cmp(_sort_number(key_a), _sort_number(key_b))
            else:
                result = _cmp(str(key_a).lower(), str(key_b).lower())

        return -result if config.direction == "desc" else result

    return sorted(records, key=cmp_to_key(compare))
