"""
Calendar Chart
==============
`{day: "YYYY-MM-DD", value}` entries. Rows with a blank date or value,
or a date that does not parse, are skipped.

validate() is stricter than for most charts: besides the required
columns it also fails when no row carries a usable value.
"""

from datetime import timezone
from typing import Any, Dict, List, Literal, Optional

import structlog
from pydantic import Field

from charts.base import BaseChartConfig, ChartModel, DataMapping
from charts.table import DataTable, parse_data_table
from charts.utils import (
    ColumnValidation,
    compact,
    to_date,
    to_number,
    validate_data_table_columns,
)

logger = structlog.get_logger(__name__)

DATA_MAPPING_EXAMPLE = {
    "description": (
        "Calendar charts require date and value columns. Dates should be in "
        "a parseable format (YYYY-MM-DD, MM/DD/YYYY, etc.), and values numeric."
    ),
    "csvColumns": ["date", "value", "category"],
    "dataMapping": {"dateColumn": "date", "valueColumn": "value"},
}


class CalendarDataMapping(DataMapping):
    date_column: str
    value_column: str


class CalendarChartConfig(BaseChartConfig):
    chart_type: Literal["calendar"] = "calendar"
    data_mapping: CalendarDataMapping
    date_from: Optional[str] = Field(default=None, alias="from")
    date_to: Optional[str] = Field(default=None, alias="to")


class CalendarDataCheck(ChartModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _format_day(value: Any) -> Optional[str]:
    parsed = to_date(value)
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m-%d")


def process(table: Optional[DataTable], config: Any) -> List[Dict[str, Any]]:
    config = CalendarChartConfig.coerce(config)
    _, data = parse_data_table(table)
    mapping = config.data_mapping

    entries = []
    for index, row in enumerate(data):
        date_value = row.get(mapping.date_column)
        value = row.get(mapping.value_column)
        if not date_value or _is_blank(value):
            continue

        day = _format_day(date_value)
        if day is None:
            logger.debug("Skipping invalid calendar date", row=index + 1, value=str(date_value))
            continue
        entries.append({"day": day, "value": to_number(value)})
    return entries


def check_calendar_data(table: Optional[DataTable], config: Any) -> CalendarDataCheck:
    """Report blocking errors and non-blocking warnings for calendar data."""
    config = CalendarChartConfig.coerce(config)
    headers, data = parse_data_table(table)
    mapping = config.data_mapping

    if not data:
        return CalendarDataCheck(valid=False, errors=["No data rows found in DataTable"])

    errors = []
    if mapping.date_column not in headers:
        errors.append(
            f"Date column '{mapping.date_column}' not found in DataTable headers: {', '.join(headers)}"
        )
    if mapping.value_column not in headers:
        errors.append(
            f"Value column '{mapping.value_column}' not found in DataTable headers: {', '.join(headers)}"
        )
    if errors:
        return CalendarDataCheck(valid=False, errors=errors)

    valid_rows = 0
    invalid_dates = 0
    for row in data:
        date_value = row.get(mapping.date_column)
        if date_value and _format_day(date_value) is None:
            invalid_dates += 1
        if not _is_blank(row.get(mapping.value_column)):
            valid_rows += 1

    warnings = []
    if valid_rows == 0:
        errors.append("No valid data rows found")
    if invalid_dates:
        warnings.append(f"{invalid_dates} rows have invalid dates")

    return CalendarDataCheck(valid=not errors, errors=errors, warnings=warnings)


def get_required_columns(config: Any) -> List[str]:
    mapping = CalendarChartConfig.coerce(config).data_mapping
    return compact([mapping.date_column, mapping.value_column])


def validate(table: Optional[DataTable], config: Any) -> ColumnValidation:
    check = check_calendar_data(table, config)
    columns = validate_data_table_columns(table, get_required_columns(config))
    columns.valid = check.valid and columns.valid
    return columns
