"""
Charts Package
==============
Reshapes generic tabular data into the data shape each chart type needs.

Usage:
    from charts import DataTable, process_chart_data

    table = DataTable.from_records([{"cat": "A", "val": 5}])
    data = process_chart_data("pie", table, {
        "dataMapping": {"idColumn": "cat", "valueColumn": "val"},
    })
"""

from charts.registry import (
    CHART_PROCESSORS,
    ChartConfig,
    ChartResult,
    ChartStatus,
    get_required_columns_for_chart,
    parse_chart_config,
    process_chart_data,
    run_chart_processor,
    validate_data_table_for_chart,
)
from charts.table import (
    Cell,
    CellType,
    ColumnSpec,
    DataRow,
    DataTable,
    DataTableContainer,
    DataTableSpec,
    get_data_table_headers,
    parse_data_table,
)
from charts.types import ChartType
from charts.utils import (
    ColumnValidation,
    SortConfig,
    clean_string,
    process_x_value,
    sort_chart_data,
    to_date,
    to_number,
    validate_data_table_columns,
)

__all__ = [
    "CHART_PROCESSORS",
    "Cell",
    "CellType",
    "ChartConfig",
    "ChartResult",
    "ChartStatus",
    "ChartType",
    "ColumnSpec",
    "ColumnValidation",
    "DataRow",
    "DataTable",
    "DataTableContainer",
    "DataTableSpec",
    "SortConfig",
    "clean_string",
    "get_data_table_headers",
    "get_required_columns_for_chart",
    "parse_chart_config",
    "parse_data_table",
    "process_chart_data",
    "process_x_value",
    "run_chart_processor",
    "sort_chart_data",
    "to_date",
    "to_number",
    "validate_data_table_columns",
]
