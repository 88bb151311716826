"""
Pydantic Schemas Package
========================
API request/response models for validation.
"""

from .chart import (
    ChartProcessRequest,
    ChartProcessResponse,
    ChartTypesResponse,
    ColumnMappingResponse,
    RequiredColumnsResponse,
    TableColumn,
    TablePayload,
)
from .node import (
    CsvPreviewRequest,
    CsvPreviewResponse,
    PostgresAction,
    PostgresRequest,
    PostgresTablesResponse,
)

__all__ = [
    "ChartProcessRequest",
    "ChartProcessResponse",
    "ChartTypesResponse",
    "ColumnMappingResponse",
    "CsvPreviewRequest",
    "CsvPreviewResponse",
    "PostgresAction",
    "PostgresRequest",
    "PostgresTablesResponse",
    "RequiredColumnsResponse",
    "TableColumn",
    "TablePayload",
]
