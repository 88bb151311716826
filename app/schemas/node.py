"""
Node Schemas
============
Pydantic models for the workflow node API endpoints.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.chart import TablePayload
from pipeline.nodes.postgres_input import CamelModel, PostgresConfig, TableMetadata


class CsvPreviewRequest(BaseModel):
    """Request body for a CSV data-input preview."""

    csv_url: str = Field(..., description="URL of the CSV file")
    csv_file_name: str = ""
    limit: int = Field(20, ge=1, le=1000, description="Rows to return")


class CsvPreviewResponse(BaseModel):
    row_count: int
    table: TablePayload


class PostgresAction(str, Enum):
    """Operations of the PostgreSQL endpoint."""
    LIST_TABLES = "list_tables"
    GET_TABLE_DATA = "get_table_data"


class PostgresRequest(BaseModel):
    """Request body for the PostgreSQL endpoint."""

    action: PostgresAction
    config: PostgresConfig
    table_name: Optional[str] = None
    page: int = Field(1, ge=1)
    page_size: int = Field(100, ge=1, le=10000)
    fetch_all: bool = False


class PostgresTablesResponse(CamelModel):
    tables: List[TableMetadata]
    total_tables: int
