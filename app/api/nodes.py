"""
Node API Endpoints
==================
Runs the input nodes on demand so dialogs can preview their data.

Endpoints:
- POST /nodes/data-input/preview - Load a CSV and return the first rows
- POST /nodes/postgres - List tables or read a page of a table
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from app.schemas.chart import TablePayload
from app.schemas.node import (
    CsvPreviewRequest,
    CsvPreviewResponse,
    PostgresAction,
    PostgresRequest,
    PostgresTablesResponse,
)
from pipeline.context import ExecutionContext
from pipeline.errors import NodeError
from pipeline.nodes.data_input import DataInputNodeModel
from pipeline.nodes.postgres_input import PostgresInputNodeModel

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_data_input_node() -> DataInputNodeModel:
    return DataInputNodeModel()


def get_postgres_node() -> PostgresInputNodeModel:
    return PostgresInputNodeModel()


@router.post("/nodes/data-input/preview", response_model=CsvPreviewResponse)
async def preview_csv(
    request: CsvPreviewRequest,
    node: DataInputNodeModel = Depends(get_data_input_node),
):
    """
    Run the CSV data-input node and return the typed table.

    Only the first `limit` rows are returned; row_count is the full size.
    """
    settings = {"csv_url": request.csv_url, "csv_file_name": request.csv_file_name}
    try:
        node.validate_settings(settings)
        node.load_settings(settings)
        [table] = await node.execute([], ExecutionContext("data-input-preview"))
    except NodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CsvPreviewResponse(
        row_count=table.size,
        table=TablePayload.from_data_table(table, limit=request.limit),
    )


@router.post("/nodes/postgres")
async def postgres_action(
    request: PostgresRequest,
    node: PostgresInputNodeModel = Depends(get_postgres_node),
):
    """
    Browse a PostgreSQL database.

    Actions:
    - list_tables: every table and view with column metadata
    - get_table_data: one page of `table_name` (or all rows with fetch_all)
    """
    if not request.config.is_complete:
        raise HTTPException(status_code=400, detail="Missing required connection parameters")

    node.set_connection_config(request.config)
    try:
        if request.action == PostgresAction.LIST_TABLES:
            tables = await node.fetch_available_tables()
            return PostgresTablesResponse(tables=tables, total_tables=len(tables))

        if not request.table_name:
            raise HTTPException(status_code=400, detail="Table name is required")
        return await node.fetch_table_data(
            request.table_name,
            page=request.page,
            page_size=request.page_size,
            fetch_all=request.fetch_all,
        )
    except NodeError as e:
        logger.warning("PostgreSQL request failed", action=request.action.value, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
