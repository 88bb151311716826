"""
Chart API Endpoints
===================
Exposes the chart registry over HTTP.

Endpoints:
- GET /charts/types - List chart types with their mapping examples
- GET /charts/{chart_type}/mapping - Mapping form fields for a chart type
- POST /charts/{chart_type}/process - Reshape a table for a chart
- POST /charts/{chart_type}/validate - Check a table has the mapped columns
- POST /charts/{chart_type}/required-columns - Columns a config needs
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from app.schemas.chart import (
    ChartProcessRequest,
    ChartProcessResponse,
    ChartTypesResponse,
    ColumnMappingResponse,
    RequiredColumnsResponse,
)
from charts.mapping import (
    get_available_chart_types,
    get_column_mapping_config,
    get_data_mapping_examples,
    is_chart_type_supported,
)
from charts.registry import (
    get_required_columns_for_chart,
    run_chart_processor,
    validate_data_table_for_chart,
)
from charts.table import DataTable
from charts.utils import ColumnValidation

router = APIRouter()


def _require_chart_type(chart_type: str) -> None:
    if not is_chart_type_supported(chart_type):
        raise HTTPException(status_code=404, detail=f"Unknown chart type: {chart_type}")


def _request_table(request: ChartProcessRequest) -> DataTable:
    try:
        return request.table.to_data_table()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/charts/types", response_model=ChartTypesResponse)
async def list_chart_types():
    """List every supported chart type with an example mapping."""
    return ChartTypesResponse(
        chart_types=get_available_chart_types(),
        examples=get_data_mapping_examples(),
    )


@router.get("/charts/{chart_type}/mapping", response_model=ColumnMappingResponse)
async def get_mapping(chart_type: str):
    _require_chart_type(chart_type)
    return ColumnMappingResponse(
        chart_type=chart_type,
        fields=get_column_mapping_config(chart_type),
        example=get_data_mapping_examples()[chart_type],
    )


@router.post("/charts/{chart_type}/process", response_model=ChartProcessResponse)
async def process_chart(chart_type: str, request: ChartProcessRequest):
    """
    Reshape the table for the chart type.

    A processor failure does not fail the request: status is "failed"
    with the reason and data is empty.
    """
    _require_chart_type(chart_type)
    result = run_chart_processor(chart_type, _request_table(request), request.config)
    return ChartProcessResponse(
        chart_type=chart_type,
        status=result.status.value,
        data=result.data,
        reason=result.reason,
    )


@router.post("/charts/{chart_type}/validate", response_model=ColumnValidation)
async def validate_chart(chart_type: str, request: ChartProcessRequest):
    _require_chart_type(chart_type)
    return validate_data_table_for_chart(chart_type, _request_table(request), request.config)


@router.post("/charts/{chart_type}/required-columns", response_model=RequiredColumnsResponse)
async def required_columns(chart_type: str, config: Dict[str, Any] = Body(default={})):
    _require_chart_type(chart_type)
    return RequiredColumnsResponse(
        chart_type=chart_type,
        required_columns=get_required_columns_for_chart(chart_type, config),
    )
