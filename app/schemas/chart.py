"""
Chart Schemas
=============
Pydantic models for the chart API endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from charts.table import CellType, DataTable


class TableColumn(BaseModel):
    """One column of a table sent over the wire."""

    name: str
    type: CellType = CellType.STRING


class TablePayload(BaseModel):
    """
    A table as JSON: column definitions plus one dict per row.

    Columns may be omitted, in which case they are taken from the row
    keys and typed number/string from the values.
    """

    columns: List[TableColumn] = []
    rows: List[Dict[str, Any]] = []

    def to_data_table(self) -> DataTable:
        if not self.columns:
            return DataTable.from_records(self.rows)
        return DataTable.from_records(
            self.rows,
            columns=[c.name for c in self.columns],
            types={c.name: c.type for c in self.columns},
        )

    @classmethod
    def from_data_table(cls, table: DataTable, limit: Optional[int] = None) -> "TablePayload":
        rows = table.rows if limit is None else table.rows[:limit]
        return cls(
            columns=[TableColumn(name=c.name, type=c.type) for c in table.spec.columns],
            rows=[
                {name: cell.get_value() for name, cell in zip(table.column_names, row.cells)}
                for row in rows
            ],
        )


class ChartProcessRequest(BaseModel):
    """Request body for process / validate endpoints."""

    table: TablePayload
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Chart config with a camelCase dataMapping",
    )


class ChartProcessResponse(BaseModel):
    chart_type: str
    status: str
    data: Any
    reason: Optional[str] = None


class RequiredColumnsResponse(BaseModel):
    chart_type: str
    required_columns: List[str]


class ChartTypesResponse(BaseModel):
    chart_types: List[str]
    examples: Dict[str, Dict[str, Any]]


class ColumnMappingResponse(BaseModel):
    chart_type: str
    fields: Dict[str, Dict[str, Any]]
    example: Dict[str, Any]
