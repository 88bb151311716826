"""
Data Tables
===========
Generic columnar table consumed by every chart processor.

A table is an ordered list of column specs plus ordered rows, each row a
fixed-width list of cells. Processors never touch rows directly; they go
through parse_data_table(), which flattens the table into plain dicts
keyed by column name.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Sequence

import pandas as pd


class CellType(str, Enum):
    """Inferred type of a column."""
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    type: CellType = CellType.STRING


@dataclass(frozen=True)
class DataTableSpec:
    """Ordered column definitions. Column names must be unique."""
    columns: Sequence[ColumnSpec] = ()

    def __post_init__(self):
        seen = set()
        for column in self.columns:
            if column.name in seen:
                raise ValueError(f"Duplicate column name: {column.name}")
            seen.add(column.name)
        object.__setattr__(self, "columns", tuple(self.columns))

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def find_column_index(self, name: str) -> int:
        for index, column in enumerate(self.columns):
            if column.name == name:
                return index
        return -1

    def __len__(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class Cell:
    value: Any = None

    def get_value(self) -> Any:
        return self.value


@dataclass(frozen=True)
class DataRow:
    key: str
    cells: Sequence[Cell] = ()

    def __post_init__(self):
        object.__setattr__(self, "cells", tuple(self.cells))


@dataclass
class DataTable:
    """A closed, immutable-by-convention table."""
    spec: DataTableSpec
    rows: List[DataRow] = field(default_factory=list)

    def __post_init__(self):
        width = len(self.spec)
        for row in self.rows:
            if len(row.cells) != width:
                raise ValueError(
                    f"Row {row.key} has {len(row.cells)} cells, expected {width}"
                )

    @property
    def size(self) -> int:
        return len(self.rows)

    @property
    def column_names(self) -> List[str]:
        return self.spec.column_names

    def __iter__(self) -> Iterator[DataRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    # ----- Constructors -----

    @classmethod
    def from_records(
        cls,
        records: Sequence[Mapping[str, Any]],
        columns: Optional[Sequence[str]] = None,
        types: Optional[Mapping[str, CellType]] = None,
    ) -> "DataTable":
        """
        Build a table from a list of dicts.

        Column order follows `columns` when given, otherwise first-seen
        key order. Types default to number when every non-null value in
        the column is numeric, string otherwise.
        """
        if columns is None:
            columns = []
            for record in records:
                for key in record:
                    if key not in columns:
                        columns.append(key)

        types = dict(types or {})
        specs = []
        for name in columns:
            col_type = types.get(name)
            if col_type is None:
                values = [r.get(name) for r in records if r.get(name) is not None]
                numeric = values and all(
                    isinstance(v, (int, float)) and not isinstance(v, bool) for v in values
                )
                col_type = CellType.NUMBER if numeric else CellType.STRING
            specs.append(ColumnSpec(name, CellType(col_type)))

        rows = [
            DataRow(f"row-{i}", [Cell(record.get(name)) for name in columns])
            for i, record in enumerate(records)
        ]
        return cls(DataTableSpec(specs), rows)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "DataTable":
        """Build a table from a DataFrame, mapping pandas dtypes to cell types."""
        specs = []
        for name in df.columns:
            dtype = df[name].dtype
            if pd.api.types.is_bool_dtype(dtype):
                col_type = CellType.BOOLEAN
            elif pd.api.types.is_numeric_dtype(dtype):
                col_type = CellType.NUMBER
            elif pd.api.types.is_datetime64_any_dtype(dtype):
                col_type = CellType.DATE
            else:
                col_type = CellType.STRING
            specs.append(ColumnSpec(str(name), col_type))

        # NaN/NaT become None so cells never carry pandas sentinels
        clean = df.astype(object).where(pd.notna(df), None)
        rows = [
            DataRow(f"row-{i}", [Cell(value) for value in values])
            for i, values in enumerate(clean.itertuples(index=False, name=None))
        ]
        return cls(DataTableSpec(specs), rows)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [[cell.get_value() for cell in row.cells] for row in self.rows],
            columns=self.column_names,
        )


class DataTableContainer:
    """
    Row sink handed out by ExecutionContext.create_data_table().

    Rows are appended one by one and the finished table is obtained
    with close(). The container rejects rows of the wrong width.
    """

    def __init__(self, spec: DataTableSpec):
        self.spec = spec
        self._rows: List[DataRow] = []
        self._closed = False

    def add_row(self, row: DataRow) -> None:
        if self._closed:
            raise RuntimeError("Cannot add rows to a closed table")
        if len(row.cells) != len(self.spec):
            raise ValueError(
                f"Row {row.key} has {len(row.cells)} cells, expected {len(self.spec)}"
            )
        self._rows.append(row)

    @property
    def size(self) -> int:
        return len(self._rows)

    def close(self) -> DataTable:
        self._closed = True
        return DataTable(self.spec, list(self._rows))


# =============================================================================
# TableAccessor
# =============================================================================

class ParsedTable(NamedTuple):
    headers: List[str]
    data: List[Dict[str, Any]]


def parse_data_table(table: Optional[DataTable]) -> ParsedTable:
    """
    Flatten a table into headers plus one dict per row.

    An absent or empty table yields empty headers and data.
    """
    if table is None or table.size == 0:
        return ParsedTable([], [])

    headers = table.column_names
    data = []
    for row in table.rows:
        record = {}
        for index, header in enumerate(headers):
            cell = row.cells[index] if index < len(row.cells) else None
            record[header] = cell.get_value() if cell is not None else None
        data.append(record)

    return ParsedTable(headers, data)


def get_data_table_headers(table: Optional[DataTable]) -> List[str]:
    if table is None or table.size == 0:
        return []
    return table.column_names
