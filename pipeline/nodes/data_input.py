"""
CSV Data Input Node
===================
Source node (0 inputs, 1 output) that downloads a CSV file and turns it
into a typed DataTable.

Column types are inferred from the first rows of the file, ignoring
empty values:
- number  when more than 80% of the sampled values are numeric
- date    otherwise, when more than 70% parse as dates
- string  otherwise

Number cells are parsed (unparseable values become 0), date cells are
normalized to ISO-8601 UTC strings (unparseable values are kept as-is).
"""

import io
from datetime import timezone
from typing import Any, List, Literal, Optional
from urllib.parse import urlparse

import httpx
import pandas as pd
import structlog

from app.core.config import get_settings
from charts.table import Cell, CellType, ColumnSpec, DataRow, DataTable, DataTableSpec
from charts.utils import to_date
from pipeline.context import ExecutionContext
from pipeline.errors import NodeExecutionError, SettingsValidationError
from pipeline.nodes.base import NodeModel
from pipeline.settings import NodeSettings

logger = structlog.get_logger(__name__)

CsvSourceType = Literal["url", "upload", "conversation"]


# =============================================================================
# Parsing helpers
# =============================================================================

def read_csv_text(text: str) -> pd.DataFrame:
    """
    Parse CSV text into an all-string DataFrame with trimmed values.

    Raises:
        NodeExecutionError: empty file or header without rows
    """
    if not text.strip():
        raise NodeExecutionError("CSV file is empty")

    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        raise NodeExecutionError("CSV file is empty")

    if df.empty:
        raise NodeExecutionError("CSV file contains no data rows")

    df.columns = [str(column).strip() for column in df.columns]
    return df.apply(lambda column: column.str.strip())


def infer_column_type(
    values: pd.Series,
    sample_rows: int = 10,
    numeric_ratio: float = 0.8,
    date_ratio: float = 0.7,
) -> CellType:
    """Guess a column's type from its first `sample_rows` non-empty values."""
    sample = values.head(sample_rows)
    sample = sample[sample != ""]
    if sample.empty:
        return CellType.STRING

    numeric = pd.to_numeric(sample, errors="coerce").notna().sum()
    if numeric > len(sample) * numeric_ratio:
        return CellType.NUMBER

    dates = sum(1 for value in sample if to_date(value) is not None)
    if dates > len(sample) * date_ratio:
        return CellType.DATE

    return CellType.STRING


def _number_cell(raw: str) -> Any:
    if raw == "":
        return None
    number = pd.to_numeric(raw, errors="coerce")
    if pd.isna(number):
        return 0
    number = float(number)
    return int(number) if number.is_integer() else number


def _date_cell(raw: str) -> Any:
    if raw == "":
        return None
    parsed = to_date(raw)
    if parsed is None:
        return raw
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    iso = parsed.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")


def convert_cell(raw: str, cell_type: CellType) -> Any:
    if cell_type == CellType.NUMBER:
        return _number_cell(raw)
    if cell_type == CellType.DATE:
        return _date_cell(raw)
    return raw


# =============================================================================
# Node
# =============================================================================

class DataInputNodeModel(NodeModel):
    """Loads a CSV file from a URL into a single output table."""

    node_type = "data-input"

    CSV_URL_KEY = "csv_url"
    CSV_SOURCE_TYPE_KEY = "csv_source_type"
    CSV_FILE_NAME_KEY = "csv_file_name"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(in_ports=0, out_ports=1)
        self.csv_url = ""
        self.csv_source_type: CsvSourceType = "url"
        self.csv_file_name = ""
        self._transport = transport

    async def _fetch(self) -> str:
        settings = get_settings()
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=settings.csv_fetch_timeout_seconds,
            follow_redirects=True,
        ) as client:
            response = await client.get(self.csv_url)

        if not response.is_success:
            raise NodeExecutionError(
                f"Failed to fetch CSV: {response.status_code} {response.reason_phrase}".strip()
            )
        return response.text

    async def execute(self, inputs: List[DataTable], context: ExecutionContext) -> List[DataTable]:
        if not self.csv_url:
            raise NodeExecutionError("CSV URL is required. Please configure the node.")

        settings = get_settings()
        try:
            message = (
                f"Loading data from {self.csv_file_name}..."
                if self.csv_file_name
                else "Fetching CSV data..."
            )
            context.set_progress(0.1, message)
            text = await self._fetch()

            context.set_progress(0.5, "Parsing CSV data...")
            df = read_csv_text(text)
            column_types = [
                infer_column_type(
                    df[column],
                    sample_rows=settings.csv_type_sample_rows,
                    numeric_ratio=settings.csv_numeric_ratio,
                    date_ratio=settings.csv_date_ratio,
                )
                for column in df.columns
            ]

            context.set_progress(0.7, "Creating data table...")
            spec = DataTableSpec(
                [ColumnSpec(name, col_type) for name, col_type in zip(df.columns, column_types)]
            )
            output = context.create_data_table(spec)

            context.set_progress(0.8, "Processing data rows...")
            for index, values in enumerate(df.itertuples(index=False, name=None)):
                cells = [
                    Cell(convert_cell(raw, col_type))
                    for raw, col_type in zip(values, column_types)
                ]
                output.add_row(DataRow(f"row-{index}", cells))

            context.set_progress(1.0, "Completed")
            table = output.close()
        except Exception as e:
            logger.error("CSV load failed", node_id=context.node_id, url=self.csv_url, error=str(e))
            raise NodeExecutionError(f"Failed to load CSV data: {str(e)}") from e

        logger.info(
            "CSV loaded",
            node_id=context.node_id,
            rows=table.size,
            columns=len(spec),
            types={c.name: c.type.value for c in spec.columns},
        )
        return [table]

    def configure(self, in_specs: List[DataTableSpec]) -> List[DataTableSpec]:
        if not self.csv_url:
            return [DataTableSpec([])]
        # Real columns are only known after the file is read
        return [DataTableSpec([ColumnSpec("data", CellType.STRING)])]

    def load_settings(self, settings: NodeSettings) -> None:
        settings = NodeSettings.wrap(settings)
        self.csv_url = settings.get_string(self.CSV_URL_KEY, "")
        self.csv_source_type = settings.get_string(self.CSV_SOURCE_TYPE_KEY, "url")  # type: ignore[assignment]
        self.csv_file_name = settings.get_string(self.CSV_FILE_NAME_KEY, "")

    def save_settings(self, settings: NodeSettings) -> None:
        settings.set(self.CSV_URL_KEY, self.csv_url)
        settings.set(self.CSV_SOURCE_TYPE_KEY, self.csv_source_type)
        settings.set(self.CSV_FILE_NAME_KEY, self.csv_file_name)

    def validate_settings(self, settings: NodeSettings) -> None:
        settings = NodeSettings.wrap(settings)
        url = settings.get_string(self.CSV_URL_KEY, "").strip()
        if not url:
            raise SettingsValidationError("CSV URL is required")

        parsed = urlparse(url)
        if not parsed.scheme or not (parsed.netloc or parsed.path):
            raise SettingsValidationError("Invalid CSV URL format")
