"""
PostgreSQL Input Node
=====================
Source node (0 inputs, 1 output) that loads a whole table from a
PostgreSQL database.

Table data fetched once is kept on the node (and serialized into the
node settings by save_settings) so later runs do not hit the database
again. Database access goes through SQLAlchemy; the blocking calls run
in a worker thread.

Usage:
    node = PostgresInputNodeModel()
    node.set_connection_config(PostgresConfig(host=..., database=..., ...))
    tables = await node.fetch_available_tables()
    node.set_table_config(TableConfig(selected_table="orders"))
    [table] = await node.execute([], ExecutionContext("pg-1"))
"""

import asyncio
import json
import re
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import MetaData, Table, create_engine, func, inspect, select
from sqlalchemy.engine import URL, Engine

from app.core.config import get_settings
from charts.table import Cell, CellType, ColumnSpec, DataRow, DataTable, DataTableSpec
from pipeline.context import ExecutionContext
from pipeline.errors import (
    ExecutionCanceledError,
    NodeConfigurationError,
    NodeExecutionError,
    SettingsValidationError,
)
from pipeline.nodes.base import NodeModel
from pipeline.settings import NodeSettings

logger = structlog.get_logger(__name__)

_TABLE_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

_NUMBER_TYPES = ("int", "numeric", "decimal", "float", "real", "double", "money", "serial")


# =============================================================================
# Models
# =============================================================================

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PostgresConfig(CamelModel):
    host: str = "localhost"
    port: int = 6543
    database: str = ""
    username: str = ""
    password: str = ""
    ssl: bool = False

    @property
    def is_complete(self) -> bool:
        return bool(self.host and self.port and self.database and self.username and self.password)


class TableConfig(CamelModel):
    selected_table: str = ""
    table_schema: str = ""
    page_size: int = 1000


class ColumnMetadata(CamelModel):
    name: str
    data_type: str
    is_nullable: bool = True
    default_value: Optional[str] = None
    max_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    numeric_scale: Optional[int] = None


class TableMetadata(CamelModel):
    name: str
    type: str
    columns: List[ColumnMetadata] = Field(default_factory=list)


class FieldInfo(CamelModel):
    name: str
    data_type: str


class TableData(CamelModel):
    fields: List[FieldInfo] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    row_count: int = 0
    total_rows: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 1


def map_postgres_type_to_cell_type(postgres_type: str) -> CellType:
    """Map a database column type name to a table cell type."""
    type_name = (postgres_type or "").lower()
    if any(token in type_name for token in _NUMBER_TYPES):
        return CellType.NUMBER
    if "date" in type_name or "time" in type_name:
        return CellType.DATE
    if "bool" in type_name:
        return CellType.BOOLEAN
    return CellType.STRING


def create_postgres_engine(config: PostgresConfig) -> Engine:
    url = URL.create(
        "postgresql+psycopg2",
        username=config.username,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.database,
        query={"sslmode": "require" if config.ssl else "disable"},
    )
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={"connect_timeout": get_settings().postgres_connect_timeout_seconds},
    )


# =============================================================================
# Database access (blocking)
# =============================================================================

def read_table_metadata(engine: Engine, schema: Optional[str] = None) -> List[TableMetadata]:
    """All tables and views with their column metadata, sorted by name."""
    inspector = inspect(engine)
    entries = [(name, "BASE TABLE") for name in inspector.get_table_names(schema=schema)]
    entries += [(name, "VIEW") for name in inspector.get_view_names(schema=schema)]

    tables = []
    for name, table_type in sorted(entries):
        columns = []
        for column in inspector.get_columns(name, schema=schema):
            col_type = column["type"]
            default = column.get("default")
            columns.append(
                ColumnMetadata(
                    name=column["name"],
                    data_type=str(col_type),
                    is_nullable=bool(column.get("nullable", True)),
                    default_value=None if default is None else str(default),
                    max_length=getattr(col_type, "length", None),
                    numeric_precision=getattr(col_type, "precision", None),
                    numeric_scale=getattr(col_type, "scale", None),
                )
            )
        tables.append(TableMetadata(name=name, type=table_type, columns=columns))
    return tables


def read_table_data(
    engine: Engine,
    table_name: str,
    page: int = 1,
    page_size: int = 100,
    fetch_all: bool = False,
    schema: Optional[str] = None,
) -> TableData:
    """
    Read one page (or all) of a table. Null values come back as "".

    Raises:
        ValueError: table name is not a plain identifier
    """
    if not _TABLE_NAME.match(table_name or ""):
        raise ValueError("Invalid table name.")

    page = max(page, 1)
    with engine.connect() as conn:
        table = Table(table_name, MetaData(), autoload_with=conn, schema=schema)
        total = conn.execute(select(func.count()).select_from(table)).scalar_one()

        query = select(table)
        if not fetch_all:
            query = query.limit(page_size).offset((page - 1) * page_size)
        result = conn.execute(query).mappings().all()

    rows = [{key: ("" if value is None else value) for key, value in row.items()} for row in result]
    fields = [FieldInfo(name=column.name, data_type=str(column.type)) for column in table.columns]
    effective_size = len(rows) if fetch_all else page_size
    total_pages = 1 if fetch_all or not page_size else max(1, -(-total // page_size))

    return TableData(
        fields=fields,
        rows=rows,
        row_count=len(rows),
        total_rows=total,
        page=1 if fetch_all else page,
        page_size=effective_size,
        total_pages=total_pages,
    )


# =============================================================================
# Node
# =============================================================================

EngineFactory = Callable[[PostgresConfig], Engine]


class PostgresInputNodeModel(NodeModel):
    """Loads one PostgreSQL table into a single output table."""

    node_type = "postgres-input"

    STRING_KEYS = ("host", "database", "username", "password", "selectedTable", "tableSchema", "cachedData")

    def __init__(self, engine_factory: Optional[EngineFactory] = None):
        super().__init__(in_ports=0, out_ports=1)
        defaults = get_settings()
        self.settings = NodeSettings({
            "host": defaults.postgres_default_host,
            "port": defaults.postgres_default_port,
            "database": "",
            "username": "",
            "password": "",
            "ssl": False,
            "selectedTable": "",
            "tableSchema": "",
            "pageSize": defaults.postgres_page_size,
        })
        self.output_spec = DataTableSpec([])
        self._cached_data: Optional[TableData] = None
        self._cached_table = ""
        self._engine_factory = engine_factory

    # ----- Connection / table config -----

    def get_connection_config(self) -> PostgresConfig:
        return PostgresConfig(
            host=self.settings.get_string("host"),
            port=self.settings.get_number("port", get_settings().postgres_default_port),
            database=self.settings.get_string("database"),
            username=self.settings.get_string("username"),
            password=self.settings.get_string("password"),
            ssl=self.settings.get_boolean("ssl"),
        )

    def set_connection_config(self, config: PostgresConfig) -> None:
        for key, value in config.model_dump().items():
            self.settings.set(key, value)

    def get_table_config(self) -> TableConfig:
        return TableConfig(
            selected_table=self.settings.get_string("selectedTable"),
            table_schema=self.settings.get_string("tableSchema"),
            page_size=self.settings.get_number("pageSize", get_settings().postgres_page_size),
        )

    def set_table_config(self, config: TableConfig) -> None:
        if self._cached_table and self._cached_table != config.selected_table:
            self.reset()
            self.settings.set("cachedData", "")
            self.output_spec = DataTableSpec([])
        self.settings.set("selectedTable", config.selected_table)
        self.settings.set("tableSchema", config.table_schema)
        self.settings.set("pageSize", config.page_size)
        self._load_spec_from_schema()
        if self._cached_data is not None and self._cached_table == config.selected_table:
            self.settings.set("cachedData", self._serialize_cache())

    @contextmanager
    def _engine(self) -> Iterator[Engine]:
        config = self.get_connection_config()
        if self._engine_factory is not None:
            yield self._engine_factory(config)
            return

        engine = create_postgres_engine(config)
        try:
            yield engine
        finally:
            engine.dispose()

    # ----- Database calls -----

    def _list_tables_sync(self) -> List[TableMetadata]:
        with self._engine() as engine:
            return read_table_metadata(engine)

    def _fetch_sync(self, table_name: str, page: int, page_size: int, fetch_all: bool) -> TableData:
        with self._engine() as engine:
            return read_table_data(engine, table_name, page=page, page_size=page_size, fetch_all=fetch_all)

    async def fetch_available_tables(self) -> List[TableMetadata]:
        try:
            return await asyncio.to_thread(self._list_tables_sync)
        except Exception as e:
            raise NodeExecutionError(f"Failed to fetch tables: {str(e)}") from e

    async def fetch_table_data(
        self,
        table_name: str,
        page: int = 1,
        page_size: int = 100,
        fetch_all: bool = False,
    ) -> TableData:
        """Fetch a page of data and cache it on the node when non-empty."""
        try:
            data = await asyncio.to_thread(self._fetch_sync, table_name, page, page_size, fetch_all)
        except Exception as e:
            raise NodeExecutionError(f"Failed to fetch table data: {str(e)}") from e

        if data.rows:
            self._cached_data = data
            self._cached_table = table_name
            self._set_spec_from_fields(data.fields)
        return data

    # ----- Spec helpers -----

    def _set_spec_from_fields(self, fields: List[FieldInfo]) -> None:
        if fields:
            self.output_spec = DataTableSpec(
                [ColumnSpec(f.name, map_postgres_type_to_cell_type(f.data_type)) for f in fields]
            )

    def _load_spec_from_schema(self) -> None:
        raw = self.settings.get_string("tableSchema")
        if not raw or not self.settings.get_string("selectedTable"):
            return
        try:
            schema = json.loads(raw)
            columns = schema.get("columns") or []
            self.output_spec = DataTableSpec(
                [
                    ColumnSpec(c["name"], map_postgres_type_to_cell_type(c.get("dataType", "")))
                    for c in columns
                ]
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Could not rebuild output spec from table schema", error=str(e))

    def _serialize_cache(self) -> str:
        payload = {"tableName": self._cached_table, **self._cached_data.model_dump(by_alias=True)}
        return json.dumps(payload, default=str)

    def _restore_cache(self, selected_table: str) -> bool:
        raw = self.settings.get_string("cachedData")
        if not raw:
            return False
        try:
            payload = json.loads(raw)
            if not isinstance(payload, dict) or payload.get("tableName") != selected_table:
                return False
            data = TableData.model_validate(payload)
        except ValueError as e:
            logger.warning("Could not restore cached table data", error=str(e))
            return False
        if not data.rows:
            return False
        self._cached_data = data
        self._cached_table = selected_table
        if not len(self.output_spec):
            self._set_spec_from_fields(data.fields)
        return True

    # ----- NodeModel -----

    async def execute(self, inputs: List[DataTable], context: ExecutionContext) -> List[DataTable]:
        try:
            connection = self.get_connection_config()
            selected_table = self.settings.get_string("selectedTable")
            if not connection.is_complete:
                raise NodeExecutionError("Missing required connection parameters")
            if not selected_table:
                raise NodeExecutionError("No table selected")

            context.set_progress(0.0, "Loading PostgreSQL data...")
            if self._cached_data is not None and self._cached_table == selected_table:
                context.set_progress(0.5, "Using cached table data...")
            elif self._restore_cache(selected_table):
                context.set_progress(0.5, "Restored cached table data from settings...")
            else:
                context.check_canceled()
                context.set_progress(0.2, "Fetching fresh table data...")
                await self.fetch_table_data(selected_table, fetch_all=True)
                context.set_progress(0.5, "Processing results...")

            table = self._build_table(context)
            context.set_progress(1.0, "PostgreSQL data loaded")
        except ExecutionCanceledError:
            raise
        except Exception as e:
            logger.error("PostgreSQL load failed", node_id=context.node_id, error=str(e))
            raise NodeExecutionError(f"PostgreSQL table fetch failed: {str(e)}") from e

        logger.info("PostgreSQL table loaded", node_id=context.node_id, table=selected_table, rows=table.size)
        return [table]

    def _build_table(self, context: ExecutionContext) -> DataTable:
        rows = self._cached_data.rows if self._cached_data is not None else []
        interval = get_settings().progress_row_interval
        output = context.create_data_table(self.output_spec)
        names = self.output_spec.column_names

        for index, row in enumerate(rows):
            if index % interval == 0:
                context.check_canceled()
                context.set_progress(
                    0.5 + (index / len(rows)) * 0.4,
                    f"Processing row {index} of {len(rows)}",
                )
            lowered = {str(key).lower(): value for key, value in row.items()}
            cells = []
            for name in names:
                value = row.get(name)
                if value is None:
                    value = lowered.get(name.lower())
                cells.append(Cell("" if value is None else value))
            output.add_row(DataRow(f"row_{index}", cells))

        return output.close()

    def configure(self, in_specs: List[DataTableSpec]) -> List[DataTableSpec]:
        if in_specs:
            raise NodeConfigurationError("PostgreSQL input node does not accept input connections")
        return [self.output_spec]

    def load_settings(self, settings: NodeSettings) -> None:
        settings = NodeSettings.wrap(settings)
        defaults = get_settings()
        for key in self.STRING_KEYS:
            value = settings.get_string(key)
            if value:
                self.settings.set(key, value)
        self.settings.set("port", settings.get_number("port", defaults.postgres_default_port))
        self.settings.set("pageSize", settings.get_number("pageSize", defaults.postgres_page_size))
        self.settings.set("ssl", settings.get_boolean("ssl", False))

        self._load_spec_from_schema()
        selected_table = self.settings.get_string("selectedTable")
        if selected_table:
            self._restore_cache(selected_table)

    def save_settings(self, settings: NodeSettings) -> None:
        connection = self.get_connection_config()
        table_config = self.get_table_config()
        for key, value in connection.model_dump().items():
            settings.set(key, value)
        settings.set("selectedTable", table_config.selected_table)
        settings.set("tableSchema", table_config.table_schema)
        settings.set("pageSize", table_config.page_size)
        if self._cached_data is not None and self._cached_table:
            settings.set("cachedData", self._serialize_cache())

    def validate_settings(self, settings: NodeSettings) -> None:
        settings = NodeSettings.wrap(settings)
        required = ("host", "database", "username", "password")
        if not all(settings.get_string(key) for key in required):
            raise SettingsValidationError("Missing required connection parameters")
        if not settings.get_string("selectedTable"):
            raise SettingsValidationError("No table selected")

    def reset(self) -> None:
        self._cached_data = None
        self._cached_table = ""
