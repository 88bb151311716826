"""Tests for the PostgreSQL input node, run against an in-memory SQLite engine."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.engine import Engine

from charts.table import CellType, parse_data_table
from pipeline.context import ExecutionContext
from pipeline.errors import (
    ExecutionCanceledError,
    NodeConfigurationError,
    NodeExecutionError,
    SettingsValidationError,
)
from pipeline.nodes.postgres_input import (
    PostgresConfig,
    PostgresInputNodeModel,
    TableConfig,
    map_postgres_type_to_cell_type,
    read_table_data,
)
from pipeline.settings import NodeSettings

pytestmark = pytest.mark.integration

CONNECTION = PostgresConfig(host="db", database="shop", username="u", password="p")


def _node(engine: Engine, table: str = "orders") -> PostgresInputNodeModel:
    node = PostgresInputNodeModel(engine_factory=lambda config: engine)
    node.set_connection_config(CONNECTION)
    node.set_table_config(TableConfig(selected_table=table))
    return node


def _unreachable(config: PostgresConfig) -> Engine:
    raise ConnectionError("database is down")


@pytest.mark.parametrize(
    ("postgres_type", "expected"),
    [
        ("integer", CellType.NUMBER),
        ("NUMERIC(10, 2)", CellType.NUMBER),
        ("double precision", CellType.NUMBER),
        ("bigserial", CellType.NUMBER),
        ("timestamp with time zone", CellType.DATE),
        ("date", CellType.DATE),
        ("boolean", CellType.BOOLEAN),
        ("character varying", CellType.STRING),
        ("", CellType.STRING),
    ],
)
def test_map_postgres_type_to_cell_type(postgres_type: str, expected: CellType) -> None:
    assert map_postgres_type_to_cell_type(postgres_type) == expected


def test_config_models_accept_camel_case() -> None:
    config = PostgresConfig.model_validate(
        {"host": "db", "port": 5432, "database": "shop", "username": "u", "password": "p"}
    )
    table = TableConfig.model_validate({"selectedTable": "orders", "pageSize": 50})

    assert config.is_complete
    assert not PostgresConfig().is_complete
    assert table.selected_table == "orders"
    assert table.page_size == 50


def test_fetch_available_tables_lists_tables_and_views(orders_engine: Engine) -> None:
    tables = asyncio.run(_node(orders_engine).fetch_available_tables())

    assert [(t.name, t.type) for t in tables] == [("big_orders", "VIEW"), ("orders", "BASE TABLE")]
    columns = {c.name: c for c in tables[1].columns}
    assert list(columns) == ["id", "customer", "amount", "note"]
    assert columns["customer"].max_length == 50


def test_fetch_available_tables_wraps_connection_errors() -> None:
    node = PostgresInputNodeModel(engine_factory=_unreachable)

    with pytest.raises(NodeExecutionError, match="Failed to fetch tables: database is down"):
        asyncio.run(node.fetch_available_tables())


def test_read_table_data_pages(orders_engine: Engine) -> None:
    page = read_table_data(orders_engine, "orders", page=2, page_size=2)

    assert page.row_count == 1
    assert page.total_rows == 3
    assert page.total_pages == 2
    assert page.page == 2
    assert page.rows[0]["customer"] == "Initech"


def test_read_table_data_fetch_all_reports_single_page(orders_engine: Engine) -> None:
    data = read_table_data(orders_engine, "orders", page=3, page_size=1, fetch_all=True)

    assert data.row_count == 3
    assert data.page == 1
    assert data.page_size == 3
    assert data.total_pages == 1
    assert data.rows[1]["note"] == ""


def test_fetch_table_data_rejects_unsafe_table_names(orders_engine: Engine) -> None:
    node = _node(orders_engine)

    with pytest.raises(NodeExecutionError) as excinfo:
        asyncio.run(node.fetch_table_data("orders; DROP TABLE orders"))

    assert str(excinfo.value) == "Failed to fetch table data: Invalid table name."


def test_execute_builds_typed_table(orders_engine: Engine, context: ExecutionContext) -> None:
    [table] = asyncio.run(_node(orders_engine).execute([], context))

    assert [(c.name, c.type) for c in table.spec.columns] == [
        ("id", CellType.NUMBER),
        ("customer", CellType.STRING),
        ("amount", CellType.NUMBER),
        ("note", CellType.STRING),
    ]
    headers, data = parse_data_table(table)
    assert data[0] == {"id": 1, "customer": "Acme", "amount": 10.5, "note": "first"}
    assert data[1]["note"] == ""
    assert [row.key for row in table] == ["row_0", "row_1", "row_2"]
    assert context.progress == 1.0


def test_execute_reuses_cache_saved_in_settings(
    orders_engine: Engine, context: ExecutionContext
) -> None:
    """A node restored from saved settings runs without touching the database."""

    source = _node(orders_engine)
    asyncio.run(source.fetch_table_data("orders", fetch_all=True))
    saved = NodeSettings()
    source.save_settings(saved)

    restored = PostgresInputNodeModel(engine_factory=_unreachable)
    restored.load_settings(saved.to_dict())
    [table] = asyncio.run(restored.execute([], context))

    assert table.size == 3
    assert restored.configure([])[0].column_names == ["id", "customer", "amount", "note"]


def test_switching_tables_ignores_cache_of_previous_table(
    orders_engine: Engine, context: ExecutionContext
) -> None:
    source = _node(orders_engine)
    asyncio.run(source.fetch_table_data("orders", fetch_all=True))
    saved = NodeSettings()
    source.save_settings(saved)

    restored = PostgresInputNodeModel(engine_factory=lambda config: orders_engine)
    restored.load_settings(saved.to_dict())
    restored.set_table_config(TableConfig(selected_table="big_orders"))
    [table] = asyncio.run(restored.execute([], context))

    headers, data = parse_data_table(table)
    assert [row["customer"] for row in data] == ["Acme", "Globex"]


def test_cache_saved_for_another_table_is_not_restored(
    orders_engine: Engine, context: ExecutionContext
) -> None:
    source = _node(orders_engine)
    asyncio.run(source.fetch_table_data("orders", fetch_all=True))
    saved = NodeSettings()
    source.save_settings(saved)

    restored = PostgresInputNodeModel(engine_factory=_unreachable)
    restored.load_settings({**saved.to_dict(), "selectedTable": "big_orders"})

    with pytest.raises(NodeExecutionError, match="database is down"):
        asyncio.run(restored.execute([], context))


def test_reset_drops_cached_rows(orders_engine: Engine, context: ExecutionContext) -> None:
    node = _node(orders_engine)
    asyncio.run(node.fetch_table_data("orders", fetch_all=True))
    node.reset()
    node._engine_factory = _unreachable

    with pytest.raises(NodeExecutionError, match="database is down"):
        asyncio.run(node.execute([], context))


def test_execute_propagates_cancellation(orders_engine: Engine, context: ExecutionContext) -> None:
    context.cancel()
    assert context.is_canceled

    with pytest.raises(ExecutionCanceledError):
        asyncio.run(_node(orders_engine).execute([], context))


def test_execute_requires_connection(context: ExecutionContext) -> None:
    node = PostgresInputNodeModel()

    with pytest.raises(NodeExecutionError) as excinfo:
        asyncio.run(node.execute([], context))

    assert str(excinfo.value) == "PostgreSQL table fetch failed: Missing required connection parameters"


def test_table_schema_setting_defines_output_spec() -> None:
    node = PostgresInputNodeModel()
    node.set_table_config(
        TableConfig(
            selected_table="orders",
            table_schema='{"columns": [{"name": "id", "dataType": "integer"}, {"name": "at", "dataType": "date"}]}',
        )
    )

    [spec] = node.configure([])

    assert [(c.name, c.type) for c in spec.columns] == [("id", CellType.NUMBER), ("at", CellType.DATE)]


def test_configure_rejects_inputs() -> None:
    node = PostgresInputNodeModel()

    assert (node.get_nr_in_ports(), node.get_nr_out_ports()) == (0, 1)

    with pytest.raises(NodeConfigurationError):
        node.configure([node.output_spec])


def test_validate_settings() -> None:
    node = PostgresInputNodeModel()
    complete = {"host": "db", "database": "shop", "username": "u", "password": "p"}

    with pytest.raises(SettingsValidationError, match="Missing required connection parameters"):
        node.validate_settings({"host": "db"})
    with pytest.raises(SettingsValidationError, match="No table selected"):
        node.validate_settings(complete)
    node.validate_settings({**complete, "selectedTable": "orders"})
