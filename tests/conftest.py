"""Pytest fixtures shared across the chart, node and API tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from charts.table import DataTable
from pipeline.context import ExecutionContext

SALES_CSV = (
    "Region,Revenue,Date,Note\n"
    "North,100.5,2024-01-05,promo\n"
    "South,200,2024-02-10,\n"
    "East,,2024-03-15,repeat\n"
)


@pytest.fixture
def sales_table() -> DataTable:
    """Return a small categorical table with two numeric columns."""

    return DataTable.from_records(
        [
            {"Product": "Widget", "Q1": 10, "Q2": 5},
            {"Product": "gadget", "Q1": 0, "Q2": 0},
            {"Product": "Bolt", "Q1": 3, "Q2": 8},
        ]
    )


@pytest.fixture
def context() -> ExecutionContext:
    """Return a fresh execution context for a single node run."""

    return ExecutionContext("node-1")


@pytest.fixture
def csv_transport() -> Callable[..., httpx.MockTransport]:
    """Return a factory for transports serving a fixed CSV response."""

    def factory(body: str = SALES_CSV, status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, text=body)

        return httpx.MockTransport(handler)

    return factory


@pytest.fixture
def orders_engine() -> Iterator[Engine]:
    """Return an in-memory SQLite engine holding an `orders` table and view."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE orders ("
                "id INTEGER PRIMARY KEY, customer VARCHAR(50), amount REAL, note TEXT)"
            )
        )
        conn.execute(
            text(
                "INSERT INTO orders (id, customer, amount, note) VALUES "
                "(1, 'Acme', 10.5, 'first'), "
                "(2, 'Globex', 20.0, NULL), "
                "(3, 'Initech', 7.25, 'third')"
            )
        )
        conn.execute(text("CREATE VIEW big_orders AS SELECT * FROM orders WHERE amount > 8"))
    yield engine
    engine.dispose()
