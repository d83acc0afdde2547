"""Shared pytest fixtures for tables-cli tests."""

import sqlite3
from unittest.mock import MagicMock

import pytest

from tables_cli.config import Settings
from tables_cli.database.models import Column, Table


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TABLES_* variables of the developer's shell out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("TABLES_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_settings():
    """Create Settings with explicit values."""
    def _make(**overrides) -> Settings:
        return Settings(**overrides)
    return _make


@pytest.fixture
def sqlite_db(tmp_path):
    """Create a SQLite database file with three tables and a view."""
    path = tmp_path / "shop.db"
    conn = sqlite3.connect(path)
    conn.executescript("""
        CREATE TABLE products (
            id INTEGER PRIMARY KEY,
            title VARCHAR(200) NOT NULL,
            price REAL,
            description TEXT
        );
        CREATE TABLE orders (
            id INTEGER PRIMARY KEY,
            product_id INTEGER NOT NULL REFERENCES products(id),
            quantity INT NOT NULL DEFAULT 1,
            ordered_at DATETIME,
            gift BOOLEAN
        );
        CREATE TABLE Customers (
            id INTEGER NOT NULL PRIMARY KEY,
            name VARCHAR(100)
        );
        CREATE VIEW order_quantities AS
            SELECT product_id, SUM(quantity) AS total FROM orders GROUP BY product_id;
    """)
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def customers_table():
    """A PostgreSQL-style customers table: id integer PK, name varchar(100) nullable."""
    return Table(
        name="customers",
        columns=[
            Column(
                ordinal_position=1,
                name="id",
                data_type="integer",
                default_value="nextval('customers_id_seq'::regclass)",
                is_nullable="NO",
                numeric_precision=32,
                constraint_name="customers_pkey",
                constraint_type="PRIMARY KEY",
            ),
            Column(
                ordinal_position=2,
                name="name",
                data_type="character varying",
                is_nullable="YES",
                character_maximum_length=100,
            ),
        ],
    )


class FakeCursor:
    """DB-API cursor answering PostgreSQL catalog queries from a dict.

    ``catalog`` maps table name -> list of column rows.
    """

    def __init__(self, catalog, fail_table=None):
        self.catalog = catalog
        self.fail_table = fail_table
        self.executed = []
        self._rows = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        statement = sql.strip()
        if statement.startswith("PREPARE"):
            self._rows = []
        elif statement.startswith("EXECUTE"):
            table, _schema = params
            if table == self.fail_table:
                raise Exception(f'permission denied for table {table}')
            self._rows = self.catalog.get(table, [])
        else:
            wanted = set(params[1:])
            self._rows = [
                (name,) for name in sorted(self.catalog)
                if not wanted or name.lower() in wanted
            ]

    def fetchall(self):
        return self._rows

    def close(self):
        pass


@pytest.fixture
def pg_catalog():
    """Column rows of a PostgreSQL schema with orders and products."""
    return {
        "products": [
            (1, "id", "integer", "nextval('products_id_seq'::regclass)", "NO", None, 32, "products_pkey", "PRIMARY KEY"),
            (2, "title", "text", None, "NO", None, None, None, None),
        ],
        "orders": [
            (1, "id", "bigint", "nextval('orders_id_seq'::regclass)", "NO", None, 64, "orders_pkey", "PRIMARY KEY"),
            (2, "total", "numeric", None, "YES", None, 10, None, None),
            (3, "created_at", "timestamp with time zone", "now()", "NO", None, None, None, None),
        ],
    }


@pytest.fixture
def fake_pg_module(pg_catalog):
    """A stand-in psycopg2 module whose connections answer from pg_catalog."""
    def _make(fail_table=None, catalog=None):
        cursor = FakeCursor(pg_catalog if catalog is None else catalog, fail_table=fail_table)
        connection = MagicMock()
        connection.cursor.return_value = cursor
        module = MagicMock()
        module.connect.return_value = connection
        return module
    return _make
