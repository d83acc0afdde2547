"""DuckDB database introspector."""

from typing import Optional, List, Sequence

from ..errors import ConnectionError, PrepareError
from .base import DatabaseIntrospector
from .models import Column, Table

COLUMNS_OF_TABLE_QUERY = """
    SELECT
        c.ordinal_position,
        c.column_name,
        c.data_type,
        c.column_default,
        c.is_nullable,
        c.character_maximum_length,
        c.numeric_precision,
        NULL AS constraint_name,
        CASE WHEN pk.column_name IS NOT NULL THEN 'PRIMARY KEY' END AS constraint_type
    FROM information_schema.columns AS c
        LEFT JOIN (
            SELECT dc.schema_name, dc.table_name,
                   unnest(dc.constraint_column_names) AS column_name
            FROM duckdb_constraints() AS dc
            WHERE dc.constraint_type = 'PRIMARY KEY'
        ) AS pk
            ON pk.schema_name = c.table_schema
            AND pk.table_name = c.table_name
            AND pk.column_name = c.column_name
    WHERE c.table_name = ?
      AND c.table_schema = ?
    ORDER BY c.ordinal_position
"""


class DuckDBIntrospector(DatabaseIntrospector):
    """Client for introspecting a DuckDB database file."""

    DEFAULT_SCHEMA = "main"

    STRING_DATATYPES = (
        "varchar",
        "char",
        "bpchar",
        "string",
        "uuid",
    )
    TEXT_DATATYPES = (
        "text",
        "json",
        "blob",
        "bytea",
    )
    INTEGER_DATATYPES = (
        "tinyint",
        "smallint",
        "integer",
        "int",
        "bigint",
        "hugeint",
        "utinyint",
        "usmallint",
        "uinteger",
        "ubigint",
    )
    FLOAT_DATATYPES = (
        "float",
        "real",
        "double",
        "decimal",
        "numeric",
    )
    TEMPORAL_DATATYPES = (
        "date",
        "time",
        "timestamp",
        "timestamp with time zone",
        "timestamptz",
        "timestamp_s",
        "timestamp_ms",
        "timestamp_ns",
    )

    def dsn(self) -> str:
        return self.settings.db_name

    def connect(self):
        """Open the DuckDB database file read-only."""
        if self._connection is not None:
            return self._connection

        try:
            import duckdb
        except ImportError:
            raise ImportError(
                "duckdb is required. "
                "Install it with: pip install duckdb"
            )

        try:
            self._connection = duckdb.connect(self.dsn(), read_only=True)
        except Exception as exc:
            raise ConnectionError(
                f"Cannot open DuckDB database {self.dsn()!r}: {exc}",
                details={"db_name": self.settings.db_name},
            ) from exc
        return self._connection

    def get_tables(self, tables: Optional[Sequence[str]] = None) -> List[Table]:
        """Get all base tables of the schema, optionally restricted to ``tables``."""
        args = [self.schema]
        in_clause = ""
        if tables:
            in_clause = "AND lower(table_name) IN (" + ", ".join(["?"] * len(tables)) + ")"
            args.extend(name.lower() for name in tables)

        query = f"""
            SELECT table_name
            FROM information_schema.tables
            WHERE table_type = 'BASE TABLE'
              AND table_schema = ?
              {in_clause}
            ORDER BY table_name
        """
        try:
            rows = self._select(query, args)
        except Exception as exc:
            raise self._query_failed("get_tables()", exc, schema=self.schema) from exc

        return [Table(name=row[0]) for row in rows]

    def prepare_columns_stmt(self):
        """Validate the column query once against the catalog."""
        try:
            self._select(COLUMNS_OF_TABLE_QUERY, ["", ""])
        except Exception as exc:
            raise PrepareError(
                f"Cannot prepare column statement: {exc}",
                details={"schema": self.schema},
            ) from exc
        self._columns_stmt = COLUMNS_OF_TABLE_QUERY

    def get_columns(self, table: Table):
        """Fetch the columns of ``table`` in the configured schema."""
        stmt = self._require_columns_stmt(table)
        try:
            rows = self._select(stmt, [table.name, self.schema])
        except Exception as exc:
            raise self._query_failed(
                f"get_columns({table.name})", exc, table=table.name, schema=self.schema
            ) from exc

        table.columns = [Column.from_row(row) for row in rows]

    def is_primary_key(self, column: Column) -> bool:
        return "PRIMARY KEY" in (column.constraint_type or "")

    def is_auto_increment(self, column: Column) -> bool:
        return "nextval" in (column.default_value or "")

    def is_nullable(self, column: Column) -> bool:
        return column.is_nullable == "YES"
