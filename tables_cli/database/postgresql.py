"""PostgreSQL database introspector."""

from typing import Optional, List, Sequence
from urllib.parse import quote

from ..errors import ConnectionError, PrepareError
from .base import DatabaseIntrospector
from .models import Column, Table

COLUMNS_OF_TABLE_QUERY = """
    SELECT
        ic.ordinal_position,
        ic.column_name,
        ic.data_type,
        ic.column_default,
        ic.is_nullable,
        ic.character_maximum_length,
        ic.numeric_precision,
        pk.constraint_name,
        pk.constraint_type
    FROM information_schema.columns AS ic
        LEFT JOIN (
            SELECT ikcu.table_schema, ikcu.table_name, ikcu.column_name,
                   itc.constraint_name, itc.constraint_type
            FROM information_schema.key_column_usage AS ikcu
                JOIN information_schema.table_constraints AS itc
                    ON ikcu.table_schema = itc.table_schema
                    AND ikcu.table_name = itc.table_name
                    AND ikcu.constraint_name = itc.constraint_name
            WHERE itc.constraint_type = 'PRIMARY KEY'
        ) AS pk
            ON ic.table_schema = pk.table_schema
            AND ic.table_name = pk.table_name
            AND ic.column_name = pk.column_name
    WHERE ic.table_name = $1
      AND ic.table_schema = $2
    ORDER BY ic.ordinal_position
"""


class PostgresIntrospector(DatabaseIntrospector):
    """Client for introspecting a PostgreSQL schema via information_schema."""

    DEFAULT_SCHEMA = "public"
    DEFAULT_PORT = 5432
    DEFAULT_USER = "postgres"

    STATEMENT_NAME = "tables_cli_columns_of_table"

    STRING_DATATYPES = (
        "character varying",
        "varchar",
        "character",
        "char",
        "uuid",
    )
    TEXT_DATATYPES = (
        "text",
    )
    INTEGER_DATATYPES = (
        "smallint",
        "integer",
        "bigint",
        "smallserial",
        "serial",
        "bigserial",
    )
    FLOAT_DATATYPES = (
        "numeric",
        "decimal",
        "real",
        "double precision",
    )
    TEMPORAL_DATATYPES = (
        "time",
        "timestamp",
        "time with time zone",
        "timestamp with time zone",
        "time without time zone",
        "timestamp without time zone",
        "date",
    )

    def dsn(self) -> str:
        user = quote(self.user, safe="")
        password = quote(self.settings.password or "", safe="")
        db_name = quote(self.settings.db_name, safe="")
        ssl_mode = quote(self.settings.ssl_mode, safe="")
        if self.settings.socket:
            socket = quote(self.settings.socket, safe="")
            return (
                f"postgresql://{user}:{password}@/{db_name}"
                f"?host={socket}&port={self.port}&sslmode={ssl_mode}"
            )
        return (
            f"postgresql://{user}:{password}@{self.settings.host}:{self.port}/{db_name}"
            f"?sslmode={ssl_mode}"
        )

    def connect(self):
        """Connect to PostgreSQL."""
        if self._connection is not None:
            return self._connection

        try:
            import psycopg2
        except ImportError:
            raise ImportError(
                "psycopg2 is required. "
                "Install it with: pip install psycopg2-binary"
            )

        try:
            self._connection = psycopg2.connect(self.dsn())
        except Exception as exc:
            raise ConnectionError(
                f"Cannot connect to PostgreSQL at {self.settings.socket or self.settings.host}:{self.port}: {exc}",
                details={"host": self.settings.socket or self.settings.host, "port": self.port, "db_name": self.settings.db_name},
            ) from exc
        return self._connection

    def get_tables(self, tables: Optional[Sequence[str]] = None) -> List[Table]:
        """Get all base tables of the schema, optionally restricted to ``tables``."""
        args = [self.schema]
        in_clause = ""
        if tables:
            in_clause = "AND LOWER(table_name) IN (" + ", ".join(["%s"] * len(tables)) + ")"
            args.extend(name.lower() for name in tables)

        query = f"""
            SELECT table_name
            FROM information_schema.tables
            WHERE table_type = 'BASE TABLE'
              AND table_schema = %s
              {in_clause}
            ORDER BY table_name
        """
        try:
            rows = self._select(query, args)
        except Exception as exc:
            raise self._query_failed("get_tables()", exc, schema=self.schema) from exc

        return [Table(name=row[0]) for row in rows]

    def prepare_columns_stmt(self):
        """Create a server-side prepared statement for the column query."""
        try:
            self._execute(f"PREPARE {self.STATEMENT_NAME} (text, text) AS {COLUMNS_OF_TABLE_QUERY}")
        except Exception as exc:
            raise PrepareError(
                f"Cannot prepare column statement: {exc}",
                details={"schema": self.schema},
            ) from exc
        self._columns_stmt = f"EXECUTE {self.STATEMENT_NAME} (%s, %s)"

    def get_columns(self, table: Table):
        """Fetch the columns of ``table`` in the configured schema."""
        stmt = self._require_columns_stmt(table)
        try:
            rows = self._select(stmt, (table.name, self.schema))
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
