"""SQLite database introspector.

SQLite has no information_schema; tables come from ``sqlite_master``
and columns from the ``pragma_table_info`` table-valued function.
"""

import sqlite3
from pathlib import Path
from typing import Optional, List, Sequence

from ..errors import ConnectionError, PrepareError
from .base import DatabaseIntrospector
from .models import Column, Table

COLUMNS_OF_TABLE_QUERY = """
    SELECT
        p.cid + 1,
        p.name,
        p.type,
        p.dflt_value,
        CASE p."notnull" WHEN 0 THEN 'YES' ELSE 'NO' END,
        NULL,
        NULL,
        CASE WHEN p.pk = 1
                  AND upper(p.type) = 'INTEGER'
                  AND (SELECT count(*) FROM pragma_table_info(:name) WHERE pk > 0) = 1
                  AND (SELECT m.sql FROM sqlite_master AS m
                       WHERE m.type = 'table' AND m.name = :name COLLATE NOCASE) NOT LIKE '%WITHOUT ROWID%'
             THEN 'rowid' END,
        CASE WHEN p.pk > 0 THEN 'PRIMARY KEY' END
    FROM pragma_table_info(:name) AS p
    ORDER BY p.cid
"""


class SQLiteIntrospector(DatabaseIntrospector):
    """Client for introspecting a SQLite database file."""

    STRING_DATATYPES = (
        "character",
        "varchar",
        "varying character",
        "nchar",
        "native character",
        "nvarchar",
        "char",
    )
    TEXT_DATATYPES = (
        "text",
        "clob",
        "blob",
    )
    INTEGER_DATATYPES = (
        "integer",
        "int",
        "tinyint",
        "smallint",
        "mediumint",
        "bigint",
        "unsigned big int",
        "int2",
        "int8",
    )
    FLOAT_DATATYPES = (
        "real",
        "double",
        "double precision",
        "float",
        "numeric",
        "decimal",
    )
    TEMPORAL_DATATYPES = (
        "date",
        "datetime",
        "timestamp",
        "time",
    )

    def dsn(self) -> str:
        return Path(self.settings.db_name).resolve().as_uri() + "?mode=ro"

    def connect(self):
        """Open the SQLite database file read-only."""
        if self._connection is not None:
            return self._connection

        try:
            self._connection = sqlite3.connect(self.dsn(), uri=True)
        except sqlite3.Error as exc:
            raise ConnectionError(
                f"Cannot open SQLite database {self.settings.db_name!r}: {exc}",
                details={"db_name": self.settings.db_name},
            ) from exc
        return self._connection

    def get_tables(self, tables: Optional[Sequence[str]] = None) -> List[Table]:
        """Get all tables, optionally restricted to ``tables``."""
        args = []
        in_clause = ""
        if tables:
            in_clause = "AND lower(name) IN (" + ", ".join(["?"] * len(tables)) + ")"
            args.extend(name.lower() for name in tables)

        query = f"""
            SELECT name
            FROM sqlite_master
            WHERE type = 'table'
              AND substr(name, 1, 7) <> 'sqlite_'
              {in_clause}
            ORDER BY name
        """
        try:
            rows = self._select(query, args)
        except sqlite3.Error as exc:
            raise self._query_failed("get_tables()", exc, db_name=self.settings.db_name) from exc

        return [Table(name=row[0]) for row in rows]

    def prepare_columns_stmt(self):
        """Validate the column query once against the catalog."""
        try:
            self._select(COLUMNS_OF_TABLE_QUERY, {"name": ""})
        except sqlite3.Error as exc:
            raise PrepareError(f"Cannot prepare column statement: {exc}") from exc
        self._columns_stmt = COLUMNS_OF_TABLE_QUERY

    def get_columns(self, table: Table):
        """Fetch the columns of ``table``."""
        stmt = self._require_columns_stmt(table)
        try:
            rows = self._select(stmt, {"name": table.name})
        except sqlite3.Error as exc:
            raise self._query_failed(
                f"get_columns({table.name})", exc, table=table.name, db_name=self.settings.db_name
            ) from exc

        table.columns = [Column.from_row(row) for row in rows]

    def is_primary_key(self, column: Column) -> bool:
        return "PRIMARY KEY" in (column.constraint_type or "")

    def is_auto_increment(self, column: Column) -> bool:
        # The column query names the single INTEGER PRIMARY KEY of a rowid
        # table "rowid", the only column SQLite fills in automatically.
        return column.constraint_name == "rowid"

    def is_nullable(self, column: Column) -> bool:
        return column.is_nullable == "YES"
