"""Oracle database introspector."""

from typing import Optional, List, Sequence

from ..errors import ConnectionError, PrepareError
from .base import DatabaseIntrospector
from .models import Column, Table

COLUMNS_OF_TABLE_QUERY = """
    SELECT
        c.column_id,
        c.column_name,
        c.data_type,
        c.data_default,
        c.nullable,
        c.char_length,
        c.data_precision,
        pk.constraint_name,
        CASE WHEN pk.constraint_name IS NOT NULL THEN 'PRI' END
    FROM all_tab_columns c
        LEFT JOIN (
            SELECT cc.owner, cc.table_name, cc.column_name, ac.constraint_name
            FROM all_cons_columns cc
                JOIN all_constraints ac
                    ON ac.owner = cc.owner
                    AND ac.constraint_name = cc.constraint_name
            WHERE ac.constraint_type = 'P'
        ) pk
            ON pk.owner = c.owner
            AND pk.table_name = c.table_name
            AND pk.column_name = c.column_name
    WHERE c.owner = :owner
      AND c.table_name = :name
    ORDER BY c.column_id
"""


class OracleIntrospector(DatabaseIntrospector):
    """Client for introspecting an Oracle schema via the data dictionary.

    Oracle has no separate schema concept: the owner is the configured
    schema, or the connecting user when none is given, upper-cased.
    """

    DEFAULT_PORT = 1521
    DEFAULT_USER = "system"

    STRING_DATATYPES = (
        "CHAR",
        "VARCHAR2",
        "NCHAR",
        "NVARCHAR2",
    )
    TEXT_DATATYPES = (
        "CLOB",
        "NCLOB",
    )
    # NUMBER is listed as both integer and float; classify() checks
    # integers first, so NUMBER columns become integers regardless of scale.
    INTEGER_DATATYPES = (
        "NUMBER",
        "INTEGER",
        "SMALLINT",
    )
    FLOAT_DATATYPES = (
        "FLOAT",
        "BINARY_FLOAT",
        "BINARY_DOUBLE",
        "DECIMAL",
        "NUMBER",
        "REAL",
        "DOUBLE PRECISION",
    )
    TEMPORAL_DATATYPES = (
        "DATE",
        "TIMESTAMP",
        "TIMESTAMP WITH TIME ZONE",
        "TIMESTAMP WITH LOCAL TIME ZONE",
    )

    def __init__(self, settings):
        super().__init__(settings)
        self._columns_cursor = None

    @property
    def owner(self) -> str:
        return (self.settings.db_schema or self.user).upper()

    @property
    def schema(self) -> Optional[str]:
        return self.owner

    def dsn(self) -> str:
        return f"{self.settings.host}:{self.port}/{self.settings.db_name}"

    def connect(self):
        """Connect to Oracle."""
        if self._connection is not None:
            return self._connection

        try:
            import oracledb
        except ImportError:
            raise ImportError(
                "oracledb is required. "
                "Install it with: pip install oracledb"
            )

        try:
            self._connection = oracledb.connect(
                user=self.user,
                password=self.settings.password,
                dsn=self.dsn(),
            )
        except Exception as exc:
            raise ConnectionError(
                f"Cannot connect to Oracle at {self.dsn()}: {exc}",
                details={"dsn": self.dsn(), "user": self.user},
            ) from exc
        return self._connection

    def close(self):
        """Close the prepared cursor and the connection."""
        if self._columns_cursor is not None:
            self._columns_cursor.close()
            self._columns_cursor = None
        super().close()

    def get_tables(self, tables: Optional[Sequence[str]] = None) -> List[Table]:
        """Get all tables owned by the owner, optionally restricted to ``tables``."""
        args = {"owner": self.owner}
        in_clause = ""
        if tables:
            placeholders = []
            for i, name in enumerate(tables):
                placeholders.append(f":v{i}")
                args[f"v{i}"] = name.upper()
            in_clause = "AND OBJECT_NAME IN (" + ", ".join(placeholders) + ")"

        query = f"""
            SELECT DISTINCT OBJECT_NAME
            FROM ALL_OBJECTS
            WHERE OBJECT_TYPE = 'TABLE'
              AND OWNER = :owner
              {in_clause}
            ORDER BY OBJECT_NAME
        """
        try:
            rows = self._select(query, args)
        except Exception as exc:
            raise self._query_failed("get_tables()", exc, owner=self.owner) from exc

        return [Table(name=row[0]) for row in rows]

    def prepare_columns_stmt(self):
        """Prepare the column query on a dedicated cursor."""
        cursor = self._require_connection().cursor()
        try:
            cursor.prepare(COLUMNS_OF_TABLE_QUERY)
        except Exception as exc:
            cursor.close()
            raise PrepareError(
                f"Cannot prepare column statement: {exc}",
                details={"owner": self.owner},
            ) from exc
        self._columns_cursor = cursor
        self._columns_stmt = COLUMNS_OF_TABLE_QUERY

    def get_columns(self, table: Table):
        """Fetch the columns of ``table`` owned by the owner."""
        self._require_columns_stmt(table)
        try:
            self._columns_cursor.execute(None, {"owner": self.owner, "name": table.name})
            rows = self._columns_cursor.fetchall()
        except Exception as exc:
            raise self._query_failed(
                f"get_columns({table.name})", exc,
                table=table.name, owner=self.owner, db_name=self.settings.db_name,
            ) from exc

        table.columns = [Column.from_row(row) for row in rows]

    def is_primary_key(self, column: Column) -> bool:
        return "PRI" in (column.constraint_type or "")

    def is_auto_increment(self, column: Column) -> bool:
        # Oracle uses sequences and triggers rather than an auto increment flag.
        return False

    def is_nullable(self, column: Column) -> bool:
        return column.is_nullable == "Y"
