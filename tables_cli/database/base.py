"""Abstract base class for database introspection."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional, List, Sequence, Iterable

from ..config import Settings
from ..errors import ConnectionError, PrepareError, QueryError
from .models import Column, Table, TypeCategory

logger = logging.getLogger(__name__)

_TYPE_ARGUMENTS = re.compile(r"\([^)]*\)")


def normalize_datatype(data_type: str) -> str:
    """Lower-case a native type and drop length/precision arguments.

    ``"TIMESTAMP(6) WITH TIME ZONE"`` becomes ``"timestamp with time zone"``.
    """
    return " ".join(_TYPE_ARGUMENTS.sub(" ", data_type or "").split()).lower()


def is_type_in(data_type: str, datatypes: Iterable[str]) -> bool:
    """Case-insensitive membership test of a native type in a datatype list."""
    return normalize_datatype(data_type) in {t.lower() for t in datatypes}


class DatabaseIntrospector(ABC):
    """Abstract base class for database introspection.

    Subclasses implement the catalog queries and the nullability,
    primary key and auto increment rules of one database product, and
    declare its five datatype lists.
    """

    DEFAULT_SCHEMA: Optional[str] = None
    DEFAULT_PORT: Optional[int] = None
    DEFAULT_USER: Optional[str] = None

    STRING_DATATYPES: Sequence[str] = ()
    TEXT_DATATYPES: Sequence[str] = ()
    INTEGER_DATATYPES: Sequence[str] = ()
    FLOAT_DATATYPES: Sequence[str] = ()
    TEMPORAL_DATATYPES: Sequence[str] = ()

    def __init__(self, settings: Settings):
        self.settings = settings
        self._connection = None
        self._columns_stmt = None

    @property
    def schema(self) -> Optional[str]:
        return self.settings.db_schema or self.DEFAULT_SCHEMA

    @property
    def port(self) -> Optional[int]:
        return self.settings.port or self.DEFAULT_PORT

    @property
    def user(self) -> Optional[str]:
        return self.settings.user or self.DEFAULT_USER

    @abstractmethod
    def dsn(self) -> str:
        """Build the connection descriptor for this database."""
        pass

    @abstractmethod
    def connect(self):
        """Establish the connection.

        Raises:
            ConnectionError: The database cannot be reached or rejects the credentials
        """
        pass

    def close(self):
        """Close the connection and forget the prepared statement."""
        self._columns_stmt = None
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    @abstractmethod
    def get_tables(self, tables: Optional[Sequence[str]] = None) -> List[Table]:
        """Get the base tables of the configured schema, ordered by name.

        Args:
            tables: Optional table names to restrict the result to

        Returns:
            List of Table objects without columns

        Raises:
            QueryError: The catalog query failed
        """
        pass

    @abstractmethod
    def prepare_columns_stmt(self):
        """Prepare the column metadata statement used by get_columns().

        Raises:
            PrepareError: The statement was rejected by the database
        """
        pass

    @abstractmethod
    def get_columns(self, table: Table):
        """Populate ``table.columns`` ordered by ordinal position.

        Raises:
            QueryError: The column query failed for this table
        """
        pass

    @abstractmethod
    def is_primary_key(self, column: Column) -> bool:
        pass

    @abstractmethod
    def is_auto_increment(self, column: Column) -> bool:
        pass

    @abstractmethod
    def is_nullable(self, column: Column) -> bool:
        pass

    def is_string(self, column: Column) -> bool:
        return is_type_in(column.data_type, self.STRING_DATATYPES)

    def is_text(self, column: Column) -> bool:
        return is_type_in(column.data_type, self.TEXT_DATATYPES)

    def is_integer(self, column: Column) -> bool:
        return is_type_in(column.data_type, self.INTEGER_DATATYPES)

    def is_float(self, column: Column) -> bool:
        return is_type_in(column.data_type, self.FLOAT_DATATYPES)

    def is_temporal(self, column: Column) -> bool:
        return is_type_in(column.data_type, self.TEMPORAL_DATATYPES)

    def classify(self, column: Column) -> TypeCategory:
        """Classify a column's native type, first matching category wins."""
        checks = (
            (TypeCategory.STRING, self.is_string),
            (TypeCategory.TEXT, self.is_text),
            (TypeCategory.INTEGER, self.is_integer),
            (TypeCategory.FLOAT, self.is_float),
            (TypeCategory.TEMPORAL, self.is_temporal),
        )
        for category, matches in checks:
            if matches(column):
                return category
        return TypeCategory.UNKNOWN

    def _require_connection(self):
        if self._connection is None:
            raise ConnectionError("Not connected to the database. Call connect() first.")
        return self._connection

    def _require_columns_stmt(self, table: Table):
        if self._columns_stmt is None:
            raise PrepareError(
                "Column statement is not prepared. Call prepare_columns_stmt() first.",
                details={"table": table.name},
            )
        return self._columns_stmt

    def _select(self, sql: str, params=None) -> List:
        """Execute a query and return all rows."""
        cursor = self._require_connection().cursor()
        try:
            if params is None:
                cursor.execute(sql)
            else:
                cursor.execute(sql, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def _execute(self, sql: str, params=None):
        """Execute a statement without fetching rows."""
        cursor = self._require_connection().cursor()
        try:
            if params is None:
                cursor.execute(sql)
            else:
                cursor.execute(sql, params)
        finally:
            cursor.close()

    def _query_failed(self, operation: str, exc: Exception, **context) -> QueryError:
        """Build the QueryError for a failed catalog query, logging its scope when verbose."""
        if self.settings.verbose:
            logger.error("Error at %s", operation)
            for key, value in context.items():
                logger.error("%s: %r", key, value)
        scope = ", ".join(f"{key}={value!r}" for key, value in context.items())
        return QueryError(f"{operation} failed ({scope}): {exc}", details=context)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
