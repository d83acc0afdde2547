"""Registry of supported database types."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Type

from ..config import Settings
from ..errors import UnsupportedDatabaseError
from .base import DatabaseIntrospector
from .duckdb import DuckDBIntrospector
from .oracle import OracleIntrospector
from .postgresql import PostgresIntrospector
from .sqlite import SQLiteIntrospector


@dataclass(frozen=True)
class Dialect:
    """A supported database type: its driver and introspector class."""
    name: str
    driver: str
    introspector: Type[DatabaseIntrospector]


DIALECTS: Mapping[str, Dialect] = MappingProxyType({
    "pg": Dialect(name="pg", driver="psycopg2", introspector=PostgresIntrospector),
    "duckdb": Dialect(name="duckdb", driver="duckdb", introspector=DuckDBIntrospector),
    "oracle": Dialect(name="oracle", driver="oracledb", introspector=OracleIntrospector),
    "sqlite3": Dialect(name="sqlite3", driver="sqlite3", introspector=SQLiteIntrospector),
})


def get_dialect(db_type: str) -> Dialect:
    """Look up the dialect registered for ``db_type``.

    Raises:
        UnsupportedDatabaseError: No backend is registered for ``db_type``
    """
    try:
        return DIALECTS[db_type]
    except KeyError:
        raise UnsupportedDatabaseError(db_type, sorted(DIALECTS)) from None


def create_introspector(settings: Settings) -> DatabaseIntrospector:
    """Create the introspector for the configured database type."""
    return get_dialect(settings.db_type).introspector(settings)
