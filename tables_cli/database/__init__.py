"""Database introspection module for tables-cli.

This module provides a database-agnostic introspection contract with
implementations for PostgreSQL, DuckDB, Oracle and SQLite.
"""

from .models import Column, Table, TypeCategory
from .base import DatabaseIntrospector
from .postgresql import PostgresIntrospector
from .duckdb import DuckDBIntrospector
from .oracle import OracleIntrospector
from .sqlite import SQLiteIntrospector
from .registry import DIALECTS, Dialect, get_dialect, create_introspector
from .loader import SchemaLoader

__all__ = [
    # Data models
    "Column",
    "Table",
    "TypeCategory",
    # Base classes
    "DatabaseIntrospector",
    # Introspectors
    "PostgresIntrospector",
    "DuckDBIntrospector",
    "OracleIntrospector",
    "SQLiteIntrospector",
    # Registry
    "DIALECTS",
    "Dialect",
    "get_dialect",
    "create_introspector",
    # Loading
    "SchemaLoader",
]
