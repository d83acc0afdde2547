"""Tests for the database type registry."""

import pytest

from tables_cli.database import (
    DIALECTS,
    DuckDBIntrospector,
    OracleIntrospector,
    PostgresIntrospector,
    SQLiteIntrospector,
    create_introspector,
    get_dialect,
)
from tables_cli.errors import UnsupportedDatabaseError


class TestRegistry:
    """Test dialect lookup."""

    @pytest.mark.parametrize("db_type,driver,introspector_class", [
        ("pg", "psycopg2", PostgresIntrospector),
        ("duckdb", "duckdb", DuckDBIntrospector),
        ("oracle", "oracledb", OracleIntrospector),
        ("sqlite3", "sqlite3", SQLiteIntrospector),
    ])
    def test_lookup(self, db_type, driver, introspector_class):
        dialect = get_dialect(db_type)
        assert dialect.name == db_type
        assert dialect.driver == driver
        assert dialect.introspector is introspector_class

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedDatabaseError) as exc_info:
            get_dialect("mssql")

        assert exc_info.value.code == "UNSUPPORTED_DATABASE"
        assert exc_info.value.details["supported"] == ["duckdb", "oracle", "pg", "sqlite3"]
        assert "mssql" in exc_info.value.message

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            DIALECTS["mysql"] = get_dialect("pg")

    def test_create_introspector(self, make_settings):
        settings = make_settings(db_type="oracle")
        introspector = create_introspector(settings)
        assert isinstance(introspector, OracleIntrospector)
        assert introspector.settings is settings
