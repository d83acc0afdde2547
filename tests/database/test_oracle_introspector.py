"""Tests for the Oracle introspector with a mocked driver."""

from unittest.mock import MagicMock, patch

import pytest

from tables_cli.database import OracleIntrospector, TypeCategory
from tables_cli.database.models import Column, Table
from tables_cli.errors import ConnectionError, PrepareError, QueryError


@pytest.fixture
def oracle_settings(make_settings):
    return make_settings(
        db_type="oracle",
        host="testhost",
        user="scott",
        password="tiger",
        db_name="FREEPDB1",
    )


@pytest.fixture
def mock_cursor():
    return MagicMock()


@pytest.fixture
def introspector(oracle_settings, mock_cursor):
    introspector = OracleIntrospector(oracle_settings)
    introspector._connection = MagicMock()
    introspector._connection.cursor.return_value = mock_cursor
    return introspector


def _column(data_type, **kwargs):
    return Column(ordinal_position=1, name="C", data_type=data_type, **kwargs)


class TestOracleConnection:
    """Test connecting to Oracle."""

    def test_connect_with_settings(self, oracle_settings):
        mock_oracledb = MagicMock()
        with patch.dict("sys.modules", {"oracledb": mock_oracledb}):
            OracleIntrospector(oracle_settings).connect()

        call_kwargs = mock_oracledb.connect.call_args[1]
        assert call_kwargs["user"] == "scott"
        assert call_kwargs["password"] == "tiger"
        assert call_kwargs["dsn"] == "testhost:1521/FREEPDB1"

    def test_connect_failure_raises_connection_error(self, oracle_settings):
        mock_oracledb = MagicMock()
        mock_oracledb.connect.side_effect = Exception("ORA-01017: invalid username/password")
        with patch.dict("sys.modules", {"oracledb": mock_oracledb}):
            with pytest.raises(ConnectionError) as exc_info:
                OracleIntrospector(oracle_settings).connect()

        assert "ORA-01017" in exc_info.value.message

    def test_default_user(self, make_settings):
        assert OracleIntrospector(make_settings(db_type="oracle")).user == "system"


class TestOracleOwner:
    """Test owner scoping."""

    def test_owner_defaults_to_upper_cased_user(self, introspector):
        assert introspector.owner == "SCOTT"

    def test_owner_from_schema(self, make_settings):
        introspector = OracleIntrospector(make_settings(db_type="oracle", user="scott", db_schema="hr"))
        assert introspector.owner == "HR"
        assert introspector.schema == "HR"


class TestOracleTables:
    """Test table listing."""

    def test_get_tables_binds_upper_cased_names(self, introspector, mock_cursor):
        mock_cursor.fetchall.return_value = [("CUSTOMERS",), ("ORDERS",)]

        tables = introspector.get_tables(["customers", "Orders"])

        sql, binds = mock_cursor.execute.call_args[0]
        assert "AND OBJECT_NAME IN (:v0, :v1)" in sql
        assert "ORDER BY OBJECT_NAME" in sql
        assert binds == {"owner": "SCOTT", "v0": "CUSTOMERS", "v1": "ORDERS"}
        assert [t.name for t in tables] == ["CUSTOMERS", "ORDERS"]

    def test_get_tables_failure_carries_owner(self, introspector, mock_cursor):
        mock_cursor.execute.side_effect = Exception("ORA-00942: table or view does not exist")

        with pytest.raises(QueryError) as exc_info:
            introspector.get_tables()

        assert exc_info.value.details == {"owner": "SCOTT"}


class TestOracleColumns:
    """Test the prepared column cursor."""

    def test_prepare_uses_cursor_prepare(self, introspector, mock_cursor):
        introspector.prepare_columns_stmt()

        statement = mock_cursor.prepare.call_args[0][0]
        assert "all_tab_columns" in statement
        assert ":owner" in statement and ":name" in statement

    def test_prepare_failure(self, introspector, mock_cursor):
        mock_cursor.prepare.side_effect = Exception("ORA-00900: invalid SQL statement")

        with pytest.raises(PrepareError):
            introspector.prepare_columns_stmt()
        mock_cursor.close.assert_called_once()

    def test_get_columns(self, introspector, mock_cursor):
        mock_cursor.fetchall.return_value = [
            (1, "ID", "NUMBER", None, "N", 0, 10, "SYS_C0012", "PRI"),
            (2, "NAME", "VARCHAR2", "'n/a' ", "Y", 100, None, None, None),
            (3, "CREATED_AT", "TIMESTAMP(6)", None, "Y", 0, None, None, None),
        ]
        introspector.prepare_columns_stmt()
        table = Table(name="CUSTOMERS")

        introspector.get_columns(table)

        mock_cursor.execute.assert_called_with(None, {"owner": "SCOTT", "name": "CUSTOMERS"})
        id_column, name_column, created_column = table.columns
        assert introspector.is_primary_key(id_column) is True
        assert introspector.is_nullable(id_column) is False
        assert name_column.default_value == "'n/a'"
        assert introspector.is_nullable(name_column) is True
        assert introspector.classify(created_column) is TypeCategory.TEMPORAL

    def test_get_columns_failure_carries_table_and_owner(self, introspector, mock_cursor):
        introspector.prepare_columns_stmt()
        mock_cursor.execute.side_effect = Exception("ORA-01031: insufficient privileges")

        with pytest.raises(QueryError) as exc_info:
            introspector.get_columns(Table(name="ORDERS"))

        assert exc_info.value.table == "ORDERS"
        assert exc_info.value.details["owner"] == "SCOTT"

    def test_close_releases_prepared_cursor(self, introspector, mock_cursor):
        connection = introspector._connection
        introspector.prepare_columns_stmt()

        introspector.close()

        mock_cursor.close.assert_called()
        connection.close.assert_called_once()
        assert introspector._connection is None


class TestOracleRules:
    """Test Oracle specific rules."""

    def test_never_auto_increment(self, introspector):
        assert introspector.is_auto_increment(_column("NUMBER", default_value="ISEQ$$_1.nextval")) is False

    def test_number_classifies_as_integer(self, introspector):
        """NUMBER is in both the integer and float lists; integer is checked first."""
        number = _column("NUMBER")
        assert introspector.is_integer(number) is True
        assert introspector.is_float(number) is True
        assert introspector.classify(number) is TypeCategory.INTEGER

    def test_float_types(self, introspector):
        assert introspector.classify(_column("BINARY_DOUBLE")) is TypeCategory.FLOAT

    def test_lower_case_types_match(self, introspector):
        assert introspector.classify(_column("varchar2")) is TypeCategory.STRING
        assert introspector.classify(_column("clob")) is TypeCategory.TEXT

    def test_timestamp_with_precision_and_zone(self, introspector):
        column = _column("TIMESTAMP(6) WITH LOCAL TIME ZONE")
        assert introspector.classify(column) is TypeCategory.TEMPORAL
