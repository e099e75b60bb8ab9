"""Unit Tests for dialect adapters

Tests insert-with-generated-id semantics per dialect against mock
connections, plus capabilities and identifier quoting.
"""

from unittest.mock import MagicMock

import pytest

from dblayer.adapters import (
    BaseAdapter,
    MySQLAdapter,
    PostgresAdapter,
    SQLiteAdapter,
    create_adapter,
)
from dblayer.exceptions import UnsupportedDialectError
from dblayer.models import Dialect

NO_PARAMETERS = {"no_parameters": True}


class TestAdapterFactory:
    """Test create_adapter."""

    @pytest.mark.parametrize(
        "dialect, adapter_class",
        [
            (Dialect.MYSQL, MySQLAdapter),
            (Dialect.POSTGRESQL, PostgresAdapter),
            (Dialect.SQLITE, SQLiteAdapter),
            ("postgres", PostgresAdapter),
        ],
    )
    def test_one_adapter_per_dialect(self, dialect, adapter_class):
        adapter = create_adapter(dialect)

        assert isinstance(adapter, adapter_class)
        assert isinstance(adapter, BaseAdapter)

    def test_every_dialect_has_an_adapter(self):
        for dialect in Dialect:
            assert create_adapter(dialect).dialect is dialect

    def test_unsupported_dialect(self):
        with pytest.raises(UnsupportedDialectError):
            create_adapter("mssql")


class TestMySQLAdapter:
    """Test MySQL insert semantics (cursor-reported ids)."""

    def test_capabilities(self):
        capabilities = MySQLAdapter().capabilities

        assert capabilities.returning_clause is False
        assert capabilities.table_maintenance is True
        assert "table_maintenance" in capabilities.get_supported_features()

    def test_session_init_statement(self):
        assert MySQLAdapter().session_init_statement == "SET NAMES utf8"

    def test_insert_returns_last_id(self):
        conn = MagicMock()
        conn.exec_driver_sql.return_value.lastrowid = 17

        result = MySQLAdapter().insert(conn, "INSERT INTO t(x) VALUES (1)", True)

        assert result == 17
        conn.exec_driver_sql.assert_called_once_with(
            "INSERT INTO t(x) VALUES (1)", execution_options=NO_PARAMETERS
        )

    def test_insert_returns_affected_rows(self):
        conn = MagicMock()
        conn.exec_driver_sql.return_value.rowcount = 3

        result = MySQLAdapter().insert(
            conn, "INSERT INTO t(x) VALUES (1), (2), (3)", False
        )

        assert result == 3

    def test_quote_identifier(self):
        adapter = MySQLAdapter()

        assert adapter.quote_identifier("posts") == "`posts`"
        assert adapter.quote_identifier("we`ird") == "`we``ird`"


class TestPostgresAdapter:
    """Test PostgreSQL insert semantics (RETURNING id)."""

    def test_capabilities(self):
        capabilities = PostgresAdapter().capabilities

        assert capabilities.returning_clause is True
        assert capabilities.table_maintenance is False

    @pytest.mark.parametrize("return_last_id", [True, False])
    def test_insert_appends_returning(self, return_last_id):
        conn = MagicMock()
        conn.exec_driver_sql.return_value.scalar.return_value = 42

        result = PostgresAdapter().insert(
            conn, "INSERT INTO t(x) VALUES (1)", return_last_id
        )

        assert result == 42
        conn.exec_driver_sql.assert_called_once_with(
            "INSERT INTO t(x) VALUES (1) RETURNING id",
            execution_options=NO_PARAMETERS,
        )

    def test_quote_identifier(self):
        assert PostgresAdapter().quote_identifier('a"b') == '"a""b"'


class TestSQLiteAdapter:
    """Test SQLite adapter settings."""

    def test_no_session_statement(self):
        assert SQLiteAdapter().session_init_statement is None

    def test_connect_args(self):
        assert SQLiteAdapter().connect_args == {"check_same_thread": False}
