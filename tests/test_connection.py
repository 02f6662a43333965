"""
Unit tests for connection.py
"""

import sqlite3
from unittest import mock

import pytest

from sqlite_sql_exporter.connection import SQLiteConnection, quote_sqlite_identifier
from sqlite_sql_exporter.exceptions import (
    RowReadError,
    SchemaReadError,
    SourceConnectionError,
)
from sqlite_sql_exporter.models import ColumnInfo


class TestQuoteSqliteIdentifier:
    """Tests for quote_sqlite_identifier."""

    def test_plain_name(self):
        assert quote_sqlite_identifier("users") == '"users"'

    def test_embedded_quote(self):
        assert quote_sqlite_identifier('a"b') == '"a""b"'


class TestSQLiteConnection:
    """Tests for SQLiteConnection class."""

    def test_init(self):
        """Test connection initialization."""
        conn = SQLiteConnection("data/app.db")
        assert conn.database_path == "data/app.db"
        assert conn.connection is None

    def test_uri_is_read_only(self, tmp_path):
        conn = SQLiteConnection(str(tmp_path / "app.db"))
        assert conn.uri.startswith("file:")
        assert conn.uri.endswith("?mode=ro")

    def test_connect_and_disconnect(self, items_database):
        conn = SQLiteConnection(str(items_database))
        conn.connect()
        assert conn.connection is not None
        conn.disconnect()
        assert conn.connection is None

    def test_disconnect_not_connected(self):
        """Test disconnect when not connected."""
        conn = SQLiteConnection("unused.db")
        # Should not raise any errors
        conn.disconnect()

    def test_context_manager(self, items_database):
        """Test context manager usage."""
        with SQLiteConnection(str(items_database)) as conn:
            assert conn.connection is not None
        assert conn.connection is None

    def test_context_manager_closes_on_error(self, items_database):
        with pytest.raises(RuntimeError):
            with SQLiteConnection(str(items_database)) as conn:
                raise RuntimeError("boom")
        assert conn.connection is None

    def test_missing_file_raises(self, tmp_path):
        """A missing file is an error and is not created."""
        missing = tmp_path / "missing.db"
        conn = SQLiteConnection(str(missing))

        with pytest.raises(SourceConnectionError):
            conn.connect()
        assert not missing.exists()

    def test_not_a_database(self, tmp_path):
        bogus = tmp_path / "bogus.db"
        bogus.write_bytes(b"this is not a sqlite database " * 100)

        with SQLiteConnection(str(bogus)) as conn:
            with pytest.raises(SourceConnectionError) as exc_info:
                conn.get_tables()
        assert "bogus.db" in str(exc_info.value)

    def test_read_only(self, items_database):
        with SQLiteConnection(str(items_database)) as conn:
            with pytest.raises(sqlite3.OperationalError):
                conn.execute_query("DELETE FROM items")

    def test_execute_query(self, items_database):
        """Test query execution."""
        with SQLiteConnection(str(items_database)) as conn:
            result = conn.execute_query("SELECT id FROM items ORDER BY id")
        assert result == [(1,), (2,)]

    def test_execute_query_with_params(self, items_database):
        """Test query execution with parameters."""
        with SQLiteConnection(str(items_database)) as conn:
            result = conn.execute_query("SELECT name FROM items WHERE id = ?", (1,))
        assert result == [("Tea",)]


class TestGetTables:
    """Tests for get_tables method."""

    def test_sorted_by_name(self, make_database):
        path = make_database(
            "CREATE TABLE orders (id INTEGER);"
            "CREATE TABLE customers (id INTEGER);"
            "CREATE TABLE products (id INTEGER);"
        )
        with SQLiteConnection(str(path)) as conn:
            assert conn.get_tables() == ["customers", "orders", "products"]

    def test_excludes_internal_tables(self, make_database):
        path = make_database(
            "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT);"
            "INSERT INTO users (name) VALUES ('a');"
            "ANALYZE;"
        )
        with SQLiteConnection(str(path)) as conn:
            tables = conn.get_tables()
        assert tables == ["users"]

    def test_prefix_match_is_literal(self, make_database):
        # "_" in the prefix must not act as a LIKE wildcard
        path = make_database("CREATE TABLE sqliteXdata (id INTEGER);")
        with SQLiteConnection(str(path)) as conn:
            assert conn.get_tables() == ["sqliteXdata"]

    def test_excludes_views_and_indexes(self, make_database):
        path = make_database(
            "CREATE TABLE users (id INTEGER, name TEXT);"
            "CREATE INDEX idx_users_name ON users (name);"
            "CREATE VIEW user_names AS SELECT name FROM users;"
        )
        with SQLiteConnection(str(path)) as conn:
            assert conn.get_tables() == ["users"]

    def test_empty_database(self, make_database):
        path = make_database("PRAGMA user_version = 1;")
        with SQLiteConnection(str(path)) as conn:
            assert conn.get_tables() == []


class TestGetTableColumns:
    """Tests for get_table_columns method."""

    def test_columns(self, make_database):
        path = make_database(
            "CREATE TABLE users ("
            "  id INTEGER PRIMARY KEY,"
            "  name VARCHAR(50) NOT NULL,"
            "  status TEXT DEFAULT 'active',"
            "  created_at DATETIME DEFAULT CURRENT_TIMESTAMP,"
            "  misc"
            ");"
        )
        with SQLiteConnection(str(path)) as conn:
            columns = conn.get_table_columns("users")

        assert len(columns) == 5
        assert all(isinstance(col, ColumnInfo) for col in columns)
        assert [col.name for col in columns] == ["id", "name", "status", "created_at", "misc"]
        assert [col.cid for col in columns] == [0, 1, 2, 3, 4]

        assert columns[0].type == "INTEGER"
        assert columns[0].is_primary_key
        assert columns[1].type == "VARCHAR(50)"
        assert columns[1].notnull is True
        assert columns[2].notnull is False
        assert columns[2].default == "'active'"
        assert columns[3].default == "CURRENT_TIMESTAMP"
        assert columns[4].type == ""
        assert columns[4].default is None

    def test_composite_primary_key(self, make_database):
        path = make_database("CREATE TABLE pairs (a INTEGER, b TEXT, PRIMARY KEY (a, b));")
        with SQLiteConnection(str(path)) as conn:
            columns = conn.get_table_columns("pairs")
        assert [col.pk for col in columns] == [1, 2]

    def test_quoted_table_name(self, make_database):
        path = make_database('CREATE TABLE "order items" ("it\'s" TEXT);')
        with SQLiteConnection(str(path)) as conn:
            columns = conn.get_table_columns("order items")
        assert [col.name for col in columns] == ["it's"]

    def test_missing_table(self, items_database):
        with SQLiteConnection(str(items_database)) as conn:
            with pytest.raises(SchemaReadError) as exc_info:
                conn.get_table_columns("nope")
        assert exc_info.value.table == "nope"

    def test_query_failure(self, items_database):
        conn = SQLiteConnection(str(items_database))
        conn.connection = mock.MagicMock()
        conn.connection.cursor.return_value.execute.side_effect = sqlite3.OperationalError("disk I/O error")

        with pytest.raises(SchemaReadError) as exc_info:
            conn.get_table_columns("items")
        assert "disk I/O error" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)


class TestIterRows:
    """Tests for iter_rows method."""

    def test_rows_as_mappings(self, items_database):
        with SQLiteConnection(str(items_database)) as conn:
            rows = list(conn.iter_rows("items"))
        assert rows == [
            {"id": 1, "name": "Tea", "price": 3.5},
            {"id": 2, "name": "O'Brien's Mug", "price": None},
        ]

    def test_runtime_types(self, make_database):
        path = make_database(
            "CREATE TABLE mixed (v INTEGER);"
            "INSERT INTO mixed VALUES (1);"
            "INSERT INTO mixed VALUES ('abc');"
            "INSERT INTO mixed VALUES (2.5);"
            "INSERT INTO mixed VALUES (X'00FF');"
            "INSERT INTO mixed VALUES (NULL);"
        )
        with SQLiteConnection(str(path)) as conn:
            values = [row["v"] for row in conn.iter_rows("mixed")]
        assert values == [1, "abc", 2.5, b"\x00\xff", None]

    def test_invalid_utf8_text_replaced(self, make_database):
        path = make_database(
            "CREATE TABLE t (v TEXT);"
            "INSERT INTO t VALUES (CAST(X'6361ff' AS TEXT));"
        )
        with SQLiteConnection(str(path)) as conn:
            values = [row["v"] for row in conn.iter_rows("t")]
        assert values == ["ca\ufffd"]

    def test_empty_table(self, make_database):
        path = make_database("CREATE TABLE empty (id INTEGER);")
        with SQLiteConnection(str(path)) as conn:
            assert list(conn.iter_rows("empty")) == []

    def test_is_lazy(self, items_database):
        with SQLiteConnection(str(items_database)) as conn:
            rows = conn.iter_rows("items")
            assert next(rows) == {"id": 1, "name": "Tea", "price": 3.5}
            rows.close()

    def test_scan_failure(self, items_database):
        conn = SQLiteConnection(str(items_database))
        conn.connection = mock.MagicMock()
        conn.connection.cursor.return_value.execute.side_effect = sqlite3.DatabaseError("malformed")

        with pytest.raises(RowReadError) as exc_info:
            list(conn.iter_rows("items"))
        assert exc_info.value.table == "items"
        conn.connection.cursor.return_value.close.assert_called_once()


class TestGetRowCount:
    """Tests for get_row_count method."""

    def test_row_count(self, items_database):
        with SQLiteConnection(str(items_database)) as conn:
            assert conn.get_row_count("items") == 2

    def test_missing_table(self, items_database):
        with SQLiteConnection(str(items_database)) as conn:
            with pytest.raises(RowReadError):
                conn.get_row_count("nope")
