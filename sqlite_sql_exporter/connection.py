"""
Source database connection and schema introspection for SQLite SQL Exporter.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Iterator, Optional

from .exceptions import RowReadError, SchemaReadError, SourceConnectionError
from .models import ColumnInfo


def quote_sqlite_identifier(name: str) -> str:
    """Quote an identifier for use in a query against SQLite."""
    return '"' + name.replace('"', '""') + '"'


def decode_text(raw: bytes) -> str:
    """Decode a TEXT value, replacing bytes that are not valid UTF-8."""
    return raw.decode('utf-8', errors='replace')


class SQLiteConnection:
    """Manages a read-only SQLite connection with context manager support."""

    TABLES_QUERY = (
        "SELECT name FROM sqlite_master "
        "WHERE type = 'table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\' "
        "ORDER BY name"
    )

    def __init__(self, database_path: str):
        self.database_path = database_path
        self.connection: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "SQLiteConnection":
        """Context manager entry - establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.disconnect()

    @property
    def uri(self) -> str:
        """Read-only URI, so a missing file is an error rather than a new database."""
        return f"{Path(self.database_path).resolve().as_uri()}?mode=ro"

    def connect(self) -> None:
        """Open the source database."""
        try:
            self.connection = sqlite3.connect(self.uri, uri=True)
            # SQLite does not validate TEXT encoding; decode lossily like other clients
            self.connection.text_factory = decode_text
            logging.info(f"Connected to {self.database_path}")
        except sqlite3.Error as e:
            logging.error(f"Failed to open database '{self.database_path}': {e}")
            raise SourceConnectionError(
                f"Cannot open database '{self.database_path}': {e}"
            ) from e

    def disconnect(self) -> None:
        """Close the database connection."""
        if self.connection is not None:
            self.connection.close()
            self.connection = None
            logging.debug("Database connection closed")

    def execute_query(self, query: str, params: tuple = ()) -> list[tuple]:
        """Execute a query and return results."""
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def get_tables(self) -> list[str]:
        """Get user tables sorted by name, skipping SQLite's internal tables."""
        try:
            results = self.execute_query(self.TABLES_QUERY)
        except sqlite3.Error as e:
            raise SourceConnectionError(
                f"Cannot list tables in '{self.database_path}': {e}"
            ) from e
        return [row[0] for row in results]

    def get_table_columns(self, table: str) -> list[ColumnInfo]:
        """Get column information for a table, in declaration order."""
        try:
            results = self.execute_query(
                f"PRAGMA table_info({quote_sqlite_identifier(table)})"
            )
        except sqlite3.Error as e:
            raise SchemaReadError(
                f"Cannot read columns of table '{table}': {e}", table=table
            ) from e

        # PRAGMA table_info returns nothing for a table that does not exist
        if not results:
            raise SchemaReadError(f"Table '{table}' has no column metadata", table=table)

        return [
            ColumnInfo(
                cid=row[0],
                name=row[1],
                type=row[2],
                notnull=bool(row[3]),
                default=row[4],
                pk=row[5]
            )
            for row in results
        ]

    def iter_rows(self, table: str) -> Iterator[dict[str, Any]]:
        """Stream every row of a table as a column name to value mapping.

        Rows come back in SQLite's storage order. The generator is single pass;
        its cursor is closed once it is exhausted or discarded.
        """
        cursor = self.connection.cursor()
        try:
            cursor.execute(f"SELECT * FROM {quote_sqlite_identifier(table)}")
            names = [description[0] for description in cursor.description]
            for row in cursor:
                yield dict(zip(names, row))
        except sqlite3.Error as e:
            raise RowReadError(
                f"Cannot read rows of table '{table}': {e}", table=table
            ) from e
        finally:
            cursor.close()

    def get_row_count(self, table: str) -> int:
        """Get row count for a table."""
        try:
            results = self.execute_query(
                f"SELECT COUNT(*) FROM {quote_sqlite_identifier(table)}"
            )
        except sqlite3.Error as e:
            raise RowReadError(f"Cannot count rows of table '{table}': {e}", table=table) from e
        return results[0][0]
