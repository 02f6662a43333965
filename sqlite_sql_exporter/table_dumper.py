"""
Table dumping functionality for SQLite SQL Exporter.
"""

import logging
from typing import Callable, Optional

from .connection import SQLiteConnection
from .models import DumpDocument, ExportState, TableStats
from .statement_renderer import StatementRenderer


class TableDumper:
    """Handles dumping of individual tables into a DumpDocument."""

    def __init__(
        self,
        connection: SQLiteConnection,
        renderer: StatementRenderer,
        on_state: Optional[Callable[[ExportState], None]] = None
    ):
        self.connection = connection
        self.renderer = renderer
        self.on_state = on_state

    def _set_state(self, state: ExportState) -> None:
        if self.on_state is not None:
            self.on_state(state)

    def dump_table(self, table: str, document: DumpDocument) -> TableStats:
        """
        Append the definition and data of one table to the document.

        Args:
            table: Name of the table to dump.
            document: Document the table section is appended to.

        Returns:
            TableStats with dump statistics.

        Raises:
            SchemaReadError: If the column metadata cannot be read.
            RowReadError: If the table scan fails.
        """
        self._set_state(ExportState.READING_SCHEMA)
        columns = self.connection.get_table_columns(table)
        column_names = [col.name for col in columns]
        logging.debug(f"Table '{table}' columns: {', '.join(column_names)}")

        stats = TableStats(table=table, columns=len(columns))

        self._set_state(ExportState.READING_ROWS)
        inserts = [
            self.renderer.render_insert(table, column_names, row)
            for row in self.connection.iter_rows(table)
        ]
        stats.rows_exported = len(inserts)

        self._set_state(ExportState.RENDERING)
        document.comment(f"Table: {table}")
        document.append(self.renderer.render_create_table(table, columns))
        document.blank()

        if inserts:
            document.comment(f"Data for table: {table}")
            document.extend(inserts)
            document.blank()

        return stats
