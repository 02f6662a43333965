"""
Export orchestration for SQLite SQL Exporter.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from .connection import SQLiteConnection
from .exceptions import WriteError
from .models import DumpDocument, ExportState, ExportStats, MissingColumnPolicy
from .statement_renderer import StatementRenderer
from .table_dumper import TableDumper

HEADER_BANNER = "Exported from SQLite database"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format a moment as UTC ISO-8601 with milliseconds, e.g. 2024-01-15T10:30:45.000Z."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class DatabaseExporter:
    """Runs one export of a SQLite database to a single SQL file.

    Tables are processed one at a time in name order. The whole document is
    kept in memory and written in a single operation at the end, so a failure
    on any table leaves the destination untouched.
    """

    def __init__(
        self,
        missing_columns: MissingColumnPolicy = MissingColumnPolicy.NULL,
        clock: Callable[[], datetime] = utc_now
    ):
        self.renderer = StatementRenderer(missing_columns=missing_columns)
        self.clock = clock
        self.state = ExportState.IDLE

    def _set_state(self, state: ExportState) -> None:
        if self.state.is_terminal:
            logging.debug(f"Ignoring state {state.value} after {self.state.value}")
            return
        logging.debug(f"Export state: {self.state.value} -> {state.value}")
        self.state = state

    def export(self, source_path: str, destination_path: str) -> ExportStats:
        """Export every user table of the source database to destination_path.

        Raises:
            ExportError: On the first failure; the run is aborted.
        """
        self.state = ExportState.IDLE
        stats = ExportStats(source_path=str(source_path), destination_path=str(destination_path))

        try:
            document = self.build_document(source_path, stats)

            self._set_state(ExportState.WRITING)
            stats.total_lines = document.line_count
            stats.bytes_written = self._write_document(document, Path(destination_path))

        except Exception as e:
            self._set_state(ExportState.FAILED)
            logging.error(f"Export of '{source_path}' failed: {e}")
            raise

        self._set_state(ExportState.DONE)
        logging.info(
            f"Exported {stats.total_tables} table(s), {stats.total_rows} row(s) "
            f"to {destination_path}"
        )
        return stats

    def build_document(self, source_path: str, stats: ExportStats) -> DumpDocument:
        """Read the source database and render the full dump document."""
        document = DumpDocument()
        document.comment(HEADER_BANNER)
        document.comment(f"Generated on {format_timestamp(self.clock())}")
        document.blank()

        self._set_state(ExportState.CONNECTING)
        with SQLiteConnection(source_path) as conn:
            tables = conn.get_tables()
            logging.info(f"Found {len(tables)} table(s) to export")

            dumper = TableDumper(conn, self.renderer, on_state=self._set_state)
            for table in tables:
                table_stats = dumper.dump_table(table, document)
                stats.tables.append(table_stats)
                stats.total_rows += table_stats.rows_exported
                logging.info(f"  ✓ {table}: {table_stats.rows_exported} rows")

        return document

    def _write_document(self, document: DumpDocument, destination: Path) -> int:
        """Write the document in one go, replacing any existing file."""
        content = document.render()
        try:
            with open(destination, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
        except OSError as e:
            raise WriteError(f"Cannot write '{destination}': {e}") from e
        return len(content.encode('utf-8'))


def export_database(
    source_path: str,
    destination_path: str,
    missing_columns: MissingColumnPolicy = MissingColumnPolicy.NULL,
    clock: Callable[[], datetime] = utc_now
) -> ExportStats:
    """Export a SQLite database file to a MySQL-compatible SQL dump."""
    exporter = DatabaseExporter(missing_columns=missing_columns, clock=clock)
    return exporter.export(source_path, destination_path)
