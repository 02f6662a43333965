"""
Utility functions for SQLite SQL Exporter.
"""

import logging
import sys
from pathlib import Path
from typing import Any

from .connection import SQLiteConnection


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def default_output_path(input_path: str) -> Path:
    """Output path used when none is given: <dir>/<stem>_export.sql."""
    source = Path(input_path)
    return source.parent / f"{source.stem}_export.sql"


def print_dry_run_info(database_path: str) -> list[tuple[str, int, int]]:
    """Log the tables that would be exported, with column and row counts."""
    summary = []
    with SQLiteConnection(database_path) as conn:
        for table in conn.get_tables():
            columns = conn.get_table_columns(table)
            rows = conn.get_row_count(table)
            summary.append((table, len(columns), rows))

    logging.info(f"Would export {len(summary)} table(s) from {database_path}")
    for table, columns, rows in summary:
        logging.info(f"  - {table} ({columns} columns, {rows} rows)")
    return summary
