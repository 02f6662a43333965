"""
SQLite SQL Exporter
===================
Converts a SQLite database file into a SQL dump for import into MySQL:
- Deterministic table order
- Type mapping from SQLite affinities to MySQL column types
- Primary key, NOT NULL and DEFAULT reconstruction
- Safely quoted INSERT statements, hex literals for BLOBs
"""

from .config import ConfigLoader
from .connection import SQLiteConnection
from .database_exporter import DatabaseExporter, export_database
from .exceptions import (
    ExportError,
    RowReadError,
    SchemaReadError,
    SourceConnectionError,
    WriteError,
)
from .main import main
from .models import (
    ColumnInfo,
    DumpDocument,
    ExportState,
    ExportStats,
    MissingColumnPolicy,
    TableStats,
)
from .statement_renderer import StatementRenderer
from .table_dumper import TableDumper
from .type_mapper import map_column_type
from .utils import default_output_path, print_dry_run_info, setup_logging

__version__ = "1.0.0"

__all__ = [
    # Main entry points
    "main",
    "export_database",
    # Core classes
    "ConfigLoader",
    "SQLiteConnection",
    "DatabaseExporter",
    "TableDumper",
    "StatementRenderer",
    "map_column_type",
    # Models
    "ColumnInfo",
    "DumpDocument",
    "ExportState",
    "ExportStats",
    "MissingColumnPolicy",
    "TableStats",
    # Exceptions
    "ExportError",
    "SourceConnectionError",
    "SchemaReadError",
    "RowReadError",
    "WriteError",
    # Utilities
    "default_output_path",
    "print_dry_run_info",
    "setup_logging",
]
