"""
Exceptions for SQLite SQL Exporter.

Every failure aborts the whole export run; nothing is retried.
"""

from typing import Optional


class ExportError(Exception):
    """Base exception for export failures."""

    def __init__(self, message: str, table: Optional[str] = None):
        super().__init__(message)
        self.table = table


class SourceConnectionError(ExportError):
    """Raised when the source database cannot be opened or queried."""
    pass


class SchemaReadError(ExportError):
    """Raised when column metadata for a table cannot be read."""
    pass


class RowReadError(ExportError):
    """Raised when a table scan fails part way through."""
    pass


class WriteError(ExportError):
    """Raised when the rendered dump cannot be written to its destination."""
    pass
