"""
Data models and enums for SQLite SQL Exporter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ExportState(Enum):
    """Lifecycle states of a single export run."""
    IDLE = "idle"
    CONNECTING = "connecting"
    READING_SCHEMA = "reading_schema"
    READING_ROWS = "reading_rows"
    RENDERING = "rendering"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExportState.DONE, ExportState.FAILED)


class MissingColumnPolicy(Enum):
    """What to do when a row carries no value for a known column."""
    NULL = "null"
    ERROR = "error"


@dataclass
class ColumnInfo:
    """Column metadata as reported by PRAGMA table_info."""
    cid: int
    name: str
    type: str
    notnull: bool
    default: Optional[str]
    pk: int

    @property
    def is_primary_key(self) -> bool:
        return self.pk > 0


@dataclass
class TableStats:
    """Statistics for a single exported table."""
    table: str
    columns: int = 0
    rows_exported: int = 0


@dataclass
class ExportStats:
    """Overall export statistics."""
    source_path: str
    destination_path: str
    tables: list[TableStats] = field(default_factory=list)
    total_rows: int = 0
    total_lines: int = 0
    bytes_written: int = 0

    @property
    def total_tables(self) -> int:
        return len(self.tables)


class DumpDocument:
    """Ordered lines of a SQL dump, written out once when complete."""

    def __init__(self):
        self.lines: list[str] = []

    def append(self, line: str) -> None:
        self.lines.append(line)

    def extend(self, lines: list[str]) -> None:
        self.lines.extend(lines)

    def comment(self, text: str) -> None:
        self.lines.append(f"-- {text}")

    def blank(self) -> None:
        self.lines.append("")

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def render(self) -> str:
        """Join all lines with newlines. No trailing newline is added."""
        return "\n".join(self.lines)
