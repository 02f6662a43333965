"""
Rendering of CREATE TABLE and INSERT statements in MySQL dialect.
"""

import math
from typing import Any, Callable, Mapping

from .exceptions import RowReadError
from .models import ColumnInfo, MissingColumnPolicy
from .type_mapper import has_integer_affinity, map_column_type


def quote_identifier(name: str) -> str:
    """Quote a table or column name with backticks."""
    return "`" + name.replace("`", "``") + "`"


def quote_text(value: str) -> str:
    """Quote a string literal, doubling any single quotes it contains."""
    return "'" + value.replace("'", "''") + "'"


def format_float(value: float) -> str:
    """Format a REAL value. Infinities have no SQL literal and become NULL."""
    if not math.isfinite(value):
        return 'NULL'
    return str(value)


class StatementRenderer:
    """Turns table metadata and rows into SQL text."""

    def __init__(self, missing_columns: MissingColumnPolicy = MissingColumnPolicy.NULL):
        self.missing_columns = missing_columns

        # Values are formatted by their runtime type; SQLite does not
        # enforce the declared column type.
        self._type_formatters: dict[type, Callable[[Any], str]] = {
            type(None): lambda v: 'NULL',
            bool: lambda v: '1' if v else '0',
            int: str,
            float: format_float,
            str: quote_text,
            bytes: lambda v: f"X'{v.hex()}'",
            memoryview: lambda v: f"X'{v.hex()}'",
        }

    def render_column_definition(self, column: ColumnInfo) -> str:
        """Render one column line of a CREATE TABLE statement."""
        definition = f"  {quote_identifier(column.name)} {map_column_type(column.type)}"

        if column.notnull and not column.is_primary_key:
            definition += " NOT NULL"

        if column.is_primary_key:
            definition += " PRIMARY KEY"
            if has_integer_affinity(column.type):
                definition += " AUTO_INCREMENT"

        # Defaults are copied exactly as SQLite reports them
        if column.default is not None:
            definition += f" DEFAULT {column.default}"

        return definition

    def render_create_table(self, table: str, columns: list[ColumnInfo]) -> str:
        """Render the CREATE TABLE statement for a table."""
        column_defs = ",\n".join(self.render_column_definition(col) for col in columns)
        return f"CREATE TABLE {quote_identifier(table)} (\n{column_defs}\n);"

    def render_insert(
        self,
        table: str,
        column_names: list[str],
        row: Mapping[str, Any]
    ) -> str:
        """Render a single-row INSERT statement.

        The column list always comes from the table metadata. A row missing one
        of those columns gets NULL, or raises RowReadError under the
        ``error`` policy.
        """
        quoted_columns = ', '.join(quote_identifier(col) for col in column_names)
        values = ', '.join(
            self.format_value(self._get_cell(table, row, col)) for col in column_names
        )
        return f"INSERT INTO {quote_identifier(table)} ({quoted_columns}) VALUES ({values});"

    def _get_cell(self, table: str, row: Mapping[str, Any], column: str) -> Any:
        if column in row:
            return row[column]
        if self.missing_columns == MissingColumnPolicy.ERROR:
            raise RowReadError(
                f"Row in table '{table}' has no value for column '{column}'", table=table
            )
        return None

    def format_value(self, value: Any) -> str:
        """Format a value as a SQL literal."""
        formatter = self._type_formatters.get(type(value))
        if formatter:
            return formatter(value)

        return quote_text(str(value))
