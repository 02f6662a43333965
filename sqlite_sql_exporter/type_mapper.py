"""
Mapping of SQLite declared column types to MySQL column types.

SQLite accepts any string (or nothing) as a column type, so classification is
done by case-insensitive substring match. Rules are checked in order and the
first match wins.
"""

from typing import Optional

DEFAULT_TYPE = "TEXT"
DECIMAL_TYPE = "DECIMAL(10,2)"

# (substrings, target type); None keeps the declared type, uppercased
TYPE_RULES: list[tuple[tuple[str, ...], Optional[str]]] = [
    (("int",), "INT"),
    (("text",), "TEXT"),
    (("real", "float", "double"), DECIMAL_TYPE),
    (("blob",), "BLOB"),
    (("char",), None),
]


def map_column_type(declared_type: Optional[str]) -> str:
    """Return the MySQL type for a SQLite declared type.

    Types containing "char" keep their own spelling so that length qualifiers
    survive, e.g. ``varchar(50)`` becomes ``VARCHAR(50)``. Anything
    unrecognised, including an empty type, maps to TEXT.
    """
    declared = declared_type or ""
    lowered = declared.lower()

    for keywords, target in TYPE_RULES:
        if any(keyword in lowered for keyword in keywords):
            return target if target is not None else declared.upper()

    return DEFAULT_TYPE


def has_integer_affinity(declared_type: Optional[str]) -> bool:
    """Check whether SQLite would give this declared type INTEGER affinity."""
    return "int" in (declared_type or "").lower()
