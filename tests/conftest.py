"""
Shared fixtures for the test suite.
"""

import sqlite3
from datetime import datetime, timezone

import pytest


ITEMS_SCHEMA = """
CREATE TABLE items (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    price REAL
);
INSERT INTO items (id, name, price) VALUES (1, 'Tea', 3.5);
INSERT INTO items (id, name, price) VALUES (2, 'O''Brien''s Mug', NULL);
"""


@pytest.fixture
def make_database(tmp_path):
    """Factory creating a SQLite file from a SQL script."""
    def _make(script: str, name: str = "source.db"):
        path = tmp_path / name
        conn = sqlite3.connect(path)
        try:
            conn.executescript(script)
            conn.commit()
        finally:
            conn.close()
        return path
    return _make


@pytest.fixture
def items_database(make_database):
    """Database holding the single 'items' table."""
    return make_database(ITEMS_SCHEMA)


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same moment."""
    return lambda: datetime(2024, 1, 15, 10, 30, 45, tzinfo=timezone.utc)
