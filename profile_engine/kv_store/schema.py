"""SQLite schema for the key-value backend.

Notes
-----
Every key holds exactly one typed value. The ``kind`` column records which
getter family the value belongs to so a value written as a double is never
returned as a string.
"""

from __future__ import annotations

SCHEMA_V1 = """
PRAGMA journal_mode = WAL;

CREATE TABLE IF NOT EXISTS kv (
    key   TEXT PRIMARY KEY,
    kind  TEXT NOT NULL CHECK(kind IN ('string','double','string_list')),
    value TEXT NOT NULL
);
"""
