"""
SQLite implementation of KeyValueBackend.

This module owns the on-disk format of persisted preferences and records.

Threading
---------
A short-lived sqlite3 connection is opened per call and closed afterwards.
Connections are never shared across threads, but the backend itself assumes a
single caller at a time (see the stores' caller contract).
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .api import KeyValueBackend, ValueKind, validate_key
from .errors import KeyValueStoreError
from .schema import SCHEMA_V1

logger = logging.getLogger(__name__)


def _encode_double(value: float) -> str:
    # repr keeps full precision and round-trips nan/inf through float().
    return repr(float(value))


def _decode_string_list(raw: str) -> list[str] | None:
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError):
        return None
    if not isinstance(payload, list) or not all(isinstance(v, str) for v in payload):
        return None
    return payload


@dataclass(frozen=True, slots=True)
class SqliteKeyValueBackend(KeyValueBackend):
    """
    SQLite-backed KeyValueBackend.

    Parameters
    ----------
    db_path:
        Path to the SQLite database.

    Notes
    -----
    The database file is created if absent. The parent directory is created as
    needed.

    Raises
    ------
    KeyValueStoreError
        If the database cannot be created or its schema cannot be applied.
    """

    db_path: Path

    def __post_init__(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with closing(self._connect()) as conn, conn:
                conn.executescript(SCHEMA_V1)
        except (OSError, sqlite3.Error) as exc:
            raise KeyValueStoreError(f"Cannot open key-value store at {self.db_path}: {exc}") from exc

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _read(self, key: str, kind: ValueKind) -> str | None:
        validate_key(key)
        try:
            with closing(self._connect()) as conn:
                row = conn.execute("SELECT kind, value FROM kv WHERE key = ?", (key,)).fetchone()
        except (sqlite3.Error, UnicodeError) as exc:
            logger.warning("Read of key %r failed: %s", key, exc)
            return None
        if row is None:
            return None
        if str(row["kind"]) != kind.value:
            logger.debug("Key %r holds %s, not %s", key, row["kind"], kind.value)
            return None
        return str(row["value"])

    def _write(self, key: str, kind: ValueKind, value: str) -> bool:
        validate_key(key)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "INSERT INTO kv(key, kind, value) VALUES(?, ?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET kind = excluded.kind, value = excluded.value",
                    (key, kind.value, value),
                )
        except (sqlite3.Error, UnicodeError) as exc:
            logger.warning("Write of key %r failed: %s", key, exc)
            return False
        return True

    def get_string(self, key: str) -> str | None:
        """See KeyValueBackend.get_string."""
        return self._read(key, ValueKind.STRING)

    def set_string(self, key: str, value: str) -> bool:
        """See KeyValueBackend.set_string."""
        return self._write(key, ValueKind.STRING, str(value))

    def get_double(self, key: str) -> float | None:
        """See KeyValueBackend.get_double."""
        raw = self._read(key, ValueKind.DOUBLE)
        if raw is None:
            return None
        try:
            return float(raw)
        except ValueError:
            logger.warning("Key %r holds an unparsable double: %r", key, raw)
            return None

    def set_double(self, key: str, value: float) -> bool:
        """See KeyValueBackend.set_double."""
        return self._write(key, ValueKind.DOUBLE, _encode_double(value))

    def get_string_list(self, key: str) -> list[str] | None:
        """See KeyValueBackend.get_string_list."""
        raw = self._read(key, ValueKind.STRING_LIST)
        if raw is None:
            return None
        items = _decode_string_list(raw)
        if items is None:
            logger.warning("Key %r holds a malformed string list", key)
        return items

    def set_string_list(self, key: str, value: Sequence[str]) -> bool:
        """See KeyValueBackend.set_string_list."""
        return self._write(key, ValueKind.STRING_LIST, json.dumps(list(value), ensure_ascii=False))

    def remove(self, key: str) -> bool:
        """See KeyValueBackend.remove."""
        validate_key(key)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        except (sqlite3.Error, UnicodeError) as exc:
            logger.warning("Removal of key %r failed: %s", key, exc)
            return False
        return True

    def keys(self) -> list[str]:
        """Return all stored keys in ascending order."""
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute("SELECT key FROM kv ORDER BY key ASC").fetchall()
        except sqlite3.Error as exc:
            logger.warning("Listing keys failed: %s", exc)
            return []
        return [str(r["key"]) for r in rows]

