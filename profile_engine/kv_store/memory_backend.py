"""
In-memory implementation of KeyValueBackend.

Used by tests and as a fallback when no durable storage can be opened. Values
follow the same typing rules as the SQLite backend: a getter of one kind never
returns a value written by a setter of another kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .api import KeyValueBackend, ValueKind, validate_key

_Entry = tuple[ValueKind, object]


@dataclass(slots=True)
class InMemoryKeyValueBackend(KeyValueBackend):
    """
    Dict-backed KeyValueBackend.

    Attributes
    ----------
    fail_writes:
        Keys whose writes and removals report failure. Intended for exercising
        write-failure paths.
    """

    fail_writes: set[str] = field(default_factory=set)
    _data: dict[str, _Entry] = field(default_factory=dict)

    def _read(self, key: str, kind: ValueKind) -> object | None:
        validate_key(key)
        entry = self._data.get(key)
        if entry is None or entry[0] is not kind:
            return None
        return entry[1]

    def _write(self, key: str, kind: ValueKind, value: object) -> bool:
        validate_key(key)
        if key in self.fail_writes:
            return False
        self._data[key] = (kind, value)
        return True

    def get_string(self, key: str) -> str | None:
        value = self._read(key, ValueKind.STRING)
        return value if isinstance(value, str) else None

    def set_string(self, key: str, value: str) -> bool:
        return self._write(key, ValueKind.STRING, str(value))

    def get_double(self, key: str) -> float | None:
        value = self._read(key, ValueKind.DOUBLE)
        return value if isinstance(value, float) else None

    def set_double(self, key: str, value: float) -> bool:
        return self._write(key, ValueKind.DOUBLE, float(value))

    def get_string_list(self, key: str) -> list[str] | None:
        value = self._read(key, ValueKind.STRING_LIST)
        if not isinstance(value, tuple):
            return None
        return list(value)

    def set_string_list(self, key: str, value: Sequence[str]) -> bool:
        # Stored as a tuple so later mutation of the caller's list is not visible.
        return self._write(key, ValueKind.STRING_LIST, tuple(value))

    def remove(self, key: str) -> bool:
        validate_key(key)
        if key in self.fail_writes:
            return False
        self._data.pop(key, None)
        return True

    def keys(self) -> list[str]:
        """Return all stored keys in ascending order."""
        return sorted(self._data)
