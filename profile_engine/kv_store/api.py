"""
Key-value backend public API.

This module defines the minimal persistence surface the stores are allowed to
call. Stores must not depend on SQLite details; they speak only in keys and
typed scalar values.

Notes
-----
- Each key holds one value of one kind (string, double or string list).
- Getters return None when the key is absent, holds another kind, or could not
  be read. Callers treat all three cases as "not set".
- Setters and ``remove`` report success as a boolean and never raise for
  storage failures.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, Sequence

from .errors import InvalidKeyError


class ValueKind(str, Enum):
    """Kinds of values a key may hold."""

    STRING = "string"
    DOUBLE = "double"
    STRING_LIST = "string_list"


def validate_key(key: str) -> str:
    """
    Validate a backend key.

    Parameters
    ----------
    key:
        Key to validate.

    Returns
    -------
    str
        The key, unchanged.

    Raises
    ------
    InvalidKeyError
        If the key is not a non-empty string.
    """
    if not isinstance(key, str) or not key:
        raise InvalidKeyError(f"Backend keys must be non-empty strings, got {key!r}")
    return key


class KeyValueBackend(Protocol):
    """
    Persistence API for string-keyed scalar values.

    Implementations own durability. A successful setter call means the value is
    durable by the time the call returns.
    """

    def get_string(self, key: str) -> str | None:
        """Return the string stored under key, or None."""
        raise NotImplementedError

    def set_string(self, key: str, value: str) -> bool:
        """Store a string under key and return whether the write succeeded."""
        raise NotImplementedError

    def get_double(self, key: str) -> float | None:
        """Return the double stored under key, or None."""
        raise NotImplementedError

    def set_double(self, key: str, value: float) -> bool:
        """Store a double under key and return whether the write succeeded."""
        raise NotImplementedError

    def get_string_list(self, key: str) -> list[str] | None:
        """
        Return the ordered string list stored under key.

        Returns
        -------
        list[str] | None
            A fresh list in stored order, or None.
        """
        raise NotImplementedError

    def set_string_list(self, key: str, value: Sequence[str]) -> bool:
        """
        Replace the string list stored under key.

        The whole list is rewritten; backends do not support appends.
        """
        raise NotImplementedError

    def remove(self, key: str) -> bool:
        """
        Remove key and return whether the removal succeeded.

        Removing an absent key is a success.
        """
        raise NotImplementedError
