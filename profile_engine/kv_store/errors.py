"""Domain exceptions for key-value backends."""

from __future__ import annotations

from ..errors import ProfileAppError


class KeyValueStoreError(ProfileAppError):
    """Base error for key-value backend construction failures."""


class InvalidKeyError(KeyValueStoreError):
    """Raised when a key is empty or not text."""
