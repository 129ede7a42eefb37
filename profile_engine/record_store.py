"""
Record store.

Owns the ordered list of profile records (most recently added first) and keeps
it synchronized to a single backend key holding a list of JSON objects.

Notes
-----
Every mutation rewrites the whole list. The backend only supports whole-value
writes per key, so there is no append path.

Caller contract
---------------
Single actor, no internal locking. A mutation returns only after its write
settled; overlapping mutations are not supported. The store assumes it is the
sole writer of its key.
"""

from __future__ import annotations

import logging
from typing import Final

from .data_models import ProfileRecord
from .kv_store.api import KeyValueBackend
from .observers import Listeners
from .write_results import WriteResult, failed, skipped, written

logger = logging.getLogger(__name__)

PROFILES_KEY: Final[str] = "profiles"


def decode_records(items: list[str]) -> tuple[ProfileRecord, ...]:
    """
    Decode persisted record texts, skipping elements that fail to decode.

    Parameters
    ----------
    items:
        Persisted JSON texts in stored order.

    Returns
    -------
    tuple[ProfileRecord, ...]
        Decoded records in the same relative order.
    """
    records: list[ProfileRecord] = []
    for position, text in enumerate(items):
        try:
            records.append(ProfileRecord.from_json(text))
        except (ValueError, RecursionError) as exc:
            logger.warning("Skipping unreadable profile at position %d: %s", position, exc)
    return tuple(records)


def encode_records(records: tuple[ProfileRecord, ...]) -> list[str]:
    """Encode records to their persisted JSON texts, preserving order."""
    return [record.to_json() for record in records]


class RecordStore:
    """
    In-memory profile list synchronized to a key-value backend.

    Parameters
    ----------
    backend:
        Persistence backend.

    Attributes
    ----------
    changed:
        Listeners receiving the full record tuple after each mutation that
        changed the list.
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend
        self._records: tuple[ProfileRecord, ...] = ()
        self.changed: Listeners[tuple[ProfileRecord, ...]] = Listeners()

    @property
    def records(self) -> tuple[ProfileRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def load(self) -> tuple[ProfileRecord, ...]:
        """
        Read the record list from the backend.

        Returns
        -------
        tuple[ProfileRecord, ...]
            Loaded records. A missing or malformed key yields an empty tuple;
            individual unreadable elements are skipped and logged.
        """
        items = self._backend.get_string_list(PROFILES_KEY)
        self._records = decode_records(items) if items is not None else ()
        logger.debug("Loaded %d profile(s)", len(self._records))
        return self._records

    def insert_front(self, record: ProfileRecord) -> WriteResult:
        """Prepend record and rewrite the stored list."""
        self._records = (record, *self._records)
        return self._persist()

    def delete_at(self, index: int) -> WriteResult:
        """
        Remove the record at index and rewrite the stored list.

        Out-of-range indexes (including negative ones) are a no-op: nothing is
        written and observers are not notified.
        """
        if not 0 <= index < len(self._records):
            logger.debug("Ignoring delete of out-of-range index %d", index)
            return skipped(PROFILES_KEY, f"Index {index} out of range for {len(self._records)} record(s)")
        self._records = self._records[:index] + self._records[index + 1 :]
        return self._persist()

    def clear_all(self) -> WriteResult:
        """Drop every record and remove the backing key."""
        self._records = ()
        if self._backend.remove(PROFILES_KEY):
            result = written(PROFILES_KEY)
        else:
            logger.warning("Profiles cleared in memory but the stored list was not removed")
            result = failed(PROFILES_KEY, f"Backend rejected removal of {PROFILES_KEY!r}")
        self.changed.emit(self._records)
        return result

    def _persist(self) -> WriteResult:
        if self._backend.set_string_list(PROFILES_KEY, encode_records(self._records)):
            result = written(PROFILES_KEY)
        else:
            logger.warning("Profiles changed in memory but were not persisted")
            result = failed(PROFILES_KEY, f"Backend rejected write of {PROFILES_KEY!r}")
        self.changed.emit(self._records)
        return result
