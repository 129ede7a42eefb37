"""
Application state owner.

``AppState`` is the single point of truth handed to presentation consumers. It
owns both stores, runs the one-time load phase and forwards every mutation to
persistence.

Lifecycle
---------
UNINITIALIZED -> LOADING -> READY. READY is terminal for the process lifetime.
Until READY, the in-memory values are defaults and must not be read as saved
values, so the read accessors and mutations raise ``StateNotReadyError``.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from .data_models import PreferenceSet, ProfileRecord, ThemeMode
from .errors import LifecycleError, StateNotReadyError
from .kv_store.api import KeyValueBackend
from .kv_store.errors import KeyValueStoreError
from .kv_store.memory_backend import InMemoryKeyValueBackend
from .kv_store.sqlite_backend import SqliteKeyValueBackend
from .observers import Listeners
from .paths import store_db_path
from .preference_store import PreferenceStore
from .record_store import RecordStore
from .write_results import WriteOutcome, WriteResult, failed

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    """Load phase of the application state."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class AppState:
    """
    Owner of preferences and profile records.

    Parameters
    ----------
    backend:
        Persistence backend shared by both stores.
    persistent:
        Whether backend writes survive a restart. When False, every write that
        the backend accepted is reported as FAILED, since memory and disk
        diverge.

    Attributes
    ----------
    state_changed:
        Listeners receiving each new ``LoadState``.
    profiles_changed:
        Listeners receiving the full record tuple after each record mutation.
    preferences_changed:
        Listeners receiving the full ``PreferenceSet`` after each setter call.
    """

    def __init__(self, backend: KeyValueBackend, persistent: bool = True) -> None:
        self._state = LoadState.UNINITIALIZED
        self._persistent = persistent
        self._preference_store = PreferenceStore(backend)
        self._record_store = RecordStore(backend)

        self.state_changed: Listeners[LoadState] = Listeners()
        self.profiles_changed = self._record_store.changed
        self.preferences_changed = self._preference_store.changed

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is LoadState.READY

    @property
    def persistent(self) -> bool:
        return self._persistent

    def load(self) -> None:
        """
        Run the load phase.

        Raises
        ------
        LifecycleError
            If the load phase was already started.
        """
        if self._state is not LoadState.UNINITIALIZED:
            raise LifecycleError(f"Load already started (state={self._state.value})")

        self._transition(LoadState.LOADING)
        self._preference_store.load()
        self._record_store.load()
        self._transition(LoadState.READY)

    def _transition(self, state: LoadState) -> None:
        logger.debug("App state %s -> %s", self._state.value, state.value)
        self._state = state
        self.state_changed.emit(state)

    def _require_ready(self) -> None:
        if self._state is not LoadState.READY:
            raise StateNotReadyError(f"App state is {self._state.value}, not ready")

    def _durable(self, result: WriteResult) -> WriteResult:
        if self._persistent or result.outcome is not WriteOutcome.WRITTEN:
            return result
        return failed(result.key, "Storage unavailable; change kept in memory only")

    @property
    def preferences(self) -> PreferenceSet:
        self._require_ready()
        return self._preference_store.preferences

    @property
    def profiles(self) -> tuple[ProfileRecord, ...]:
        self._require_ready()
        return self._record_store.records

    def add_profile(self, record: ProfileRecord) -> WriteResult:
        """Insert record at the front of the profile list."""
        self._require_ready()
        return self._durable(self._record_store.insert_front(record))

    def delete_profile_at(self, index: int) -> WriteResult:
        """Delete the profile at index; out-of-range indexes are a no-op."""
        self._require_ready()
        return self._durable(self._record_store.delete_at(index))

    def reset_all_data(self) -> WriteResult:
        """Remove every stored profile. Preferences are kept."""
        self._require_ready()
        return self._durable(self._record_store.clear_all())

    def set_theme_mode(self, mode: ThemeMode) -> WriteResult:
        self._require_ready()
        return self._durable(self._preference_store.set_theme_mode(mode))

    def set_font_scale(self, scale: float) -> WriteResult:
        self._require_ready()
        return self._durable(self._preference_store.set_font_scale(scale))

    def set_language(self, code: str) -> WriteResult:
        self._require_ready()
        return self._durable(self._preference_store.set_language(code))


def open_app_state(data_root: Path | None = None) -> AppState:
    """
    Convenience constructor backed by the on-disk SQLite store.

    Parameters
    ----------
    data_root:
        Optional override for the data root.

    Returns
    -------
    AppState
        A not-yet-loaded state owner. If the database cannot be opened, an
        in-memory backend is used so the application still has usable
        defaults. That state reports ``persistent`` as False and every
        accepted write as FAILED.
    """
    db_path = store_db_path(data_root)
    try:
        backend: KeyValueBackend = SqliteKeyValueBackend(db_path=db_path)
    except KeyValueStoreError as exc:
        logger.warning("Persistence unavailable, falling back to memory: %s", exc)
        return AppState(InMemoryKeyValueBackend(), persistent=False)
    return AppState(backend)
