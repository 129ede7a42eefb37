"""Qt adapter for the engine AppState.

The engine owns state and persistence. Screens talk to this adapter through
signals and slots and never touch the stores or the backend directly.

Threading model
--------------
- The adapter and its AppState live on the GUI thread.
- Every slot runs synchronously: the durable write has settled before the
  slot returns, so two mutations can never overlap.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, Signal, Slot

from profile_engine.app_state import AppState, LoadState, open_app_state
from profile_engine.data_models import PreferenceSet, ProfileRecord, ThemeMode
from profile_engine.errors import ProfileAppError
from profile_engine.labels import labels_for
from profile_engine.profile_form import build_profile_record
from profile_engine.write_results import WriteResult


class AppStateAdapter(QObject):
    """Qt adapter that re-emits AppState changes as signals."""

    state_changed = Signal(str)  # LoadState value
    profiles_changed = Signal(object)  # tuple[ProfileRecord, ...]
    preferences_changed = Signal(object)  # PreferenceSet
    write_failed = Signal(str, str)  # key, message
    error = Signal(str)  # message

    def __init__(self, state: AppState | None = None, data_root: Path | None = None) -> None:
        super().__init__()
        self._state = state if state is not None else open_app_state(data_root=data_root)

        self._state.state_changed.connect(self._on_state_changed)
        self._state.profiles_changed.connect(self.profiles_changed.emit)
        self._state.preferences_changed.connect(self.preferences_changed.emit)

    @property
    def app_state(self) -> AppState:
        return self._state

    def _on_state_changed(self, state: LoadState) -> None:
        self.state_changed.emit(state.value)

    def _report(self, result: WriteResult) -> bool:
        if not result.ok:
            self.write_failed.emit(result.key, result.message or "")
        return result.ok

    @Slot()
    def load(self) -> None:
        """Run the load phase; READY is announced through state_changed."""
        try:
            self._state.load()
        except ProfileAppError as e:
            self.error.emit(str(e))

    @Slot(str, str, str, str, str, result=bool)
    def add_profile(self, name: str, major: str, year: str, email: str, phone: str) -> bool:
        """Validate form input and insert the profile at the front."""
        try:
            record = build_profile_record(name, major, year, email, phone)
            return self._report(self._state.add_profile(record))
        except ProfileAppError as e:
            self.error.emit(str(e))
            return False

    @Slot(int, result=bool)
    def delete_profile_at(self, index: int) -> bool:
        try:
            return self._report(self._state.delete_profile_at(index))
        except ProfileAppError as e:
            self.error.emit(str(e))
            return False

    @Slot(result=bool)
    def reset_all_data(self) -> bool:
        try:
            return self._report(self._state.reset_all_data())
        except ProfileAppError as e:
            self.error.emit(str(e))
            return False

    @Slot(str, result=bool)
    def set_theme_mode(self, mode: str) -> bool:
        try:
            return self._report(self._state.set_theme_mode(ThemeMode(mode)))
        except ValueError:
            self.error.emit(f"Unknown theme mode: {mode!r}")
            return False
        except ProfileAppError as e:
            self.error.emit(str(e))
            return False

    @Slot(float, result=bool)
    def set_font_scale(self, scale: float) -> bool:
        try:
            return self._report(self._state.set_font_scale(scale))
        except ProfileAppError as e:
            self.error.emit(str(e))
            return False

    @Slot(str, result=bool)
    def set_language(self, code: str) -> bool:
        try:
            return self._report(self._state.set_language(code))
        except ProfileAppError as e:
            self.error.emit(str(e))
            return False

    def window_title(self) -> str:
        """Localized application title, or an empty string while loading."""
        if not self._state.is_ready:
            return ""
        return labels_for(self._state.preferences.language).app_title

    def snapshot(self) -> tuple[PreferenceSet, tuple[ProfileRecord, ...]] | None:
        """Current preferences and profiles, or None until READY."""
        if not self._state.is_ready:
            return None
        return self._state.preferences, self._state.profiles
