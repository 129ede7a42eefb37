from __future__ import annotations

from pathlib import Path

import pytest

from profile_engine.app_state import AppState, LoadState, open_app_state
from profile_engine.data_models import PreferenceSet, ProfileRecord, ThemeMode
from profile_engine.errors import LifecycleError, StateNotReadyError
from profile_engine.kv_store.errors import KeyValueStoreError
from profile_engine.kv_store.memory_backend import InMemoryKeyValueBackend
from profile_engine.kv_store.sqlite_backend import SqliteKeyValueBackend
from profile_engine.write_results import WriteOutcome


def test_load_transitions_through_loading_to_ready() -> None:
    state = AppState(InMemoryKeyValueBackend())
    seen: list[LoadState] = []
    state.state_changed.connect(seen.append)

    assert state.state is LoadState.UNINITIALIZED
    state.load()

    assert seen == [LoadState.LOADING, LoadState.READY]
    assert state.is_ready


def test_both_stores_are_loaded_before_ready() -> None:
    backend = InMemoryKeyValueBackend()
    backend.set_string("language", "EN")
    backend.set_string_list("profiles", [ProfileRecord(name="Ana").to_json()])
    state = AppState(backend)
    snapshots: list[tuple[PreferenceSet, tuple[ProfileRecord, ...]]] = []

    def _on_state(new_state: LoadState) -> None:
        if new_state is LoadState.READY:
            snapshots.append((state.preferences, state.profiles))

    state.state_changed.connect(_on_state)
    state.load()

    assert snapshots == [
        (
            PreferenceSet(theme_mode=ThemeMode.SYSTEM, font_scale=1.0, language="EN"),
            (ProfileRecord(name="Ana"),),
        )
    ]


def test_reads_and_mutations_before_ready_raise() -> None:
    state = AppState(InMemoryKeyValueBackend())

    with pytest.raises(StateNotReadyError):
        _ = state.preferences
    with pytest.raises(StateNotReadyError):
        _ = state.profiles
    with pytest.raises(StateNotReadyError):
        state.add_profile(ProfileRecord(name="Ana"))
    with pytest.raises(StateNotReadyError):
        state.set_language("EN")


def test_ready_is_terminal() -> None:
    state = AppState(InMemoryKeyValueBackend())
    state.load()

    with pytest.raises(LifecycleError):
        state.load()
    assert state.state is LoadState.READY


def test_state_survives_restart(tmp_path: Path) -> None:
    first = open_app_state(data_root=tmp_path)
    first.load()
    first.add_profile(ProfileRecord(name="Ana"))
    first.add_profile(ProfileRecord(name="Budi"))
    first.set_theme_mode(ThemeMode.DARK)
    first.set_font_scale(1.1)
    first.set_language("EN")

    second = open_app_state(data_root=tmp_path)
    second.load()

    assert [p.name for p in second.profiles] == ["Budi", "Ana"]
    assert second.preferences == PreferenceSet(
        theme_mode=ThemeMode.DARK, font_scale=1.1, language="EN"
    )
    assert (tmp_path / "store.sqlite").exists()


def test_reset_keeps_preferences(tmp_path: Path) -> None:
    state = open_app_state(data_root=tmp_path)
    state.load()
    state.set_language("EN")
    state.add_profile(ProfileRecord(name="Ana"))

    assert state.reset_all_data().ok

    reopened = open_app_state(data_root=tmp_path)
    reopened.load()
    assert reopened.profiles == ()
    assert reopened.preferences.language == "EN"


def test_open_falls_back_to_memory_when_storage_is_unavailable(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _unavailable(self: SqliteKeyValueBackend) -> None:
        raise KeyValueStoreError("read-only filesystem")

    monkeypatch.setattr(SqliteKeyValueBackend, "__post_init__", _unavailable)

    state = open_app_state(data_root=tmp_path)
    state.load()

    assert state.persistent is False
    assert state.preferences == PreferenceSet.defaults()

    result = state.add_profile(ProfileRecord(name="Ana"))

    assert result.outcome is WriteOutcome.FAILED
    assert result.message is not None
    assert state.profiles == (ProfileRecord(name="Ana"),)


def test_non_persistent_state_keeps_skipped_outcomes() -> None:
    state = AppState(InMemoryKeyValueBackend(), persistent=False)
    state.load()

    assert state.delete_profile_at(3).outcome is WriteOutcome.SKIPPED
    assert state.set_language("EN").outcome is WriteOutcome.FAILED
    assert state.preferences.language == "EN"


def test_open_with_sqlite_backend_is_persistent(tmp_path: Path) -> None:
    state = open_app_state(data_root=tmp_path)
    state.load()

    assert state.persistent is True
    assert state.add_profile(ProfileRecord(name="Ana")).outcome is WriteOutcome.WRITTEN
