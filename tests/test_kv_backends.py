from __future__ import annotations

import math
import sqlite3
from pathlib import Path
from typing import Callable

import pytest

from profile_engine.kv_store.api import KeyValueBackend
from profile_engine.kv_store.errors import InvalidKeyError
from profile_engine.kv_store.memory_backend import InMemoryKeyValueBackend
from profile_engine.kv_store.sqlite_backend import SqliteKeyValueBackend

BackendFactory = Callable[[Path], KeyValueBackend]


def _sqlite(tmp_path: Path) -> KeyValueBackend:
    return SqliteKeyValueBackend(db_path=tmp_path / "nested" / "store.sqlite")


def _memory(_tmp_path: Path) -> KeyValueBackend:
    return InMemoryKeyValueBackend()


@pytest.fixture(params=[_sqlite, _memory], ids=["sqlite", "memory"])
def backend(request: pytest.FixtureRequest, tmp_path: Path) -> KeyValueBackend:
    factory: BackendFactory = request.param
    return factory(tmp_path)


def test_missing_keys_read_as_none(backend: KeyValueBackend) -> None:
    assert backend.get_string("absent") is None
    assert backend.get_double("absent") is None
    assert backend.get_string_list("absent") is None


def test_typed_values_round_trip(backend: KeyValueBackend) -> None:
    assert backend.set_string("language", "EN")
    assert backend.set_double("font_scale", 1.2)
    assert backend.set_string_list("profiles", ['{"name":"Ana"}', "", "ü"])

    assert backend.get_string("language") == "EN"
    assert backend.get_double("font_scale") == 1.2
    assert backend.get_string_list("profiles") == ['{"name":"Ana"}', "", "ü"]


def test_empty_list_is_distinct_from_absent(backend: KeyValueBackend) -> None:
    assert backend.set_string_list("profiles", [])
    assert backend.get_string_list("profiles") == []


def test_getter_of_other_kind_returns_none(backend: KeyValueBackend) -> None:
    backend.set_double("font_scale", 0.9)
    assert backend.get_string("font_scale") is None
    assert backend.get_string_list("font_scale") is None


def test_set_overwrites_previous_kind(backend: KeyValueBackend) -> None:
    backend.set_string("k", "text")
    backend.set_double("k", 2.0)
    assert backend.get_string("k") is None
    assert backend.get_double("k") == 2.0


def test_remove_is_idempotent(backend: KeyValueBackend) -> None:
    backend.set_string("theme_mode", "ThemeMode.dark")
    assert backend.remove("theme_mode")
    assert backend.get_string("theme_mode") is None
    assert backend.remove("theme_mode")


def test_non_finite_doubles_round_trip(backend: KeyValueBackend) -> None:
    backend.set_double("a", float("inf"))
    backend.set_double("b", float("nan"))
    assert backend.get_double("a") == float("inf")
    value = backend.get_double("b")
    assert value is not None and math.isnan(value)


def test_stored_list_is_not_aliased(backend: KeyValueBackend) -> None:
    items = ["a"]
    backend.set_string_list("profiles", items)
    items.append("b")
    loaded = backend.get_string_list("profiles")
    assert loaded == ["a"]
    assert loaded is not None
    loaded.append("c")
    assert backend.get_string_list("profiles") == ["a"]


@pytest.mark.parametrize("key", ["", None])
def test_invalid_keys_are_rejected(backend: KeyValueBackend, key: object) -> None:
    with pytest.raises(InvalidKeyError):
        backend.get_string(key)  # type: ignore[arg-type]


def test_sqlite_values_survive_reopen(tmp_path: Path) -> None:
    db_path = tmp_path / "store.sqlite"
    first = SqliteKeyValueBackend(db_path=db_path)
    first.set_string_list("profiles", ["x", "y"])
    first.set_double("font_scale", 1.4)

    second = SqliteKeyValueBackend(db_path=db_path)
    assert second.get_string_list("profiles") == ["x", "y"]
    assert second.get_double("font_scale") == 1.4
    assert second.keys() == ["font_scale", "profiles"]


def test_memory_fail_writes_reports_failure() -> None:
    backend = InMemoryKeyValueBackend(fail_writes={"profiles"})
    assert backend.set_string_list("profiles", ["x"]) is False
    assert backend.remove("profiles") is False
    assert backend.get_string_list("profiles") is None
    assert backend.set_string("language", "EN") is True


def test_sqlite_malformed_list_reads_as_none(tmp_path: Path) -> None:
    db_path = tmp_path / "store.sqlite"
    backend = SqliteKeyValueBackend(db_path=db_path)
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            "INSERT INTO kv(key, kind, value) VALUES('profiles', 'string_list', '{not json')"
        )
        conn.execute("INSERT INTO kv(key, kind, value) VALUES('font_scale', 'double', 'big')")
    conn.close()

    assert backend.get_string_list("profiles") is None
    assert backend.get_double("font_scale") is None


def test_sqlite_errors_are_reported_not_raised(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    backend = SqliteKeyValueBackend(db_path=tmp_path / "store.sqlite")

    def _broken(self: SqliteKeyValueBackend) -> sqlite3.Connection:
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(SqliteKeyValueBackend, "_connect", _broken)

    assert backend.set_string("language", "EN") is False
    assert backend.remove("language") is False
    assert backend.get_string("language") is None
    assert backend.keys() == []


def test_sqlite_unencodable_text_is_rejected_not_raised(tmp_path: Path) -> None:
    backend = SqliteKeyValueBackend(db_path=tmp_path / "store.sqlite")

    assert backend.set_string("language", "\udcff") is False
    assert backend.set_string_list("profiles", ["\udcff"]) is False

    assert backend.get_string("language") is None
    assert backend.set_string("language", "EN") is True
    assert backend.get_string("language") == "EN"


def test_sqlite_deeply_nested_list_reads_as_none(tmp_path: Path) -> None:
    db_path = tmp_path / "store.sqlite"
    backend = SqliteKeyValueBackend(db_path=db_path)
    nested = "[" * 200000 + "]" * 200000
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            "INSERT INTO kv(key, kind, value) VALUES('profiles', 'string_list', ?)", (nested,)
        )
    conn.close()

    assert backend.get_string_list("profiles") is None
