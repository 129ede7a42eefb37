"""Data models for the student profiles engine.

This module defines the typed in-memory representation of profile records and
application preferences, plus their persisted text encodings.

The models are standard-library-only (dataclasses) so the engine stays free of
GUI and storage dependencies.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Mapping, Self

PROFILE_FIELDS: Final[tuple[str, ...]] = ("name", "major", "year", "email", "phone")

DEFAULT_FONT_SCALE: Final[float] = 1.0
DEFAULT_LANGUAGE: Final[str] = "ID"

# Nominal slider bounds. The store never clamps to these.
FONT_SCALE_MIN: Final[float] = 0.8
FONT_SCALE_MAX: Final[float] = 1.4
FONT_SCALE_STEP: Final[float] = 0.1

_THEME_STORAGE_PREFIX = "ThemeMode."


class ThemeMode(str, Enum):
    """Supported UI theme modes."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"

    def to_storage(self) -> str:
        """
        Return the persisted text form of this mode.

        Returns
        -------
        str
            Legacy on-disk label, for example ``"ThemeMode.dark"``.
        """
        return f"{_THEME_STORAGE_PREFIX}{self.value}"

    @classmethod
    def from_storage(cls, text: str | None) -> ThemeMode:
        """
        Parse a persisted theme label.

        Parameters
        ----------
        text:
            Stored label. Both ``"ThemeMode.dark"`` and ``"dark"`` are accepted.

        Returns
        -------
        ThemeMode
            The matching member, or ``SYSTEM`` if the label is missing or
            unrecognized.
        """
        if not isinstance(text, str):
            return cls.SYSTEM
        label = text.strip()
        if label.startswith(_THEME_STORAGE_PREFIX):
            label = label[len(_THEME_STORAGE_PREFIX) :]
        try:
            return cls(label)
        except ValueError:
            return cls.SYSTEM


def _coerce_field_value(key: str, value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"Field {key!r} must be a string, got {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class ProfileRecord:
    """
    One stored student profile.

    Attributes
    ----------
    name, major, year, email, phone:
        Field values. ``None`` means the field is absent from the record.
    extras:
        Unknown fields found in persisted data, as ``(key, value)`` pairs in
        their original order, including null values. They are written back
        unchanged.

    Notes
    -----
    Records are immutable. The store inserts and deletes whole records; there
    is no update operation.
    """

    name: str | None = None
    major: str | None = None
    year: str | None = None
    email: str | None = None
    phone: str | None = None
    extras: tuple[tuple[str, str | None], ...] = ()

    def to_dict(self) -> dict[str, str | None]:
        """
        Return the record as a plain field mapping.

        Returns
        -------
        dict[str, str | None]
            Present known fields in canonical order, followed by extras.
            Only extras can map to None.
        """
        payload: dict[str, str | None] = {}
        for key in PROFILE_FIELDS:
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        for key, value in self.extras:
            payload[key] = value
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Self:
        """
        Construct a :class:`ProfileRecord` from a mapping.

        Parameters
        ----------
        payload:
            Field mapping. Unknown keys are kept as extras. Numeric values are
            converted to text. ``None`` marks a known field as absent; unknown
            fields keep their ``None`` value.

        Returns
        -------
        ProfileRecord
            The decoded record.

        Raises
        ------
        ValueError
            If a value is neither text, a number nor ``None``.
        """
        known: dict[str, str | None] = {}
        extras: list[tuple[str, str | None]] = []
        for raw_key, raw_value in payload.items():
            key = str(raw_key)
            value = _coerce_field_value(key, raw_value)
            if key in PROFILE_FIELDS:
                known[key] = value
            else:
                extras.append((key, value))
        return cls(**known, extras=tuple(extras))

    def to_json(self) -> str:
        """Encode the record as a compact JSON object."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> Self:
        """
        Decode a record from its persisted JSON text.

        Raises
        ------
        ValueError
            If the text is not JSON or does not hold a JSON object.
        """
        payload = json.loads(text)
        if not isinstance(payload, dict):
            raise ValueError("Profile payload must be a JSON object")
        return cls.from_dict(payload)


@dataclass(frozen=True, slots=True)
class PreferenceSet:
    """
    App-wide preferences.

    Attributes
    ----------
    theme_mode:
        Active theme mode.
    font_scale:
        Text scale factor. Values outside the nominal slider range are kept.
    language:
        UI language code. Treated as opaque text; ``"ID"`` and ``"EN"`` have
        label catalogs.
    """

    theme_mode: ThemeMode
    font_scale: float
    language: str

    @staticmethod
    def defaults() -> PreferenceSet:
        return PreferenceSet(
            theme_mode=ThemeMode.SYSTEM,
            font_scale=DEFAULT_FONT_SCALE,
            language=DEFAULT_LANGUAGE,
        )
