"""
Preference store.

Owns the three app-wide settings and persists each one under its own key.

Caller contract
---------------
The store is single-actor. Setters write synchronously and return only after
the backend settled; callers must not dispatch another mutation before the
previous call returned.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Final

from .data_models import DEFAULT_FONT_SCALE, DEFAULT_LANGUAGE, PreferenceSet, ThemeMode
from .kv_store.api import KeyValueBackend
from .observers import Listeners
from .write_results import WriteResult, failed, written

logger = logging.getLogger(__name__)

THEME_MODE_KEY: Final[str] = "theme_mode"
FONT_SCALE_KEY: Final[str] = "font_scale"
LANGUAGE_KEY: Final[str] = "language"


class PreferenceStore:
    """
    In-memory preferences synchronized to a key-value backend.

    Parameters
    ----------
    backend:
        Persistence backend. Each preference is written independently.

    Attributes
    ----------
    changed:
        Listeners receiving the full ``PreferenceSet`` after each setter call.
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend
        self._preferences = PreferenceSet.defaults()
        self.changed: Listeners[PreferenceSet] = Listeners()

    @property
    def preferences(self) -> PreferenceSet:
        return self._preferences

    def load(self) -> PreferenceSet:
        """
        Read all preferences from the backend.

        Returns
        -------
        PreferenceSet
            Loaded preferences. Any key that is absent or unparsable falls back
            to its default without affecting the other keys.
        """
        theme_mode = ThemeMode.from_storage(self._backend.get_string(THEME_MODE_KEY))

        font_scale = self._backend.get_double(FONT_SCALE_KEY)
        if font_scale is None:
            font_scale = DEFAULT_FONT_SCALE

        language = self._backend.get_string(LANGUAGE_KEY)
        if language is None:
            language = DEFAULT_LANGUAGE

        self._preferences = PreferenceSet(
            theme_mode=theme_mode,
            font_scale=font_scale,
            language=language,
        )
        logger.debug("Loaded preferences: %s", self._preferences)
        return self._preferences

    def set_theme_mode(self, mode: ThemeMode) -> WriteResult:
        """Set and persist the theme mode."""
        mode = ThemeMode(mode)
        self._preferences = replace(self._preferences, theme_mode=mode)
        ok = self._backend.set_string(THEME_MODE_KEY, mode.to_storage())
        return self._finish(THEME_MODE_KEY, ok)

    def set_font_scale(self, scale: float) -> WriteResult:
        """
        Set and persist the font scale.

        Values outside the nominal slider range are stored as given.
        """
        scale = float(scale)
        self._preferences = replace(self._preferences, font_scale=scale)
        ok = self._backend.set_double(FONT_SCALE_KEY, scale)
        return self._finish(FONT_SCALE_KEY, ok)

    def set_language(self, code: str) -> WriteResult:
        """Set and persist the UI language code."""
        code = str(code)
        self._preferences = replace(self._preferences, language=code)
        ok = self._backend.set_string(LANGUAGE_KEY, code)
        return self._finish(LANGUAGE_KEY, ok)

    def _finish(self, key: str, ok: bool) -> WriteResult:
        if ok:
            result = written(key)
        else:
            logger.warning("Preference %r changed in memory but was not persisted", key)
            result = failed(key, f"Backend rejected write of {key!r}")
        self.changed.emit(self._preferences)
        return result
