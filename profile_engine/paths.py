"""
Filesystem location policy for persisted state.

All on-disk state lives under a single data root. The default root is resolved
from the environment; callers (CLI, tests) may pass an explicit override.
"""

from __future__ import annotations

import os
from pathlib import Path

APP_DIR_NAME = "student-profiles"
STORE_FILENAME = "store.sqlite"


def default_data_root() -> Path:
    """
    Resolve the default data root.

    Preference order:
    1) %LOCALAPPDATA% if set
    2) %APPDATA% (Roaming)
    3) $XDG_DATA_HOME
    4) ~/.local/share

    Returns
    -------
    pathlib.Path
        Directory under which the store database is kept.
    """
    for var in ("LOCALAPPDATA", "APPDATA", "XDG_DATA_HOME"):
        value = os.environ.get(var)
        if value:
            return Path(value) / APP_DIR_NAME

    return Path.home() / ".local" / "share" / APP_DIR_NAME


def store_db_path(data_root: Path | None = None) -> Path:
    """
    Return the canonical path of the key-value store database.

    Parameters
    ----------
    data_root:
        Optional override for the data root.

    Returns
    -------
    pathlib.Path
        ``<data_root>/store.sqlite``.
    """
    root = default_data_root() if data_root is None else data_root
    return root / STORE_FILENAME
