"""Localized text used to present profiles and preferences.

Two catalogs exist: Indonesian (``"ID"``) and English (``"EN"``). Any other
language code falls back to English.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .data_models import ProfileRecord, ThemeMode

PREVIEW_LIMIT = 3


@dataclass(frozen=True, slots=True)
class Labels:
    """Text catalog for one UI language."""

    app_title: str
    name: str
    major: str
    year: str
    email: str
    phone: str
    profile_saved: str
    last_output: str
    saved_preview: str
    no_profiles: str
    no_profile_at: str  # format with {index}
    all_data_cleared: str
    theme: str
    font_size: str  # format with {percent}
    theme_light: str
    theme_dark: str
    theme_system: str
    language: str
    write_failed: str

    def theme_name(self, mode: ThemeMode) -> str:
        return {
            ThemeMode.LIGHT: self.theme_light,
            ThemeMode.DARK: self.theme_dark,
            ThemeMode.SYSTEM: self.theme_system,
        }[mode]


INDONESIAN = Labels(
    app_title="Profil Mahasiswa",
    name="Nama",
    major="Jurusan",
    year="Angkatan",
    email="Email",
    phone="Telepon",
    profile_saved="Profil disimpan",
    last_output="Hasil Terakhir",
    saved_preview="Data Tersimpan (Preview)",
    no_profiles="Belum ada data tersimpan.",
    no_profile_at="Tidak ada data pada posisi {index}.",
    all_data_cleared="Semua data telah dihapus.",
    theme="Tema",
    font_size="Ukuran Font: {percent}%",
    theme_light="Terang",
    theme_dark="Gelap",
    theme_system="Ikuti Sistem",
    language="Bahasa",
    write_failed="Gagal menyimpan ke penyimpanan lokal.",
)

ENGLISH = Labels(
    app_title="Student Profiles",
    name="Name",
    major="Major",
    year="Year",
    email="Email",
    phone="Phone",
    profile_saved="Profile saved",
    last_output="Last Output",
    saved_preview="Saved Data (Preview)",
    no_profiles="No saved profiles yet.",
    no_profile_at="No profile at position {index}.",
    all_data_cleared="All data has been deleted.",
    theme="Theme",
    font_size="Font size: {percent}%",
    theme_light="Light",
    theme_dark="Dark",
    theme_system="Follow system",
    language="Language",
    write_failed="Could not write to local storage.",
)

LANGUAGE_NAMES = {"ID": "Indonesia", "EN": "English"}


def labels_for(language: str) -> Labels:
    return INDONESIAN if language == "ID" else ENGLISH


def language_name(language: str) -> str:
    return LANGUAGE_NAMES.get(language, language)


def summary_text(record: ProfileRecord, language: str) -> str:
    """Render the multi-line summary shown after a profile is saved."""
    t = labels_for(language)
    return "\n".join(
        [
            f"{t.name}: {record.name or ''}",
            f"{t.major}: {record.major or ''}",
            f"{t.year}: {record.year or ''}",
            f"{t.email}: {record.email or ''}",
            f"{t.phone}: {record.phone or ''}",
        ]
    )


def history_lines(record: ProfileRecord) -> tuple[str, str, str]:
    """
    Render one history entry.

    Returns
    -------
    tuple[str, str, str]
        (name, "major • year", "email • phone"). Missing major or year show
        as ``-``.
    """
    return (
        record.name or "",
        f"{record.major or '-'} • {record.year or '-'}",
        f"{record.email or ''} • {record.phone or ''}",
    )


def preview(records: Sequence[ProfileRecord]) -> list[tuple[str, str]]:
    """Return (name, "major • year") for the first few records."""
    return [
        (r.name or "", f"{r.major or ''} • {r.year or ''}") for r in records[:PREVIEW_LIMIT]
    ]


def avatar_letter(record: ProfileRecord) -> str:
    name = record.name or ""
    return name[0].upper() if name else "U"


def font_scale_percent(scale: float) -> str:
    """Return the font scale as a whole percentage, e.g. 1.2 -> "120"."""
    if not math.isfinite(scale):
        return str(scale)
    return str(round(scale * 100))
