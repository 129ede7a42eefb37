"""Profile form input handling.

Input validation happens here, before a record reaches the store. The store
itself accepts any record.
"""

from __future__ import annotations

from .data_models import ProfileRecord
from .errors import InvalidProfileError


def build_profile_record(
    name: str | None,
    major: str | None = None,
    year: str | None = None,
    email: str | None = None,
    phone: str | None = None,
) -> ProfileRecord:
    """Build a record from raw form input.

    Every field is stripped of surrounding whitespace. All five fields are
    always present in the result; missing inputs become empty strings.

    Parameters
    ----------
    name:
        Full name. Required.
    major, year, email, phone:
        Optional free-text fields.

    Returns
    -------
    ProfileRecord
        The record to insert.

    Raises
    ------
    InvalidProfileError
        If name is missing or blank.
    """
    clean_name = (name or "").strip()
    if not clean_name:
        raise InvalidProfileError("Name is required.")

    return ProfileRecord(
        name=clean_name,
        major=(major or "").strip(),
        year=(year or "").strip(),
        email=(email or "").strip(),
        phone=(phone or "").strip(),
    )
