"""
Day document key helpers.

Day documents are keyed by zero-padded day of month ("01".."31"). Older data
used either the full ISO date ("2026-01-31") or the unpadded day ("6") as the
document id, so every lookup goes through resolve_key first.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser

_DAY_NUMBER = re.compile(r"^\d{1,2}$")
# missing components default to the 1st rather than to today
_PARSE_DEFAULT = datetime(1970, 1, 1)

# Sunday-indexed, matches how day_of_week has always been stored
DAYS_OF_WEEK = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def pad_day(day: int) -> str:
    return f"{day:02d}"


def resolve_key(value) -> str:
    """Return the canonical document key for any accepted date representation.

    "1" -> "01", "31" -> "31", "2026-01-31" -> "31", "Jan 6 2026" -> "06".
    Anything unparseable is returned unchanged so the caller sees a plain
    not-found instead of an exception.
    """
    if value is None:
        return ""
    text = str(value).strip()

    if _DAY_NUMBER.match(text):
        return pad_day(int(text))

    parts = text.split("-")
    if len(parts) == 3 and parts[2].isdigit():
        return pad_day(int(parts[2]))

    try:
        parsed = date_parser.parse(text, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError, TypeError):
        return text
    return pad_day(parsed.day)


def legacy_key(key: str) -> Optional[str]:
    """Unpadded form of a canonical key ("06" -> "6"), or None if it is the same."""
    if not key.isdigit():
        return None
    unpadded = str(int(key))
    return unpadded if unpadded != key else None


def parse_iso_date(value) -> Optional[date]:
    """Parse a stored "YYYY-MM-DD" value; returns None for anything else."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def day_of_week(d: date) -> str:
    # date.weekday() is Monday=0; the table is Sunday-indexed
    return DAYS_OF_WEEK[(d.weekday() + 1) % 7]
