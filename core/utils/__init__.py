"""Key, timestamp and clock helpers shared by repositories and services."""

from core.utils.clock import Clock, FixedClock, SystemClock
from core.utils.day_keys import (
    DAYS_OF_WEEK,
    day_of_week,
    legacy_key,
    pad_day,
    parse_iso_date,
    resolve_key,
)
from core.utils.timestamps import normalize_timestamp

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "DAYS_OF_WEEK",
    "day_of_week",
    "legacy_key",
    "pad_day",
    "parse_iso_date",
    "resolve_key",
    "normalize_timestamp",
]
