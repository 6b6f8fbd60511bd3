"""Normalisation of the timestamp shapes found in stored day documents."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from core.utils.clock import Clock, SystemClock


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_timestamp(value: Any, clock: Optional[Clock] = None) -> datetime:
    """Convert a stored timestamp into an aware UTC datetime.

    Accepts a datetime, a native timestamp object with ``as_datetime()`` (BSON)
    or ``to_datetime()``, a ``{"seconds", "nanoseconds"}`` mapping, or an ISO
    string. Missing or unreadable values fall back to the current time so a
    document always has something to display.
    """
    if value is None or value == "":
        return _now(clock)

    if isinstance(value, datetime):
        return _as_utc(value)

    for method in ("as_datetime", "to_datetime"):
        convert = getattr(value, method, None)
        if callable(convert):
            try:
                converted = convert()
            except (TypeError, ValueError, OverflowError):
                return _now(clock)
            if isinstance(converted, datetime):
                return _as_utc(converted)
            return _now(clock)

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
            try:
                return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
            except (OverflowError, OSError, ValueError, TypeError):
                return _now(clock)
        return _now(clock)

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            return _now(clock)

    return _now(clock)


def _now(clock: Optional[Clock]) -> datetime:
    return _as_utc((clock or SystemClock()).now())
