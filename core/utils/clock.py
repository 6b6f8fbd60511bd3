"""Clock sources for "now" and "today" in the household's timezone."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...

    def today(self) -> date: ...


class SystemClock:
    """Wall clock, with "today" evaluated in the household timezone."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz or timezone.utc

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return datetime.now(self.tz).date()


class FixedClock:
    """Clock pinned to one instant. Used by scripts with --as-of and by tests."""

    def __init__(self, instant: datetime, tz: Optional[tzinfo] = None):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant
        self.tz = tz or timezone.utc

    def now(self) -> datetime:
        return self.instant

    def today(self) -> date:
        return self.instant.astimezone(self.tz).date()

    def advance(self, **kwargs) -> None:
        self.instant = self.instant + timedelta(**kwargs)
