"""
Tests for key resolution, timestamp normalisation and role rules.

These are pure helpers; no store is involved.
"""

from datetime import date, datetime, timezone

import pytest
from bson.timestamp import Timestamp

from core.utils.clock import FixedClock
from core.utils.day_keys import day_of_week, legacy_key, parse_iso_date, resolve_key
from core.utils.timestamps import normalize_timestamp
from domain.enums import UserRole
from services.permissions import can_edit_meal, can_manage_users, is_past_date
from test_fixtures import NOW


# =============================================================================
# KEY RESOLUTION
# =============================================================================


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2026-01-31", "31"),
        ("31", "31"),
        ("1", "01"),
        ("01", "01"),
        ("2026-02-06", "06"),
        ("6", "06"),
        (" 7 ", "07"),
    ],
)
def test_resolve_key_converges_on_padded_day(value, expected):
    assert resolve_key(value) == expected


def test_resolve_key_parses_other_date_formats():
    assert resolve_key("Feb 6, 2026") == "06"
    assert resolve_key("2026/03/09") == "09"
    # no day given: the 1st, not today's day
    assert resolve_key("March 2026") == "01"


@pytest.mark.parametrize("value", ["breakfast", "", "2026-01-xx", "tbd"])
def test_resolve_key_returns_unparseable_input_unchanged(value):
    assert resolve_key(value) == value


def test_resolve_key_never_raises_on_none():
    assert resolve_key(None) == ""


def test_legacy_key():
    assert legacy_key("06") == "6"
    assert legacy_key("31") is None
    assert legacy_key("2026-01-31") is None


def test_day_of_week_is_sunday_indexed_names():
    assert day_of_week(date(2026, 2, 15)) == "Sunday"
    assert day_of_week(date(2026, 2, 16)) == "Monday"
    assert day_of_week(date(2026, 2, 28)) == "Saturday"


def test_parse_iso_date():
    assert parse_iso_date("2025-01-31") == date(2025, 1, 31)
    assert parse_iso_date("2025-01-31T00:00:00") == date(2025, 1, 31)
    assert parse_iso_date("31/01/2025") is None
    assert parse_iso_date(None) is None


# =============================================================================
# TIMESTAMPS
# =============================================================================


def test_normalize_timestamp_accepts_native_bson_timestamp():
    ts = Timestamp(datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc), 1)
    assert normalize_timestamp(ts) == datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


def test_normalize_timestamp_accepts_seconds_mapping():
    value = {"seconds": 1767225600, "nanoseconds": 500_000_000}
    result = normalize_timestamp(value)
    assert result == datetime(2026, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)


def test_normalize_timestamp_accepts_iso_strings():
    assert normalize_timestamp("2026-01-05T12:00:00Z") == datetime(
        2026, 1, 5, 12, 0, tzinfo=timezone.utc
    )
    assert normalize_timestamp("2026-01-05T14:00:00+02:00") == datetime(
        2026, 1, 5, 12, 0, tzinfo=timezone.utc
    )


def test_normalize_timestamp_treats_naive_datetime_as_utc():
    result = normalize_timestamp(datetime(2026, 1, 5, 12, 0))
    assert result.tzinfo is not None
    assert result == datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, "", "yesterday-ish", {"foo": 1}, 42, object()])
def test_normalize_timestamp_falls_back_to_now(value):
    assert normalize_timestamp(value, FixedClock(NOW)) == NOW


# =============================================================================
# PERMISSIONS
# =============================================================================


def test_cook_can_never_edit():
    today = date(2026, 2, 15)
    assert can_edit_meal(UserRole.COOK, "2026-02-20", today) is False


def test_owner_and_member_edit_today_and_future_only():
    today = date(2026, 2, 15)
    for role in (UserRole.OWNER, UserRole.MEMBER):
        assert can_edit_meal(role, "2026-02-15", today) is True
        assert can_edit_meal(role, "2026-02-16", today) is True
        assert can_edit_meal(role, "2026-02-14", today) is False
    assert is_past_date(date(2026, 2, 14), today) is True


def test_only_owner_manages_household():
    assert can_manage_users(UserRole.OWNER) is True
    assert can_manage_users(UserRole.MEMBER) is False
    assert can_manage_users(UserRole.COOK) is False
