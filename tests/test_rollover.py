"""
Tests for the month rollover that moves every day document onto the current month
"""

import copy
from datetime import date, datetime, timezone

import pytest

from services import RolloverService
from services.rollover_service import source_day, target_date
from test_fixtures import NOW, clock, make_day, make_meal, repo, store


@pytest.fixture
def rollover(repo):
    return RolloverService(repo)


@pytest.mark.parametrize(
    "year, month, day, expected",
    [
        (2026, 2, 31, date(2026, 2, 28)),
        (2024, 2, 31, date(2024, 2, 29)),
        (2026, 4, 31, date(2026, 4, 30)),
        (2026, 3, 31, date(2026, 3, 31)),
        (2026, 2, 1, date(2026, 2, 1)),
    ],
)
def test_target_date_clamps_to_month_length(year, month, day, expected):
    assert target_date(year, month, day) == expected


def test_source_day_prefers_stored_date_then_key():
    assert source_day("03", {"date": "2025-11-09"}) == 9
    assert source_day("7", {}) == 7
    assert source_day("2025-12-21", {"date": "garbage"}) == 21
    assert source_day("tbd", {"date": "tbd"}) is None
    assert source_day("45", {}) is None


def test_month_end_document_is_clamped_and_rekeyed_in_one_batch(store, rollover):
    store.docs["2025-01-31"] = make_day("2025-01-31")

    result = rollover.migrate_to_current_month()

    assert result.success is True
    assert result.updated_count == 1
    assert list(store.docs) == ["28"]
    assert store.docs["28"]["date"] == "2026-02-28"
    assert store.docs["28"]["day_of_week"] == "Saturday"
    assert store.docs["28"]["updated_at"] == NOW

    assert len(store.committed) == 1
    ops = [(op, key) for op, key, _ in store.committed[0]]
    assert ops == [("delete", "2025-01-31"), ("set", "28")]


def test_rollover_twice_is_a_no_op_the_second_time(store, rollover):
    store.docs["2025-01-31"] = make_day("2025-01-31")
    store.docs["6"] = make_day("2026-01-06")
    store.docs["15"] = make_day("2026-01-15")

    assert rollover.migrate_to_current_month().success is True
    after_first = copy.deepcopy(store.docs)

    second = rollover.migrate_to_current_month()

    assert second.success is True
    assert second.updated_count == 3
    assert store.docs == after_first
    assert all(op == "update" for op, _, _ in store.committed[-1])


def test_legacy_unpadded_key_becomes_padded(store, rollover):
    store.docs["6"] = make_day("2026-01-06")

    rollover.migrate_to_current_month()

    assert "6" not in store.docs
    assert store.docs["06"]["date"] == "2026-02-06"
    assert store.docs["06"]["day_of_week"] == "Friday"


def test_in_place_document_keeps_key_and_is_updated(store, rollover):
    store.docs["15"] = make_day("2026-01-15", day_of_week="Thursday")

    rollover.migrate_to_current_month()

    assert list(store.docs) == ["15"]
    assert store.docs["15"]["date"] == "2026-02-15"
    assert store.docs["15"]["day_of_week"] == "Sunday"
    assert [op for op, _, _ in store.committed[0]] == ["update"]


def test_exact_day_wins_over_clamped_days(store, rollover):
    store.docs["28"] = make_day("2026-01-28", dinner=make_meal("Exact"))
    store.docs["30"] = make_day("2026-01-30", dinner=make_meal("From 30"))
    store.docs["31"] = make_day("2026-01-31", dinner=make_meal("From 31"))

    result = rollover.migrate_to_current_month()

    assert result.success is True
    assert result.collisions == ["28"]
    assert list(store.docs) == ["28"]
    assert store.docs["28"]["dinner"]["item_name"] == "Exact"


def test_collision_between_exact_days_keeps_last_in_key_order(store, rollover):
    store.docs["07"] = make_day("2026-01-07", dinner=make_meal("Padded"))
    store.docs["2025-12-07"] = make_day("2025-12-07", dinner=make_meal("Full date"))

    result = rollover.migrate_to_current_month()

    assert result.collisions == ["07"]
    assert list(store.docs) == ["07"]
    assert store.docs["07"]["dinner"]["item_name"] == "Full date"


def test_documents_without_a_day_are_skipped_and_left_alone(store, rollover):
    store.docs["tbd"] = {"date": "tbd", "notes": "ask grandma"}
    store.docs["10"] = make_day("2026-01-10")

    result = rollover.migrate_to_current_month()

    assert result.success is True
    assert result.updated_count == 1
    assert result.skipped == ["tbd"]
    assert store.docs["tbd"] == {"date": "tbd", "notes": "ask grandma"}
    assert store.docs["10"]["date"] == "2026-02-10"


def test_rewrite_keeps_extra_fields_and_created_at(store, rollover):
    created = datetime(2025, 12, 1, 8, 30, tzinfo=timezone.utc)
    store.docs["12"] = make_day(
        "2026-01-12",
        created_at=created,
        attendance={"u1": {"breakfast": False, "lunch": True, "dinner": True}},
        responsibility={"dinnerId": "u2"},
        shopping_note="buy lemons",
    )
    store.docs["13"] = make_day("2026-01-13")
    del store.docs["13"]["created_at"]

    rollover.migrate_to_current_month()

    assert store.docs["12"]["created_at"] == created
    assert store.docs["12"]["shopping_note"] == "buy lemons"
    assert store.docs["12"]["attendance"]["u1"]["breakfast"] is False
    assert store.docs["12"]["responsibility"] == {"dinnerId": "u2"}
    assert store.docs["13"]["created_at"] == NOW


def test_empty_collection_is_reported(store, rollover):
    result = rollover.migrate_to_current_month()

    assert result.success is False
    assert result.updated_count == 0
    assert result.error == "No meals found in database"
    assert "batch" not in store.calls


def test_commit_failure_persists_nothing_but_reports_attempted_count(store, rollover):
    store.docs["2025-01-31"] = make_day("2025-01-31")
    store.docs["6"] = make_day("2026-01-06")
    before = copy.deepcopy(store.docs)
    store.fail_commits = True

    result = rollover.migrate_to_current_month()

    assert result.success is False
    assert result.updated_count == 2
    assert result.error
    assert store.docs == before


def test_read_failure_is_reported(store, rollover):
    store.docs["10"] = make_day("2026-01-10")
    store.fail_reads = True

    result = rollover.migrate_to_current_month()

    assert result.success is False
    assert "scan" in result.error


def test_rollover_follows_the_clock(store, repo, clock):
    store.docs["28"] = make_day("2026-02-28")
    clock.advance(days=30)

    RolloverService(repo).migrate_to_current_month()

    assert store.docs["28"]["date"] == "2026-03-28"
