"""Tests for per-day aggregation."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from calorie_ledger.domain.ledger import LogEntry, MealType
from calorie_ledger.services.aggregator import aggregate_entries, date_key

UTC_ZONE = ZoneInfo("UTC")


def _entry(day: object, calories: object) -> LogEntry:
    return LogEntry(
        date=day,
        time=None,
        meal_type=MealType.LUNCH,
        description="meal",
        calories=calories,
    )


def test_sums_entries_per_day() -> None:
    entries = [
        _entry("2024-01-15", 350),
        _entry("2024-01-15", "450"),
        _entry(date(2024, 1, 15), 600),
        _entry(datetime(2024, 1, 15, 21, 30), 200.0),
        _entry("2024-01-16", 2300),
    ]

    totals = aggregate_entries(entries, UTC_ZONE)

    assert totals == {"2024-01-15": 1600.0, "2024-01-16": 2300.0}


def test_invalid_entries_are_skipped() -> None:
    entries = [
        _entry("2024-01-15", 500),
        _entry("2024-01-15", "abc"),
        _entry(None, 900),
        _entry("not a date", 100),
        _entry("2024-01-15", None),
        _entry("2024-01-15", -20),
        _entry("2024-01-16", 300),
    ]

    totals = aggregate_entries(entries, UTC_ZONE)

    assert totals == {"2024-01-15": 500.0, "2024-01-16": 300.0}


def test_total_is_conserved_and_order_independent() -> None:
    entries = [_entry(f"2024-02-{day:02d}", day * 10) for day in range(1, 11)] * 3

    forward = aggregate_entries(entries, UTC_ZONE)
    backward = aggregate_entries(list(reversed(entries)), UTC_ZONE)

    assert forward == backward
    assert sum(forward.values()) == sum(day * 10 for day in range(1, 11)) * 3
    assert len(forward) == 10


def test_empty_log_yields_no_totals() -> None:
    assert aggregate_entries([], UTC_ZONE) == {}


def test_date_key_converts_aware_datetimes_into_ledger_zone() -> None:
    moment = datetime(2024, 1, 15, 23, 30, tzinfo=UTC)

    assert date_key(moment, UTC_ZONE) == "2024-01-15"
    assert date_key(moment, ZoneInfo("Asia/Tokyo")) == "2024-01-16"
    assert date_key(moment.isoformat(), ZoneInfo("America/New_York")) == "2024-01-15"


def test_date_key_ignores_time_of_day_for_naive_values() -> None:
    tz = ZoneInfo("Europe/Berlin")

    assert date_key(datetime(2024, 3, 1, 0, 5), tz) == "2024-03-01"
    assert date_key(datetime(2024, 3, 1, 23, 55), tz) == "2024-03-01"
    assert date_key(" 2024-03-01 ", tz) == "2024-03-01"
    assert date_key(20240301, tz) is None
