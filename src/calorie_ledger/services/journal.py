"""Read-side views over the log and the daily summaries."""

from dataclasses import dataclass
from typing import TypeVar

from calorie_ledger.domain.ledger import LogEntry
from calorie_ledger.domain.summary import DailySummaryRecord
from calorie_ledger.services.aggregator import date_key
from calorie_ledger.services.entries import read_entries
from calorie_ledger.services.summary import SummaryUpserter

T = TypeVar("T")


@dataclass(frozen=True)
class CalendarDay:
    """Summary figures shown on a journal calendar cell."""

    total_calories: float
    goal_limit: float
    status: str
    is_over: bool


@dataclass(frozen=True)
class DayDetail:
    """Entries and summary for a single date."""

    date: str
    entries: list[LogEntry]
    summary: DailySummaryRecord | None


@dataclass
class JournalService:
    """Service for browsing logged days."""

    upserter: SummaryUpserter

    def recent_entries(self, limit: int = 20) -> list[LogEntry]:
        """Return the latest log entries, most recent first."""
        entries = read_entries(self.upserter.store, self.upserter.layout)
        return _latest(entries, limit)

    def recent_summaries(self, limit: int = 30) -> list[DailySummaryRecord]:
        """Return the latest summaries, most recent first."""
        return _latest(self.upserter.load_records(), limit)

    def calendar(
        self, year: int, month: int | None = None
    ) -> dict[str, CalendarDay]:
        """Return calendar cells keyed by day of month, or by date key."""
        cells: dict[str, CalendarDay] = {}
        for record in self.upserter.load_records():
            record_year, record_month, record_day = (
                int(part) for part in record.date.split("-")
            )
            if month is not None:
                if record_year != year or record_month != month:
                    continue
                key = str(record_day)
            else:
                key = record.date
            cells[key] = CalendarDay(
                total_calories=record.total_calories,
                goal_limit=record.goal_limit,
                status=record.display_text,
                is_over=record.is_over,
            )
        return cells

    def day(self, key: str) -> DayDetail:
        """Return the entries and summary logged on ``key``."""
        tz = self.upserter.tz
        entries = [
            entry
            for entry in read_entries(self.upserter.store, self.upserter.layout)
            if date_key(entry.date, tz) == key
        ]
        summary = next(
            (record for record in self.upserter.load_records() if record.date == key),
            None,
        )
        return DayDetail(date=key, entries=entries, summary=summary)


def _latest(items: list[T], limit: int) -> list[T]:
    if limit <= 0:
        return []
    return list(reversed(items[-limit:]))
