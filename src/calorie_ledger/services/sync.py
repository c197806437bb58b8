"""Change-driven recomputation of the daily summaries."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from calorie_ledger.domain.errors import LedgerError
from calorie_ledger.domain.layout import LedgerLayout
from calorie_ledger.domain.profile import BiometricProfile
from calorie_ledger.domain.signals import (
    ChangeSignal,
    EntryChanged,
    ExplicitRefresh,
    ProfileChanged,
)
from calorie_ledger.domain.summary import DailySummaryRecord, build_summary
from calorie_ledger.services.aggregator import aggregate_entries, date_key
from calorie_ledger.services.entries import read_entries
from calorie_ledger.services.metrics import compute_daily_goal, decode_profile
from calorie_ledger.services.store import TabularStore
from calorie_ledger.services.summary import SummaryUpserter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncFailure:
    """Structured description of a failed recomputation."""

    kind: str
    message: str


@dataclass(frozen=True)
class SyncReport:
    """Outcome of handling one change signal."""

    signal: str
    goal_limit: float | None
    updated_date_count: int
    today: DailySummaryRecord | None
    failure: SyncFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SyncOrchestrator:
    """Runs the goal, aggregation and upsert pipeline for change signals."""

    store: TabularStore
    layout: LedgerLayout
    tz: ZoneInfo
    upserter: SummaryUpserter
    clock: Callable[[], datetime] = field(default=_utc_now)
    goal_limit: float | None = None
    today_summary: DailySummaryRecord | None = None
    last_failure: SyncFailure | None = None

    def classify_change(
        self, collection: str, fields: Iterable[str] = ()
    ) -> ChangeSignal:
        """Map a host change notification onto a change signal."""
        if collection == self.layout.log_collection:
            return EntryChanged()
        if collection == self.layout.profile_collection:
            return ProfileChanged(fields=frozenset(fields))
        return ExplicitRefresh()

    def handle(self, signal: ChangeSignal) -> SyncReport:
        """Run the pipeline, reporting fatal errors instead of raising."""
        try:
            return self.run(signal)
        except LedgerError as exc:
            failure = SyncFailure(kind=exc.kind, message=exc.message)
            self.last_failure = failure
            logger.exception(
                "Recomputation failed",
                extra={"signal": type(signal).__name__, "kind": exc.kind},
            )
            return SyncReport(
                signal=type(signal).__name__,
                goal_limit=self.goal_limit,
                updated_date_count=0,
                today=self.today_summary,
                failure=failure,
            )

    def run(self, signal: ChangeSignal) -> SyncReport:
        """Run the pipeline for a signal; fatal errors propagate.

        Every read and computation happens before the first store write.
        """
        if isinstance(signal, EntryChanged) and self.goal_limit is not None:
            goal_limit = self.goal_limit
        else:
            goal_limit = compute_daily_goal(self.load_profile())
        entries = read_entries(self.store, self.layout)
        existing = self.upserter.load_records()
        totals = aggregate_entries(entries, self.tz)
        records = self.upserter.upsert(existing, totals, goal_limit)

        self.goal_limit = goal_limit
        self.last_failure = None
        today = self._refresh_today(records)
        logger.info(
            "Recomputed %d days for %s against goal %.0f",
            len(totals),
            type(signal).__name__,
            goal_limit,
        )
        return SyncReport(
            signal=type(signal).__name__,
            goal_limit=goal_limit,
            updated_date_count=len(totals),
            today=today,
        )

    def recompute_all(self) -> dict[str, int]:
        """Recompute every summary against a freshly computed goal."""
        report = self.run(ExplicitRefresh())
        return {"updated_date_count": report.updated_date_count}

    def get_today_summary(self) -> DailySummaryRecord:
        """Return today's record, or an unsaved zero-total placeholder.

        The projection cached by the last run is returned while its date is
        still today, so rows written by other writers show up after the next
        signal.
        """
        key = self.today_key()
        if self.today_summary is not None and self.today_summary.date == key:
            return self.today_summary
        if self.goal_limit is None:
            self.goal_limit = compute_daily_goal(self.load_profile())
        return self._refresh_today(self.upserter.load_records())

    def load_profile(self) -> BiometricProfile:
        """Read and decode the biometric profile."""
        fields = self.store.read_fields(
            self.layout.profile_collection, self.layout.profile.all()
        )
        return decode_profile(fields, self.layout.profile)

    def today_key(self) -> str:
        """Return today's date key in the ledger time zone."""
        return str(date_key(self.clock(), self.tz))

    def _refresh_today(self, records: list[DailySummaryRecord]) -> DailySummaryRecord:
        key = self.today_key()
        match = next((record for record in records if record.date == key), None)
        if match is None:
            match = build_summary(key, 0.0, self.goal_limit or 0.0, row_index=None)
        self.today_summary = match
        return match
