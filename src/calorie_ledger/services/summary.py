"""Idempotent reconciliation of daily totals into the summary store."""

import logging
from dataclasses import dataclass, replace
from zoneinfo import ZoneInfo

from calorie_ledger.domain.errors import (
    CollectionNotFoundError,
    StoreNotInitializedError,
    UnaddressableRowError,
)
from calorie_ledger.domain.layout import CellRef, LedgerLayout
from calorie_ledger.domain.summary import DailySummaryRecord, GoalStatus, build_summary
from calorie_ledger.services.aggregator import date_key
from calorie_ledger.services.store import ROW_INDEX, TabularStore

logger = logging.getLogger(__name__)


@dataclass
class SummaryUpserter:
    """Keeps exactly one summary row per date key in the store."""

    store: TabularStore
    layout: LedgerLayout
    tz: ZoneInfo

    def load_records(self) -> list[DailySummaryRecord]:
        """Read existing summary records in store order."""
        collection = self.layout.summary_collection
        try:
            rows = self.store.read_all(collection)
        except CollectionNotFoundError as exc:
            raise StoreNotInitializedError(collection) from exc
        records = []
        for row in rows:
            record = self._parse_row(row)
            if record is not None:
                records.append(record)
        return records

    def upsert(
        self,
        existing: list[DailySummaryRecord] | None,
        daily_totals: dict[str, float],
        goal_limit: float,
    ) -> list[DailySummaryRecord]:
        """Insert or update one record per date key and return all records.

        Records for dates absent from ``daily_totals`` are returned unchanged.
        The full plan is built before the first store write.
        """
        collection = self.layout.summary_collection
        if existing is None:
            raise StoreNotInitializedError(collection)

        by_date: dict[str, DailySummaryRecord] = {}
        for record in existing:
            kept = by_date.setdefault(record.date, record)
            if kept is not record:
                logger.warning(
                    "Duplicate summary row %s for %s; row %s is kept up to date",
                    record.row_index,
                    record.date,
                    kept.row_index,
                )

        plan: list[tuple[DailySummaryRecord | None, DailySummaryRecord]] = []
        for key in sorted(daily_totals):
            current = by_date.get(key)
            if current is not None and current.row_index is None:
                raise UnaddressableRowError(collection, key)
            row_index = current.row_index if current else None
            plan.append(
                (current, build_summary(key, daily_totals[key], goal_limit, row_index))
            )

        written = 0
        results: dict[str, DailySummaryRecord] = {}
        try:
            for current, updated in plan:
                values = self._row_values(updated)
                if current is None:
                    row_index = self.store.append_row(collection, values)
                    updated = replace(updated, row_index=row_index)
                    self._annotate(updated)
                    written += 1
                elif values != self._row_values(current):
                    self.store.write_row(collection, updated.row_index, values)
                    self._annotate(updated)
                    written += 1
                results[updated.date] = updated
        except CollectionNotFoundError as exc:
            raise StoreNotInitializedError(collection) from exc

        logger.info(
            "Upserted %d daily summaries (%d rows written)", len(plan), written
        )
        merged: list[DailySummaryRecord] = []
        for record in existing:
            if by_date.get(record.date) is record and record.date in results:
                merged.append(results.pop(record.date))
            else:
                merged.append(record)
        merged.extend(results.values())
        return merged

    def _annotate(self, record: DailySummaryRecord) -> None:
        if record.row_index is None:
            return
        cell = CellRef(
            collection=self.layout.summary_collection,
            row_index=record.row_index,
            field=self.layout.summary.status,
        )
        self.store.annotate(cell, record.status.marker)

    def _row_values(self, record: DailySummaryRecord) -> dict[str, object]:
        fields = self.layout.summary
        return {
            fields.date: record.date,
            fields.total_calories: record.total_calories,
            fields.goal_limit: record.goal_limit,
            fields.status: record.display_text,
        }

    def _parse_row(self, row: dict[str, object]) -> DailySummaryRecord | None:
        fields = self.layout.summary
        key = date_key(row.get(fields.date), self.tz)
        if key is None:
            return None
        total = _to_float(row.get(fields.total_calories))
        goal = _to_float(row.get(fields.goal_limit))
        remaining = goal - total
        row_index = row.get(ROW_INDEX)
        return DailySummaryRecord(
            date=key,
            total_calories=total,
            goal_limit=goal,
            remaining=remaining,
            status=GoalStatus.from_remaining(remaining),
            display_text=str(row.get(fields.status) or ""),
            row_index=row_index if isinstance(row_index, int) else None,
        )


def _to_float(value: object) -> float:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0
