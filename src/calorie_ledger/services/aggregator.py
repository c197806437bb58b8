"""Per-day aggregation of food log entries."""

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from calorie_ledger.domain.ledger import LogEntry

logger = logging.getLogger(__name__)


def date_key(value: object, tz: ZoneInfo) -> str | None:
    """Return the ``YYYY-MM-DD`` key for a date-like value.

    Aware datetimes are converted into ``tz``; naive datetimes and plain dates
    are taken as already local to ``tz``.
    """
    if isinstance(value, str):
        value = _parse_date_text(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return None


def entry_calories(entry: LogEntry) -> float | None:
    """Return an entry's calories, or None when they are not usable."""
    raw = entry.calories
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    elif isinstance(raw, int | float):
        value = float(raw)
    else:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def aggregate_entries(entries: Iterable[LogEntry], tz: ZoneInfo) -> dict[str, float]:
    """Sum calories of valid entries per date key.

    Entries with no usable date or calories are skipped.
    """
    totals: dict[str, float] = {}
    skipped = 0
    for entry in entries:
        key = date_key(entry.date, tz)
        calories = entry_calories(entry)
        if key is None or calories is None:
            skipped += 1
            continue
        totals[key] = totals.get(key, 0.0) + calories
    if skipped:
        logger.debug("Skipped %d invalid log entries", skipped)
    return totals


def _parse_date_text(text: str) -> date | datetime | None:
    cleaned = text.strip()
    if not cleaned:
        return None
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        return None
