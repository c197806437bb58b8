"""Mapping between food log rows and entries."""

from calorie_ledger.domain.layout import LedgerLayout, LogFields
from calorie_ledger.domain.ledger import LogEntry, MealType
from calorie_ledger.services.store import ROW_INDEX, TabularStore


def read_entries(store: TabularStore, layout: LedgerLayout) -> list[LogEntry]:
    """Return every log entry in store order."""
    rows = store.read_all(layout.log_collection)
    return [entry_from_row(row, layout.log) for row in rows]


def entry_from_row(row: dict[str, object], fields: LogFields) -> LogEntry:
    row_index = row.get(ROW_INDEX)
    return LogEntry(
        date=row.get(fields.date),  # type: ignore[arg-type]
        time=row.get(fields.time) or None,  # type: ignore[arg-type]
        meal_type=_parse_meal_type(row.get(fields.meal_type)),
        description=str(row.get(fields.description) or ""),
        calories=row.get(fields.calories),  # type: ignore[arg-type]
        row_index=row_index if isinstance(row_index, int) else None,
    )


def entry_to_row(entry: LogEntry, fields: LogFields) -> dict[str, object]:
    meal_type = entry.meal_type
    return {
        fields.date: _to_text(entry.date),
        fields.time: _to_text(entry.time),
        fields.meal_type: meal_type.value
        if isinstance(meal_type, MealType)
        else meal_type,
        fields.description: entry.description,
        fields.calories: entry.calories,
    }


def _parse_meal_type(value: object) -> MealType | str | None:
    if not value:
        return None
    text = str(value).strip()
    for meal_type in MealType:
        if meal_type.value.lower() == text.lower():
            return meal_type
    return text


def _to_text(value: object) -> str | None:
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)
