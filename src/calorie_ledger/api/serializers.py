"""JSON shapes returned by the HTTP API."""

from calorie_ledger.domain.ledger import LogEntry, MealType
from calorie_ledger.domain.profile import BiometricProfile
from calorie_ledger.domain.summary import DailySummaryRecord
from calorie_ledger.services.journal import CalendarDay
from calorie_ledger.services.sync import SyncFailure, SyncReport


def serialize_summary(record: DailySummaryRecord) -> dict[str, object]:
    return {
        "date": record.date,
        "total_calories": record.total_calories,
        "goal_limit": record.goal_limit,
        "remaining": record.remaining,
        "status": record.status.value,
        "display_text": record.display_text,
        "marker": record.status.marker,
        "persisted": record.row_index is not None,
    }


def serialize_entry(entry: LogEntry) -> dict[str, object]:
    meal_type = entry.meal_type
    return {
        "date": _text(entry.date),
        "time": _text(entry.time),
        "meal_type": meal_type.value if isinstance(meal_type, MealType) else meal_type,
        "description": entry.description,
        "calories": entry.calories,
    }


def serialize_failure(failure: SyncFailure | None) -> dict[str, str] | None:
    if failure is None:
        return None
    return {"kind": failure.kind, "message": failure.message}


def serialize_report(report: SyncReport) -> dict[str, object]:
    return {
        "ok": report.ok,
        "signal": report.signal,
        "goal_limit": report.goal_limit,
        "updated_date_count": report.updated_date_count,
        "today": serialize_summary(report.today) if report.today else None,
        "failure": serialize_failure(report.failure),
    }


def serialize_profile(profile: BiometricProfile, goal: float) -> dict[str, object]:
    return {
        "sex": profile.sex.value,
        "weight_kg": profile.weight_kg,
        "height_cm": profile.height_cm,
        "age_years": profile.age_years,
        "activity_level": profile.activity_level.factor,
        "goal_offset": profile.goal_offset.calories,
        "daily_goal": goal,
    }


def serialize_calendar_day(day: CalendarDay) -> dict[str, object]:
    return {
        "total_calories": day.total_calories,
        "max_calories": day.goal_limit,
        "status": day.status,
        "is_over": day.is_over,
    }


def _text(value: object) -> str | None:
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)
