"""Named addressing for the tabular store."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LogFields:
    """Column names of the food log collection."""

    date: str = "date"
    time: str = "time"
    meal_type: str = "meal_type"
    description: str = "description"
    calories: str = "calories"


@dataclass(frozen=True)
class ProfileFields:
    """Field names of the biometric profile collection."""

    sex: str = "sex"
    weight_kg: str = "weight_kg"
    height_cm: str = "height_cm"
    age_years: str = "age_years"
    activity_level: str = "activity_level"
    goal_offset: str = "goal_offset"

    def all(self) -> tuple[str, ...]:
        return (
            self.sex,
            self.weight_kg,
            self.height_cm,
            self.age_years,
            self.activity_level,
            self.goal_offset,
        )


@dataclass(frozen=True)
class SummaryFields:
    """Column names of the daily summary collection."""

    date: str = "date"
    total_calories: str = "total_calories"
    goal_limit: str = "goal_limit"
    status: str = "status"


@dataclass(frozen=True)
class LedgerLayout:
    """Collections and field names shared by every engine component."""

    log_collection: str = "food_log"
    profile_collection: str = "profile"
    summary_collection: str = "daily_summary"
    log: LogFields = LogFields()
    profile: ProfileFields = ProfileFields()
    summary: SummaryFields = SummaryFields()


@dataclass(frozen=True)
class CellRef:
    """A single field of a single row in a collection."""

    collection: str
    row_index: int
    field: str
