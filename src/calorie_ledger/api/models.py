"""Request models for the HTTP API."""

import datetime as dt

from pydantic import BaseModel, Field

from calorie_ledger.domain.ledger import MealType


class LogEntryRequest(BaseModel):
    """Payload for appending a food log entry."""

    date: dt.date
    time: dt.time | None = None
    meal_type: MealType
    description: str = Field(min_length=1)
    calories: float = Field(ge=0)


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; dropdown labels are accepted as strings."""

    sex: str | None = None
    weight_kg: float | str | None = None
    height_cm: float | str | None = None
    age_years: int | str | None = None
    activity_level: float | str | None = None
    goal_offset: int | str | None = None


class ChangeNotification(BaseModel):
    """Host notification that a collection or some of its fields changed."""

    collection: str
    fields: list[str] = Field(default_factory=list)
