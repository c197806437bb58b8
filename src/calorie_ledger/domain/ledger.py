"""Domain models for food log entries."""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum


class MealType(Enum):
    """Meal categories offered when logging food."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    DRINK = "Drink"


@dataclass(frozen=True)
class LogEntry:
    """A food log row as read from the store.

    ``date`` and ``calories`` keep whatever the store held so that the
    aggregator can decide validity per entry instead of failing the batch.
    """

    date: date | datetime | str | None
    time: time | str | None
    meal_type: MealType | str | None
    description: str
    calories: float | int | str | None
    row_index: int | None = None
