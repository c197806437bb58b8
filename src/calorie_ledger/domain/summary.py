"""Domain models for daily summaries."""

from dataclasses import dataclass
from enum import Enum


class GoalStatus(Enum):
    """Goal adherence for a single day."""

    UNDER = "Under"
    OVER = "Over"

    @property
    def marker(self) -> str:
        """Presentation hint applied to the status cell."""
        return "green" if self is GoalStatus.UNDER else "red"

    @classmethod
    def from_remaining(cls, remaining: float) -> "GoalStatus":
        return cls.UNDER if remaining >= 0 else cls.OVER


@dataclass(frozen=True)
class DailySummaryRecord:
    """Persisted per-day total annotated against the daily goal."""

    date: str
    total_calories: float
    goal_limit: float
    remaining: float
    status: GoalStatus
    display_text: str
    row_index: int | None = None

    @property
    def is_over(self) -> bool:
        return self.status is GoalStatus.OVER


def build_summary(
    date_key: str, total_calories: float, goal_limit: float, row_index: int | None
) -> DailySummaryRecord:
    """Compute remaining, status and display text for a day."""
    remaining = goal_limit - total_calories
    status = GoalStatus.from_remaining(remaining)
    return DailySummaryRecord(
        date=date_key,
        total_calories=total_calories,
        goal_limit=goal_limit,
        remaining=remaining,
        status=status,
        display_text=f"{status.value} Goal ({format_signed(remaining)})",
        row_index=row_index,
    )


def format_signed(value: float) -> str:
    """Format a calorie delta with an explicit sign."""
    if float(value).is_integer():
        return f"{int(value):+d}"
    return f"{value:+.1f}"
