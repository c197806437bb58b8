"""Domain models for the biometric profile."""

from dataclasses import dataclass
from enum import Enum


class Sex(Enum):
    """Biological sex used by the BMR formula."""

    MALE = "Male"
    FEMALE = "Female"


class ActivityLevel(Enum):
    """Habitual activity level and its TDEE multiplier."""

    SEDENTARY = 1.2
    LIGHT = 1.375
    MODERATE = 1.55
    ACTIVE = 1.725
    VERY_ACTIVE = 1.9

    @property
    def factor(self) -> float:
        return self.value


class GoalOffset(Enum):
    """Signed calorie adjustment applied to TDEE."""

    LOSE = -500
    MAINTAIN = 0
    GAIN = 500

    @property
    def calories(self) -> int:
        return self.value


@dataclass(frozen=True)
class BiometricProfile:
    """Physiological inputs for the daily calorie goal."""

    sex: Sex
    weight_kg: float
    height_cm: float
    age_years: int
    activity_level: ActivityLevel
    goal_offset: GoalOffset = GoalOffset.MAINTAIN
