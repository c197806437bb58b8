"""Daily calorie goal calculation."""

import math
import re

from calorie_ledger.domain.errors import InvalidProfileError
from calorie_ledger.domain.layout import ProfileFields
from calorie_ledger.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    GoalOffset,
    Sex,
)

MALE_CONSTANT = 5
FEMALE_CONSTANT = -161

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


def basal_metabolic_rate(profile: BiometricProfile) -> float:
    """Return BMR using the Mifflin-St Jeor equation."""
    _validate(profile)
    constant = MALE_CONSTANT if profile.sex is Sex.MALE else FEMALE_CONSTANT
    return (
        10 * profile.weight_kg
        + 6.25 * profile.height_cm
        - 5 * profile.age_years
        + constant
    )


def total_daily_energy_expenditure(profile: BiometricProfile) -> float:
    """Return BMR scaled by the activity factor."""
    return basal_metabolic_rate(profile) * profile.activity_level.factor


def compute_daily_goal(profile: BiometricProfile) -> float:
    """Return the daily calorie goal for a profile."""
    goal = total_daily_energy_expenditure(profile) + profile.goal_offset.calories
    return float(_round_half_away_from_zero(goal))


def decode_profile(
    fields: dict[str, object], names: ProfileFields | None = None
) -> BiometricProfile:
    """Decode raw profile fields into a typed profile.

    Dropdown-style values such as ``"1.55 - Moderately active"`` are reduced
    to their leading number here, so the calculator only sees enums.
    """
    names = names or ProfileFields()
    age = _positive_number(fields.get(names.age_years), names.age_years)
    if not age.is_integer():
        raise InvalidProfileError(
            f"{names.age_years} must be a whole number", field=names.age_years
        )
    return BiometricProfile(
        sex=decode_sex(fields.get(names.sex)),
        weight_kg=_positive_number(fields.get(names.weight_kg), names.weight_kg),
        height_cm=_positive_number(fields.get(names.height_cm), names.height_cm),
        age_years=int(age),
        activity_level=decode_activity_level(fields.get(names.activity_level)),
        goal_offset=decode_goal_offset(fields.get(names.goal_offset)),
    )


def decode_sex(raw: object) -> Sex:
    """Decode sex, case-insensitive, accepting single-letter forms."""
    if isinstance(raw, Sex):
        return raw
    text = str(raw or "").strip().lower()
    if text in {"m", "male"}:
        return Sex.MALE
    return Sex.FEMALE


def decode_activity_level(raw: object) -> ActivityLevel:
    """Decode an activity factor given as a number or dropdown label."""
    if isinstance(raw, ActivityLevel):
        return raw
    value = _leading_number(raw, "activity_level")
    for level in ActivityLevel:
        if math.isclose(level.factor, value):
            return level
    raise InvalidProfileError(
        f"Unsupported activity factor: {value}", field="activity_level"
    )


def decode_goal_offset(raw: object) -> GoalOffset:
    """Decode a goal offset; a missing value means maintenance."""
    if isinstance(raw, GoalOffset):
        return raw
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return GoalOffset.MAINTAIN
    value = _leading_number(raw, "goal_offset")
    for offset in GoalOffset:
        if math.isclose(offset.calories, value):
            return offset
    raise InvalidProfileError(f"Unsupported goal offset: {value}", field="goal_offset")


def _leading_number(raw: object, field: str) -> float:
    if isinstance(raw, bool):
        raise InvalidProfileError(f"{field} is not numeric", field=field)
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str) and raw.strip():
        match = _LEADING_NUMBER.match(raw)
        try:
            value = float(match.group(1)) if match else float(raw)
        except ValueError as exc:
            raise InvalidProfileError(
                f"{field} has no numeric value: {raw!r}", field=field
            ) from exc
    else:
        raise InvalidProfileError(f"{field} is missing", field=field)
    if not math.isfinite(value):
        raise InvalidProfileError(f"{field} is not finite", field=field)
    return value


def _positive_number(raw: object, field: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise InvalidProfileError(f"{field} is missing", field=field)
    try:
        value = float(raw.strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidProfileError(
            f"{field} is not numeric: {raw!r}", field=field
        ) from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidProfileError(f"{field} must be positive", field=field)
    return value


def _validate(profile: BiometricProfile) -> None:
    for field, value in (
        ("weight_kg", profile.weight_kg),
        ("height_cm", profile.height_cm),
        ("age_years", profile.age_years),
    ):
        _positive_number(value, field)
    if not isinstance(profile.activity_level, ActivityLevel):
        raise InvalidProfileError("activity_level is missing", field="activity_level")


def _round_half_away_from_zero(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
