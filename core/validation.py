"""Range checks that run before the estimator sees a profile."""

from __future__ import annotations

import math

from core.calorie_calc import UserProfile
from core.errors import InvalidProfile

AGE_RANGE = (15, 100)
BODY_FAT_RANGE = (0.0, 70.0)          # exclusive
GOAL_INTENSITY_RANGE = (10.0, 30.0)


def _finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def profile_errors(p: UserProfile) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not _finite(p.weight_kg) or p.weight_kg <= 0:
        errors["weight_kg"] = "Please enter a valid weight."
    if not _finite(p.height_cm) or p.height_cm <= 0:
        errors["height_cm"] = "Please enter a valid height."

    lo, hi = AGE_RANGE
    if p.age_years is None or not lo <= p.age_years <= hi:
        errors["age_years"] = f"Please enter a valid age ({lo}-{hi})."

    if p.body_fat_pct is not None:
        lo, hi = BODY_FAT_RANGE
        if not _finite(p.body_fat_pct) or not lo < p.body_fat_pct < hi:
            errors["body_fat_pct"] = f"Body fat must be between {lo:g} and {hi:g} %."

    if p.exercise_minutes_per_day is not None and (
        not _finite(p.exercise_minutes_per_day) or p.exercise_minutes_per_day < 0
    ):
        errors["exercise_minutes_per_day"] = "Exercise minutes must be a non-negative number."

    lo, hi = GOAL_INTENSITY_RANGE
    if not _finite(p.goal_intensity_pct) or not lo <= p.goal_intensity_pct <= hi:
        errors["goal_intensity_pct"] = f"Goal intensity must be between {lo:g} and {hi:g} %."

    return errors


def validate_profile(p: UserProfile) -> None:
    """Raise `InvalidProfile` listing every out-of-range field."""
    errors = profile_errors(p)
    if errors:
        raise InvalidProfile(errors)
