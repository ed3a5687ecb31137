from __future__ import annotations

import math

import pytest

from core.calorie_calc import ActivityLevel, Goal, Sex, UserProfile
from core.errors import InvalidProfile
from core.validation import profile_errors, validate_profile


def _profile(**overrides) -> UserProfile:
    base = dict(
        weight_kg=70,
        height_cm=175,
        age_years=30,
        sex=Sex.male,
        activity_level=ActivityLevel.sedentary,
        goal=Goal.maintain,
    )
    base.update(overrides)
    return UserProfile(**base)


def test_valid_profile_passes():
    validate_profile(_profile(body_fat_pct=20, exercise_minutes_per_day=30))


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"weight_kg": 0}, "weight_kg"),
        ({"height_cm": -170}, "height_cm"),
        ({"age_years": 14}, "age_years"),
        ({"age_years": 101}, "age_years"),
        ({"body_fat_pct": 0}, "body_fat_pct"),
        ({"body_fat_pct": 70}, "body_fat_pct"),
        ({"exercise_minutes_per_day": -1}, "exercise_minutes_per_day"),
        ({"goal_intensity_pct": 35}, "goal_intensity_pct"),
    ],
)
def test_out_of_domain_fields(overrides, field):
    with pytest.raises(InvalidProfile) as exc:
        validate_profile(_profile(**overrides))
    assert field in exc.value.errors


def test_all_errors_reported_together():
    errors = profile_errors(_profile(weight_kg=0, height_cm=0, age_years=5))
    assert errors == {
        "weight_kg": "Please enter a valid weight.",
        "height_cm": "Please enter a valid height.",
        "age_years": "Please enter a valid age (15-100).",
    }


def test_age_bounds_inclusive():
    assert profile_errors(_profile(age_years=15)) == {}
    assert profile_errors(_profile(age_years=100)) == {}


@pytest.mark.parametrize(
    "field",
    ["weight_kg", "height_cm", "body_fat_pct", "exercise_minutes_per_day", "goal_intensity_pct"],
)
@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_values_rejected(field, value):
    with pytest.raises(InvalidProfile) as exc:
        validate_profile(_profile(**{field: value}))
    assert field in exc.value.errors
