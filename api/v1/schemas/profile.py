from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.calorie_calc import (
    DEFAULT_GOAL_INTENSITY_PCT,
    ActivityLevel,
    DietType,
    Goal,
    Sex,
    UserProfile,
)


class ProfileIn(BaseModel):
    weight_kg: float
    height_cm: float
    age_years: int
    sex: Sex = Field(..., description="male, female or other")
    activity_level: ActivityLevel = Field(
        ActivityLevel.sedentary, examples=["Sedentary", "Moderately Active"]
    )
    goal: Goal = Goal.maintain
    goal_intensity_pct: float = DEFAULT_GOAL_INTENSITY_PCT
    diet_type: DietType = DietType.balanced
    body_fat_pct: float | None = None
    exercise_minutes_per_day: float | None = None

    model_config = ConfigDict(allow_inf_nan=False)

    def to_profile(self) -> UserProfile:
        return UserProfile(**self.model_dump())


class EstimateOut(BaseModel):
    maintenance_calories: int
    target_calories: int
    protein_g: int
    fat_g: int
    carbs_g: int
    water_ml: int
    bmr: float
    surplus_calories: int
    deficit_calories: int
    goal_label: str

    model_config = ConfigDict(from_attributes=True)
