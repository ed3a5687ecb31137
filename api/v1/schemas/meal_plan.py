from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from core.calorie_calc import DietPreference, Goal
from core.models.meal_plan import MealPlan


class MealPlanRequest(BaseModel):
    target_calories: int
    goal: Goal = Goal.maintain
    diet_preference: DietPreference = DietPreference.vegetarian

    model_config = ConfigDict(allow_inf_nan=False)


class MealPlanOut(MealPlan):
    """Generated plan plus any soft warnings (e.g. a missing Dinner)."""
    warnings: list[str] = []
