from __future__ import annotations

from pydantic import BaseModel, Field


class MealItem(BaseModel):
    name: str = Field(..., description="Name of the food item, e.g. Roti, Dal Makhani, Apple")
    quantity: str = Field(..., description="Quantity, e.g. 2 pieces, 1 cup, 1 medium")
    calories: int | None = Field(None, description="Estimated calories for this item")


class Meal(BaseModel):
    name: str = Field(..., description="Breakfast, Lunch, Dinner, Evening Snack …")
    items: list[MealItem]
    totalCalories: int | None = None


class MealPlan(BaseModel):
    dailyMealPlan: list[Meal] = Field(
        ..., description="Meals for the whole day, Breakfast/Lunch/Dinner at minimum"
    )
    estimatedTotalCalories: int | None = None
