"""
core/meal_planner.py
────────────────────────────────────────────────────────────────────────
One-day Indian sample meal plan for a calorie target.

`MealPlanRequester.request()` builds the prompt, sends it once through a
`StructuredGenerator` (Gemini in production, a fake in tests) and hands
back the schema-validated `MealPlan`.  There is no retry and no cache;
the caller may simply ask again.
"""

from __future__ import annotations

import logging

from core.calorie_calc import DietPreference, Goal
from core.errors import InvalidProfile, MealPlanError, ModelOutputInvalid
from core.models.meal_plan import MealPlan
from services.gemini import GeminiGenerator, StructuredGenerator

_LOG = logging.getLogger(__name__)

CORE_MEALS = ("Breakfast", "Lunch", "Dinner")

# carbs / protein / fat guidance handed to the model
_MACRO_GUIDANCE = {
    Goal.lose: "approximately 40% carbs, 30% protein, 30% fats",
    Goal.gain: (
        "approximately 50% carbs, 25-30% protein, 20-25% fats. Ensure sufficient "
        "protein for muscle growth and use complex carbs for energy"
    ),
    Goal.maintain: "approximately 50% carbs, 20-25% protein, 25-30% fats",
}

_FOOD_GUIDANCE = {
    Goal.lose: (
        "Focus on high-protein, high-fiber, low-glycemic index foods such as dal, "
        "whole wheat or multigrain roti, plenty of vegetables, salads, sprouts and "
        "quinoa. Minimize added fats and simple carbs."
    ),
    Goal.gain: (
        "Include calorie-dense, protein-rich foods such as almonds, walnuts, chia "
        "and flax seeds, ghee, full-fat dairy (paneer, curd), bananas, peanut "
        "butter, rice and potatoes{non_veg}."
    ),
    Goal.maintain: (
        "Focus on balanced portions of whole foods such as roti or rice, sabzi, "
        "dal and curd."
    ),
}

_EXAMPLES = """\
Example of a meal item:
{ "name": "Roti (Whole Wheat)", "quantity": "2 small", "calories": 140 }

Example of a meal:
{
  "name": "Breakfast",
  "items": [
    { "name": "Poha", "quantity": "1.5 cups", "calories": 250 },
    { "name": "Curd (Dahi)", "quantity": "1 cup", "calories": 100 }
  ],
  "totalCalories": 350
}"""


def build_meal_plan_prompt(
    target_calories: int, goal: Goal, diet_preference: DietPreference
) -> str:
    goal = Goal(goal)
    diet = DietPreference(diet_preference).value
    non_veg = diet_preference == DietPreference.non_vegetarian

    food = _FOOD_GUIDANCE[goal].format(
        non_veg=", plus chicken, fish and eggs" if non_veg else ""
    )
    examples_veg = (
        "roti, rice, dals, paneer, seasonal vegetables, curd, poha, upma, idli, "
        "dosa, khichdi, sabudana"
    )
    examples_non_veg = (
        "\n   - Non-vegetarian: chicken curry/tikka, fish fry/curry, egg bhurji/curry/boiled eggs."
        if non_veg
        else ""
    )

    return f"""
You are an expert nutritionist specializing in Indian cuisine.
Generate a detailed one-day meal plan for an Indian user.

### User Preferences:
- Weight Goal: {goal.value}
- Target Daily Calories: {target_calories}
- Diet Preference: {diet}

### Instructions:
1. Diet type: strictly follow the '{diet}' preference.
2. Macros: target {_MACRO_GUIDANCE[goal]}.
3. Meals: the plan MUST include {", ".join(CORE_MEALS)}. A Mid-Morning Snack and
   an Evening Snack are optional when they suit the calorie target.
4. Food choices: {food}
5. Use common Indian ingredients and dishes.
   - Vegetarian: {examples_veg}.{examples_non_veg}
6. Avoid processed foods, sugary drinks, deep-fried items (small amounts are
   acceptable only for weight gain) and excessive refined sugar.
7. For every item give a name, a quantity and estimated calories. Give each
   meal a totalCalories and the day an estimatedTotalCalories as close as
   possible to {target_calories}.
8. Output MUST be JSON matching the response schema exactly.

{_EXAMPLES}
"""


def missing_core_meals(plan: MealPlan) -> list[str]:
    """Core meal names absent from `plan` (case-insensitive)."""
    names = {m.name.strip().lower() for m in plan.dailyMealPlan}
    return [meal for meal in CORE_MEALS if meal.lower() not in names]


class MealPlanRequester:
    def __init__(self, generator: StructuredGenerator) -> None:
        self._gen = generator

    async def request(
        self,
        target_calories: int,
        goal: Goal,
        diet_preference: DietPreference,
    ) -> MealPlan:
        if target_calories is None or target_calories <= 0:
            raise InvalidProfile({"target_calories": "Target calories must be positive."})

        _LOG.info(
            "Generating meal plan: calories=%s goal=%s diet=%s",
            target_calories,
            Goal(goal).value,
            DietPreference(diet_preference).value,
        )
        prompt = build_meal_plan_prompt(target_calories, goal, diet_preference)

        try:
            plan = await self._gen.generate_structured(prompt, MealPlan)
        except MealPlanError:
            raise
        except Exception as e:
            _LOG.exception("Meal plan generation failed")
            raise MealPlanError(f"Failed to generate meal plan: {e}") from e

        if plan is None:
            _LOG.error("Meal plan generation failed: model did not return valid output.")
            raise ModelOutputInvalid(
                "Failed to generate meal plan. The model did not return valid output."
            )

        missing = missing_core_meals(plan)
        if missing:
            _LOG.warning(
                "Generated meal plan might be missing core meals %s. Output: %s",
                missing,
                plan.model_dump_json(),
            )
        return plan


async def request_meal_plan(
    target_calories: int,
    goal: Goal,
    diet_preference: DietPreference,
    generator: StructuredGenerator | None = None,
) -> MealPlan:
    requester = MealPlanRequester(generator or GeminiGenerator())
    return await requester.request(target_calories, goal, diet_preference)
