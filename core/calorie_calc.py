"""
core/calorie_calc.py
────────────────────────────────────────────────────────────────────────
Daily energy + macro + water estimator:

1. BMR  (Katch–McArdle when body-fat % is known, else Mifflin–St Jeor)
2. Maintenance (BMR × activity multiplier)
3. Target calories (maintenance ± goal intensity %)
4. Protein / fat / carbs split
5. Water intake

Everything here is pure arithmetic; inputs are validated upstream by
`core.validation.validate_profile`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from config import settings

Logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────
#  Enumerations
# ──────────────────────────────────────────────────────────────────────
class Sex(str, Enum):
    male = "male"
    female = "female"
    other = "other"        # uses the male formula


class Goal(str, Enum):
    lose = "lose"
    maintain = "maintain"
    gain = "gain"


class DietType(str, Enum):
    balanced = "balanced"
    high_protein = "highProtein"


class DietPreference(str, Enum):
    vegetarian = "vegetarian"
    non_vegetarian = "non-vegetarian"


class ActivityLevel(str, Enum):
    sedentary = "Sedentary"
    lightly_active = "Lightly Active"
    moderately_active = "Moderately Active"
    active = "Active"
    very_active = "Very Active"

    @classmethod
    def _missing_(cls, value: object) -> "ActivityLevel | None":
        # accept "moderately_active", "very active", "Extremely Active" …
        if not isinstance(value, str):
            return None
        key = value.strip().lower().replace("_", " ").replace("-", " ")
        if key == "extremely active":
            return cls.very_active
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.sedentary: 1.2,
    ActivityLevel.lightly_active: 1.375,
    ActivityLevel.moderately_active: 1.55,
    ActivityLevel.active: 1.725,
    ActivityLevel.very_active: 1.9,
}

DEFAULT_GOAL_INTENSITY_PCT = 15.0


# ──────────────────────────────────────────────────────────────────────
#  Tunables
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class EstimatorConstants:
    protein_factor_standard: float = 1.4    # g/kg, balanced + maintain/lose
    protein_factor_high: float = 2.0        # g/kg, gain or highProtein
    fat_fraction_balanced: float = 0.30
    fat_fraction_high_protein: float = 0.25
    water_ml_per_kg: float = 30.0
    water_ml_per_exercise_minute: float = 0.5

    @classmethod
    def from_settings(cls) -> "EstimatorConstants":
        return cls(
            protein_factor_standard=settings.protein_factor_standard,
            protein_factor_high=settings.protein_factor_high,
            fat_fraction_balanced=settings.fat_fraction_balanced,
            fat_fraction_high_protein=settings.fat_fraction_high_protein,
            water_ml_per_kg=settings.water_ml_per_kg,
            water_ml_per_exercise_minute=settings.water_ml_per_exercise_minute,
        )


# ──────────────────────────────────────────────────────────────────────
#  Input / output records
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class UserProfile:
    weight_kg: float
    height_cm: float
    age_years: int
    sex: Sex
    activity_level: ActivityLevel
    goal: Goal = Goal.maintain
    goal_intensity_pct: float = DEFAULT_GOAL_INTENSITY_PCT
    diet_type: DietType = DietType.balanced
    body_fat_pct: float | None = None
    exercise_minutes_per_day: float | None = None


@dataclass(frozen=True)
class CalorieEstimate:
    maintenance_calories: int
    target_calories: int
    protein_g: int
    fat_g: int
    carbs_g: int
    water_ml: int
    # extras shown alongside the main numbers
    bmr: float
    surplus_calories: int
    deficit_calories: int
    goal_label: str


def goal_label(goal: Goal, intensity_pct: float) -> str:
    """Short caption for a goal, e.g. "Deficit (15%)"."""
    pct = f"{intensity_pct:g}"
    if goal == Goal.gain:
        return f"Surplus ({pct}%)"
    if goal == Goal.lose:
        return f"Deficit ({pct}%)"
    return "Maintain Weight"


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class CalorieEstimator:
    """Source-of-truth for kcal, macros and water."""

    def __init__(self, constants: EstimatorConstants | None = None) -> None:
        self.constants = constants or EstimatorConstants.from_settings()

    # --------------- public entrypoint --------------------------------
    def estimate(self, p: UserProfile) -> CalorieEstimate:
        bmr = self.bmr(p.weight_kg, p.height_cm, p.age_years, p.sex, p.body_fat_pct)
        maintenance = self.maintenance(bmr, p.activity_level)
        target = self.target_calories(maintenance, p.goal, p.goal_intensity_pct)
        macros = self.macros(p.weight_kg, target, p.goal, p.diet_type)
        water = self.water_intake(p.weight_kg, p.exercise_minutes_per_day)

        result = CalorieEstimate(
            maintenance_calories=round(maintenance),
            target_calories=round(target),
            water_ml=water,
            bmr=round(bmr, 1),
            surplus_calories=round(
                self.target_calories(maintenance, Goal.gain, p.goal_intensity_pct)
            ),
            deficit_calories=round(
                self.target_calories(maintenance, Goal.lose, p.goal_intensity_pct)
            ),
            goal_label=goal_label(p.goal, p.goal_intensity_pct),
            **macros,
        )
        Logger.debug("estimate %s -> %s", p, result)
        return result

    # --------------- BMR / maintenance --------------------------------
    @staticmethod
    def bmr(
        weight_kg: float,
        height_cm: float,
        age_years: int,
        sex: Sex,
        body_fat_pct: float | None = None,
    ) -> float:
        if body_fat_pct is not None and 0 < body_fat_pct < 70 and weight_kg > 0:
            lean_mass = weight_kg * (1 - body_fat_pct / 100)
            if lean_mass > 0:
                return 370 + 21.6 * lean_mass      # Katch–McArdle

        base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
        return base + (-161 if sex == Sex.female else 5)

    @staticmethod
    def maintenance(bmr: float, activity_level: ActivityLevel) -> float:
        return bmr * ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)]

    # --------------- Calories ---------------------------------------
    @staticmethod
    def target_calories(maintenance: float, goal: Goal, intensity_pct: float) -> float:
        if goal == Goal.gain:
            return maintenance * (1 + intensity_pct / 100)
        if goal == Goal.lose:
            return maintenance * (1 - intensity_pct / 100)
        return maintenance

    # --------------- Macros -----------------------------------------
    def macros(
        self, weight_kg: float, target_calories: float, goal: Goal, diet_type: DietType
    ) -> dict[str, int]:
        """
        Protein from body weight, fat as a share of calories, carbs take
        whatever is left (never below zero).
        """
        c = self.constants
        high = goal == Goal.gain or diet_type == DietType.high_protein
        prot_g = weight_kg * (c.protein_factor_high if high else c.protein_factor_standard)

        fat_pc = (
            c.fat_fraction_high_protein
            if diet_type == DietType.high_protein
            else c.fat_fraction_balanced
        )
        fat_g = target_calories * fat_pc / 9
        carbs_g = max(0.0, (target_calories - prot_g * 4 - fat_g * 9) / 4)

        return {
            "protein_g": round(prot_g),
            "fat_g": round(fat_g),
            "carbs_g": round(carbs_g),
        }

    # --------------- Water ------------------------------------------
    def water_intake(self, weight_kg: float, exercise_minutes: float | None = None) -> int:
        c = self.constants
        minutes = exercise_minutes or 0
        return round(weight_kg * c.water_ml_per_kg + minutes * c.water_ml_per_exercise_minute)


def estimate(profile: UserProfile, constants: EstimatorConstants | None = None) -> CalorieEstimate:
    return CalorieEstimator(constants).estimate(profile)
