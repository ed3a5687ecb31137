"""Re-export individual schema modules for easy imports."""

from .profile import ProfileIn, EstimateOut
from .meal_plan import MealPlanRequest, MealPlanOut
from .prefs import PrefsIn, PrefsOut

__all__ = [
    "ProfileIn",
    "EstimateOut",
    "MealPlanRequest",
    "MealPlanOut",
    "PrefsIn",
    "PrefsOut",
]
