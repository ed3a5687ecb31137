"""
core/errors.py
────────────────────────────────────────────────────────────────────────
Failure taxonomy shared by the estimator, the meal-plan requester and
the Gemini adapter.  Routers translate these into HTTP responses.
"""

from __future__ import annotations


class CalorieWiseError(Exception):
    """Base class for every error raised by this project."""


class InvalidProfile(CalorieWiseError):
    """One or more profile fields are out of their domain."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


# ──────────────────────────────────────────────────────────────────────
#  Meal-plan generation
# ──────────────────────────────────────────────────────────────────────
class MealPlanError(CalorieWiseError):
    """Generic meal-plan generation failure."""


class ModelOutputInvalid(MealPlanError):
    """The model returned nothing, or something that fails the schema."""


class CredentialError(MealPlanError):
    """API key missing or rejected by the model provider."""


class ModelConfigurationError(MealPlanError):
    """Configured model name was not found / is not available."""
