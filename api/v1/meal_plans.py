# api/v1/meal_plans.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, status

from core.errors import (
    CredentialError,
    InvalidProfile,
    MealPlanError,
    ModelConfigurationError,
)
from core.meal_planner import MealPlanRequester, missing_core_meals
from services.db import PreferencesStore
from services.gemini import GeminiGenerator, StructuredGenerator
from api.v1.prefs import get_store
from api.v1.schemas import MealPlanOut, MealPlanRequest

_LOG = logging.getLogger(__name__)

router = APIRouter()


def _credential_error(e: CredentialError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "credential", "message": str(e)},
    )


# ───────────────────────── deps ─────────────────────────────
async def get_generator(
    x_gemini_api_key: str | None = Header(None),
    x_client_id: str | None = Header(None),
    store: PreferencesStore = Depends(get_store),
) -> StructuredGenerator:
    """
    Key order: request header, then the key saved in the client's
    preferences, then the server's GEMINI_API_KEY.  A missing key is
    only reported when the model is actually called.
    """
    key = x_gemini_api_key
    if not key and x_client_id:
        key = (await store.load(x_client_id)).gemini_api_key
    return GeminiGenerator(api_key=key)


# ───────────────────────── generate ─────────────────────────
@router.post(
    "",
    response_model=MealPlanOut,
    status_code=status.HTTP_200_OK,
    summary="Generate a one-day sample Indian meal plan",
)
async def generate_meal_plan(
    body: MealPlanRequest,
    generator: StructuredGenerator = Depends(get_generator),
) -> MealPlanOut:
    requester = MealPlanRequester(generator)
    try:
        plan = await requester.request(
            body.target_calories, body.goal, body.diet_preference
        )
    except InvalidProfile as e:
        raise HTTPException(
            status_code=422,
            detail={"error": "invalid_input", "fields": e.errors},
        ) from e
    except CredentialError as e:
        raise _credential_error(e) from e
    except ModelConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "configuration", "message": str(e)},
        ) from e
    except MealPlanError as e:
        _LOG.error("Error generating meal plan: %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "generation", "message": str(e)},
        ) from e

    warnings = [f"Meal plan is missing {name}" for name in missing_core_meals(plan)]
    return MealPlanOut(**plan.model_dump(), warnings=warnings)
