# api/v1/estimates.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from core.calorie_calc import CalorieEstimator
from core.errors import InvalidProfile
from core.validation import validate_profile
from api.v1.schemas import EstimateOut, ProfileIn

router = APIRouter()
_calc = CalorieEstimator()


@router.post(
    "",
    response_model=EstimateOut,
    status_code=status.HTTP_200_OK,
    summary="Maintenance / target calories, macros and water for a profile",
)
def create_estimate(body: ProfileIn) -> EstimateOut:
    profile = body.to_profile()
    try:
        validate_profile(profile)
    except InvalidProfile as e:
        raise HTTPException(
            status_code=422,
            detail={"error": "invalid_input", "fields": e.errors},
        ) from e
    return EstimateOut.model_validate(_calc.estimate(profile), from_attributes=True)
