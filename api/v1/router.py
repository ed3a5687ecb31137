# api/v1/router.py
from fastapi import APIRouter

from . import estimates, meal_plans, prefs

api_router = APIRouter()

api_router.include_router(estimates.router, prefix="/estimates", tags=["Estimates"])
api_router.include_router(meal_plans.router, prefix="/meal-plans", tags=["Meal plans"])

# preferences live *under* the client resource
api_router.include_router(
    prefs.router,
    prefix="/clients",        # results in /clients/{client_id}/preferences
    tags=["Preferences"],
)
