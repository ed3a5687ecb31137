from __future__ import annotations

import copy

import pytest
from fastapi.testclient import TestClient

from config import settings
from services import db

PLAN = {
    "dailyMealPlan": [
        {
            "name": "Breakfast",
            "items": [
                {"name": "Poha", "quantity": "1.5 cups", "calories": 250},
                {"name": "Curd (Dahi)", "quantity": "1 cup", "calories": 100},
            ],
            "totalCalories": 350,
        },
        {
            "name": "Lunch",
            "items": [
                {"name": "Roti (Whole Wheat)", "quantity": "3 small", "calories": 210},
                {"name": "Dal Tadka", "quantity": "1 bowl", "calories": 220},
                {"name": "Mixed Veg Sabzi", "quantity": "1 bowl", "calories": 180},
            ],
            "totalCalories": 610,
        },
        {
            "name": "Evening Snack",
            "items": [{"name": "Roasted Chana", "quantity": "1/2 cup"}],
        },
        {
            "name": "Dinner",
            "items": [
                {"name": "Paneer Bhurji", "quantity": "1 cup", "calories": 320},
                {"name": "Jeera Rice", "quantity": "1 cup", "calories": 240},
            ],
            "totalCalories": 560,
        },
    ],
    "estimatedTotalCalories": 1980,
}


class FakeGenerator:
    """Stands in for Gemini: returns `payload` or raises `exc`."""

    def __init__(self, payload: dict | None = None, exc: Exception | None = None):
        self.payload = payload
        self.exc = exc
        self.prompts: list[str] = []

    async def generate_structured(self, prompt, schema):
        self.prompts.append(prompt)
        if self.exc is not None:
            raise self.exc
        return schema.model_validate(self.payload)


@pytest.fixture
def plan_payload() -> dict:
    return copy.deepcopy(PLAN)


@pytest.fixture
def fake_generator():
    return FakeGenerator


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{tmp_path}/test.db")
    monkeypatch.setattr(db, "_ENGINE", None)

    from main import app

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
