"""
GeminiGenerator with a stubbed SDK client: output validation and
error translation.
"""
from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace

import pytest
from google.genai import errors as gerrors

from config import settings
from core.errors import (
    CredentialError,
    MealPlanError,
    ModelConfigurationError,
    ModelOutputInvalid,
)
from core.models.meal_plan import MealPlan
from services.gemini import GeminiGenerator, translate_error


def _client(text: str | None = None, exc: Exception | None = None, calls: list | None = None):
    async def generate_content(**kwargs):
        if calls is not None:
            calls.append(kwargs)
        if exc is not None:
            raise exc
        return SimpleNamespace(text=text)

    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))


def _api_error(cls, code: int, message: str, status: str):
    return cls(code, {"error": {"code": code, "message": message, "status": status}})


def _generate(gen: GeminiGenerator):
    return asyncio.run(gen.generate_structured("prompt", MealPlan))


# ── output handling ──────────────────────────────────────────────────
def test_valid_json_parsed(plan_payload):
    calls: list = []
    gen = GeminiGenerator(model="gemini-test", client=_client(json.dumps(plan_payload), calls=calls))

    plan = _generate(gen)

    assert plan.dailyMealPlan[0].name == "Breakfast"
    cfg = calls[0]["config"]
    assert calls[0]["model"] == "gemini-test"
    assert cfg.response_mime_type == "application/json"
    assert cfg.response_schema is not None


@pytest.mark.parametrize("text", [None, "", "not json", '{"dailyMealPlan": [{"name": "Lunch"}]}'])
def test_empty_or_invalid_output(text):
    with pytest.raises(ModelOutputInvalid):
        _generate(GeminiGenerator(client=_client(text)))


# ── error translation ────────────────────────────────────────────────
def test_invalid_api_key():
    exc = _api_error(
        gerrors.ClientError, 400,
        "API key not valid. Please pass a valid API key.", "INVALID_ARGUMENT",
    )
    with pytest.raises(CredentialError):
        _generate(GeminiGenerator(client=_client(exc=exc)))


def test_permission_denied_is_credential_error():
    exc = _api_error(gerrors.ClientError, 403, "Permission denied", "PERMISSION_DENIED")
    assert isinstance(translate_error(exc), CredentialError)


def test_model_not_found():
    exc = _api_error(
        gerrors.ClientError, 404,
        "models/gemini-0.1 is not found for API version v1beta", "NOT_FOUND",
    )
    with pytest.raises(ModelConfigurationError):
        _generate(GeminiGenerator(client=_client(exc=exc)))


def test_server_error_is_generic_failure():
    exc = _api_error(gerrors.ServerError, 500, "Internal error encountered.", "INTERNAL")
    err = translate_error(exc)
    assert type(err) is MealPlanError
    assert "Internal error" in str(err)


def test_missing_key_reported_on_first_call(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", None)
    gen = GeminiGenerator()            # constructing without a key is allowed
    with pytest.raises(CredentialError):
        _generate(gen)
