# services/gemini.py
from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

from google import genai
from google.genai import types, errors as gerrors
from pydantic import BaseModel, ValidationError

from config import settings
from core.errors import (
    CredentialError,
    MealPlanError,
    ModelConfigurationError,
    ModelOutputInvalid,
)

_LOG = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# ───────────── Model Names ─────────────
CHAT_MODEL = settings.gemini_model


def log_key_status() -> None:
    _LOG.info(
        "Server-side GEMINI_API_KEY: %s",
        "SET" if settings.gemini_api_key else "NOT SET - THIS IS REQUIRED FOR AI FEATURES",
    )


# ───────────── Narrow interface ─────────────
class StructuredGenerator(Protocol):
    """prompt in → schema-validated object out (or a typed failure)."""

    async def generate_structured(self, prompt: str, schema: type[T]) -> T: ...


# ───────────── Error translation ─────────────
_CREDENTIAL_STATUSES = {"UNAUTHENTICATED", "PERMISSION_DENIED"}


def translate_error(exc: gerrors.APIError) -> MealPlanError:
    """Map an SDK error onto the project's failure taxonomy."""
    code = getattr(exc, "code", None)
    status = (getattr(exc, "status", None) or "").upper()
    message = getattr(exc, "message", None) or str(exc)

    if (
        code in (401, 403)
        or status in _CREDENTIAL_STATUSES
        or "api key not valid" in message.lower()
    ):
        return CredentialError(
            "API Key is invalid or missing. Please check server configuration."
        )
    if code == 404 or status == "NOT_FOUND" or "not found" in message.lower():
        return ModelConfigurationError(
            "AI Model not found. Please check model name in configuration."
        )
    return MealPlanError(f"Failed to generate meal plan: {message}")


# ───────────── Generation (async, structured) ─────────────
class GeminiGenerator:
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        client: Any | None = None,
    ) -> None:
        self.model = model or CHAT_MODEL
        self.temperature = settings.gemini_temperature if temperature is None else temperature
        self._api_key = api_key or settings.gemini_api_key
        self._client = client

    def _get_client(self) -> Any:
        # created on first use so a missing key surfaces as a request failure
        if self._client is None:
            if not self._api_key:
                raise CredentialError(
                    "API Key is invalid or missing. Set GEMINI_API_KEY or supply a key."
                )
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate_structured(self, prompt: str, schema: type[T]) -> T:
        """Run one completion constrained to `schema` and validate the reply."""
        client = self._get_client()
        try:
            resp = await client.aio.models.generate_content(
                model=self.model,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    response_mime_type="application/json",
                    response_schema=schema,
                ),
            )
        except gerrors.APIError as e:
            _LOG.error("Gemini generation failed: %s", e)
            raise translate_error(e) from e

        text = getattr(resp, "text", None)
        if not text:
            raise ModelOutputInvalid(
                "Failed to generate meal plan. The model did not return valid output."
            )
        try:
            return schema.model_validate_json(text)
        except ValidationError as e:
            _LOG.error("Gemini output failed schema validation: %s", e)
            raise ModelOutputInvalid(
                "Failed to generate meal plan. The model did not return valid output."
            ) from e
