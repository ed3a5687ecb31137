"""
Centralised settings loader.

Everything is read from the environment (or a local `.env`), so the
estimator tunables can be changed without touching code.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ───────────────────────────────────────────────
    env_name: str = Field("local", validation_alias="ENV_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    database_url: str = Field(
        "sqlite+aiosqlite:///./caloriewise.db", validation_alias="DATABASE_URL"
    )

    # ─── Gemini ─────────────────────────────────────────────────────
    gemini_api_key: str | None = Field(
        None, validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_GENAI_API_KEY")
    )
    gemini_model: str = Field("gemini-1.5-flash", validation_alias="GEMINI_MODEL")
    gemini_temperature: float = Field(0.7, validation_alias="GEMINI_TEMPERATURE")

    # ─── estimator tunables (see core/calorie_calc.EstimatorConstants) ─
    protein_factor_standard: float = Field(1.4, validation_alias="PROTEIN_FACTOR_STANDARD")
    protein_factor_high: float = Field(2.0, validation_alias="PROTEIN_FACTOR_HIGH")
    fat_fraction_balanced: float = Field(0.30, validation_alias="FAT_FRACTION_BALANCED")
    fat_fraction_high_protein: float = Field(
        0.25, validation_alias="FAT_FRACTION_HIGH_PROTEIN"
    )
    water_ml_per_kg: float = Field(30.0, validation_alias="WATER_ML_PER_KG")
    water_ml_per_exercise_minute: float = Field(
        0.5, validation_alias="WATER_ML_PER_EXERCISE_MINUTE"
    )

    # allow unrelated env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
