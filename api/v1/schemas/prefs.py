from __future__ import annotations

from pydantic import BaseModel


class PrefsIn(BaseModel):
    dark_mode: bool = False
    gemini_api_key: str | None = None


class PrefsOut(BaseModel):
    client_id: str
    dark_mode: bool
    gemini_api_key_set: bool = False    # the key itself is never echoed back
