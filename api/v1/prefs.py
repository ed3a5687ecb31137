from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.db import ClientPreferences, PreferencesStore, get_session
from api.v1.schemas.prefs import PrefsIn, PrefsOut

router = APIRouter()


def get_store(db: AsyncSession = Depends(get_session)) -> PreferencesStore:
    return PreferencesStore(db)


# ───────────────────────── helpers ──────────────────────────
def _serialize(prefs: ClientPreferences) -> PrefsOut:
    return PrefsOut(
        client_id=prefs.client_id,
        dark_mode=prefs.dark_mode,
        gemini_api_key_set=bool(prefs.gemini_api_key),
    )


# ───────────────────────── read ─────────────────────────────
@router.get(
    "/{client_id}/preferences",
    response_model=PrefsOut,
    status_code=status.HTTP_200_OK,
)
async def get_preferences(
    client_id: str,
    store: PreferencesStore = Depends(get_store),
) -> PrefsOut:
    """Unknown clients get the defaults (light mode, no cached key)."""
    return _serialize(await store.load(client_id))


# ───────────────────────── upsert ───────────────────────────
@router.put(
    "/{client_id}/preferences",
    response_model=PrefsOut,
    status_code=status.HTTP_200_OK,
)
async def upsert_preferences(
    client_id: str,
    body: PrefsIn,
    store: PreferencesStore = Depends(get_store),
) -> PrefsOut:
    current = await store.load(client_id)
    # omitting the key keeps the saved one; an explicit null clears it
    key = (
        body.gemini_api_key
        if "gemini_api_key" in body.model_fields_set
        else current.gemini_api_key
    )
    saved = await store.save(
        ClientPreferences(client_id=client_id, dark_mode=body.dark_mode, gemini_api_key=key)
    )
    return _serialize(saved)
