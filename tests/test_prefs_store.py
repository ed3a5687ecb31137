from __future__ import annotations

import asyncio

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from services.db import Base, ClientPreferences, PreferencesStore


async def _roundtrip(url: str) -> tuple[ClientPreferences, ClientPreferences]:
    eng = create_async_engine(url)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        async with async_sessionmaker(eng, expire_on_commit=False)() as session:
            store = PreferencesStore(session)
            before = await store.load("web-1")
            await store.save(ClientPreferences(client_id="web-1", dark_mode=True))
            after = await store.load("web-1")
        return before, after
    finally:
        await eng.dispose()


def test_load_save_roundtrip(tmp_path):
    before, after = asyncio.run(_roundtrip(f"sqlite+aiosqlite:///{tmp_path}/p.db"))
    assert before == ClientPreferences(client_id="web-1")
    assert after.dark_mode is True
    assert after.gemini_api_key is None
