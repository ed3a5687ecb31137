"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* The single `client_preferences` table (dark-mode flag, cached key)
* `PreferencesStore` – explicit load / save used by the routers
"""
from __future__ import annotations

import logging
from typing import AsyncGenerator

from pydantic import BaseModel
from sqlalchemy import Boolean, String, select
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncAttrs,
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column
from sqlalchemy.pool import NullPool

from config import settings

_LOG = logging.getLogger(__name__)

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


def _create_engine() -> AsyncEngine:
    url = settings.database_url
    if url.startswith("sqlite"):
        # aiosqlite connections are tied to the loop that opened them
        return create_async_engine(url, poolclass=NullPool)
    return create_async_engine(url, pool_pre_ping=True)


def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = _create_engine()
    return _ENGINE


async def dispose_engine() -> None:
    global _ENGINE
    if _ENGINE is not None:
        await _ENGINE.dispose()
        _ENGINE = None


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class ClientPreferencesRow(Base):
    __tablename__ = "client_preferences"

    client_id: Mapped[str] = mapped_column(String, primary_key=True)
    dark_mode: Mapped[bool] = mapped_column(Boolean, default=False)
    gemini_api_key: Mapped[str | None] = mapped_column(String)


async def init_models() -> None:
    async with engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ───────── preferences service ───────────────────────────────────────
class ClientPreferences(BaseModel):
    client_id: str
    dark_mode: bool = False
    gemini_api_key: str | None = None


class PreferencesStore:
    """Load / save client preferences; absent rows read as defaults."""

    def __init__(self, session: AsyncSession) -> None:
        self._db = session

    async def load(self, client_id: str) -> ClientPreferences:
        row = (
            await self._db.execute(
                select(ClientPreferencesRow).where(
                    ClientPreferencesRow.client_id == client_id
                )
            )
        ).scalar_one_or_none()
        if row is None:
            return ClientPreferences(client_id=client_id)
        return ClientPreferences(
            client_id=row.client_id,
            dark_mode=row.dark_mode,
            gemini_api_key=row.gemini_api_key,
        )

    async def save(self, prefs: ClientPreferences) -> ClientPreferences:
        row = await self._db.get(ClientPreferencesRow, prefs.client_id)
        if row is None:                            # Insert
            row = ClientPreferencesRow(client_id=prefs.client_id)
            self._db.add(row)
        row.dark_mode = prefs.dark_mode
        row.gemini_api_key = prefs.gemini_api_key

        await self._db.commit()
        _LOG.info("Saved preferences for client %s", prefs.client_id)
        return prefs


# ───────── session helper ────────────────────────────────────────────

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine(), expire_on_commit=False)
    async with async_session() as session:
        yield session
