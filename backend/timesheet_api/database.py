"""Database engine ownership and per-request session management."""
from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import Settings
from .models import Base


class Database:
    """Owns the async engine (and with it the connection pool) for one app."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.sessionmaker = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create an engine for ``settings.database_url``."""

        connect_args = (
            {"check_same_thread": False}
            if settings.database_url.startswith("sqlite+")
            else {}
        )
        engine = create_async_engine(
            settings.database_url, echo=False, connect_args=connect_args
        )
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session that is closed when the block exits."""

        async with self.sessionmaker() as session:
            yield session

    async def create_all(self) -> None:
        """Create the users table if it does not exist yet."""

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
