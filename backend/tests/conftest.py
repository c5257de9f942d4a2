"""Test fixtures for the backend."""
import os
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")

from timesheet_api.config import Settings  # noqa: E402
from timesheet_api.database import Database  # noqa: E402
from timesheet_api.main import create_app  # noqa: E402
from timesheet_api.models import User  # noqa: E402


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""

    return Settings(
        app_env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test_backend.db'}",
        secret_key="test-secret",
    )


@pytest_asyncio.fixture
async def database(settings: Settings) -> Database:
    """Create the schema before a test and dispose of the engine afterwards."""

    db = Database.from_settings(settings)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest_asyncio.fixture
async def client(settings: Settings, database: Database) -> AsyncClient:
    """Provide an HTTP client for integration tests."""

    app = create_app(settings, database=database)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        yield client


@pytest.fixture
def alice() -> dict:
    return {
        "username": "alice",
        "email": "a@x.com",
        "password": "secret123",
        "firstName": "Alice",
        "lastName": "A",
    }


@pytest.fixture
def deactivate(database: Database):
    """Clear the active flag the way an administrator would, outside the API."""

    async def _deactivate(username: str) -> None:
        async with database.session() as session:
            await session.execute(
                update(User).where(User.username == username).values(is_active=False)
            )
            await session.commit()

    return _deactivate
