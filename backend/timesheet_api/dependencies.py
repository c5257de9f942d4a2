"""Reusable FastAPI dependencies."""
from collections.abc import AsyncGenerator

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from .config import Settings
from .database import Database
from .errors import Forbidden, Unauthorized
from .schemas import TokenClaims
from .security import decode_access_token
from .service import AuthService
from .store import UserStore

# Missing headers are reported by require_token_claims, not by HTTPBearer.
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings_dependency(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async SQLAlchemy session per request."""

    async with database.session() as session:
        yield session


def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthService:
    return AuthService(UserStore(session), settings)


async def require_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings_dependency),
) -> TokenClaims:
    """
    Return the claims of the bearer token in the Authorization header.

    A missing token is Unauthorized; a token that fails signature, expiry or
    payload checks is Forbidden.
    """

    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    try:
        return decode_access_token(credentials.credentials, settings)
    except (jwt.PyJWTError, ValidationError) as exc:
        raise Forbidden() from exc
