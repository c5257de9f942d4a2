"""Login, registration and profile lookup."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from .config import Settings
from .errors import (
    AccountDisabled,
    BadRequest,
    ConstraintViolation,
    DuplicateUser,
    InternalError,
    InvalidCredentials,
    NotFound,
)
from .models import User
from .schemas import TokenClaims
from .security import hash_password, issue_access_token, verify_password
from .store import UserStore

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


@dataclass
class AuthResult:
    user: User
    token: str


class AuthService:
    """Credential checks and token issuance on top of a UserStore.

    Database failures are logged and surfaced as InternalError. Nothing is
    retried, and there is no lockout or throttling of failed logins.
    """

    def __init__(self, store: UserStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    async def login(self, username: str, password: str) -> AuthResult:
        if not username or not password:
            raise BadRequest("Username and password required")

        try:
            user = await self.store.find_by_username(username)
        except SQLAlchemyError as exc:
            logger.exception("Login lookup failed for %r", username)
            raise InternalError() from exc

        if user is None:
            logger.info("Login failed for %r: unknown user", username)
            raise InvalidCredentials()
        if not user.is_active:
            logger.info("Login refused for %r: account disabled", username)
            raise AccountDisabled()

        # bcrypt is deliberately slow; keep it off the event loop.
        try:
            valid = await run_in_threadpool(verify_password, password, user.password_hash)
        except ValueError:
            # passlib refuses some inputs outright, e.g. a NUL byte under bcrypt
            valid = False
        if not valid:
            logger.info("Login failed for %r: wrong password", username)
            raise InvalidCredentials()

        return AuthResult(user=user, token=issue_access_token(user, self.settings))

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> AuthResult:
        if not username or not email or not password:
            raise BadRequest("Username, email, and password required")
        try:
            _email_adapter.validate_python(email)
        except ValidationError as exc:
            raise BadRequest("Invalid email address") from exc

        try:
            existing = await self.store.find_by_username_or_email(username, email)
            if existing:
                raise DuplicateUser()

            password_hash = await run_in_threadpool(hash_password, password)
            user = await self.store.insert(
                username=username,
                email=email,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
            )
        except ConstraintViolation as exc:
            logger.info("Registration raced on a unique key for %r: %s", username, exc)
            raise DuplicateUser() from exc
        except SQLAlchemyError as exc:
            logger.exception("Registration failed for %r", username)
            raise InternalError() from exc
        except ValueError as exc:
            logger.exception("Password hashing failed for %r", username)
            raise InternalError() from exc

        logger.info("Registered user %r (id=%s)", user.username, user.id)
        return AuthResult(user=user, token=issue_access_token(user, self.settings))

    async def fetch_profile(self, claims: TokenClaims) -> User:
        try:
            user = await self.store.find_by_id(claims.id)
        except SQLAlchemyError as exc:
            logger.exception("Profile lookup failed for id=%s", claims.id)
            raise InternalError() from exc
        if user is None:
            raise NotFound()
        return user
