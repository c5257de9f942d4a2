"""Password hashing and JWT helpers."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from .config import Settings
from .models import User
from .schemas import TokenClaims

JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10

password_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return password_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against the stored hash."""
    if not password_hash:
        return False
    return password_context.verify(password, password_hash)


def token_payload(user: User, issued_at: datetime) -> dict[str, Any]:
    """
    Generate the JWT claims for a given user.

    issue_access_token() adds "exp" on top of this.
    """
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "iat": int(issued_at.timestamp()),
    }


def issue_access_token(user: User, settings: Settings) -> str:
    """Sign a token for ``user`` valid for the configured window."""

    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=settings.access_token_expires_minutes)
    return jwt.encode(
        {**token_payload(user, issued_at), "exp": int(expires_at.timestamp())},
        settings.secret_key,
        algorithm=JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings) -> TokenClaims:
    """Verify signature and expiry and return the token's claims.

    Raises jwt.PyJWTError for bad signatures, malformed tokens and expired
    tokens, and pydantic.ValidationError if the claims are incomplete.
    """

    payload: Dict[str, Any] = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[JWT_ALGORITHM],
        options={"require": ["exp"]},
    )
    return TokenClaims(**payload)
