"""Pydantic schemas used across the backend API."""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    """Credentials supplied during login.

    Fields default to empty strings so that missing values reach the service
    and are reported with the service's own message.
    """

    username: str = ""
    password: str = ""


class RegisterRequest(BaseModel):
    """Payload for user registration."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = ""
    email: str = ""
    password: str = ""
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")


class UserRead(BaseModel):
    """Public representation of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    username: str
    email: str
    first_name: str | None = Field(default=None, serialization_alias="firstName")
    last_name: str | None = Field(default=None, serialization_alias="lastName")
    is_active: bool = Field(default=True, serialization_alias="isActive")
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite drops the offset on read; timestamps are always written as UTC.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TokenClaims(BaseModel):
    """Information encoded into JWTs."""

    id: int
    username: str
    email: str


class AuthResponse(BaseModel):
    """Body returned by login and register."""

    success: bool = True
    user: UserRead
    token: str


class ProfileResponse(BaseModel):
    user: UserRead


class HealthResponse(BaseModel):
    status: str
    timestamp: str
