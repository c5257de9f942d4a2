"""Application settings and configuration helpers."""
from functools import lru_cache
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

load_dotenv()

DEFAULT_SECRET_KEY = "change-me"
APP_ENVIRONMENTS = ("development", "production", "test")


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    app_env: str = Field(default="development", alias="APP_ENV")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./timesheet.db", alias="DATABASE_URL"
    )
    secret_key: str = Field(default=DEFAULT_SECRET_KEY, alias="JWT_SECRET")
    access_token_expires_minutes: int = Field(default=60 * 24)
    cors_allow_origins: list[str] = Field(default=["*"], alias="CORS_ALLOW_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=5000, alias="PORT")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("app_env")
    @classmethod
    def _known_environment(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in APP_ENVIRONMENTS:
            raise ValueError(f"APP_ENV must be one of {', '.join(APP_ENVIRONMENTS)}")
        return value

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @model_validator(mode="after")
    def _require_secrets_in_production(self) -> "Settings":
        if self.app_env == "production" and self.secret_key in ("", DEFAULT_SECRET_KEY):
            raise ValueError("JWT_SECRET must be set when APP_ENV=production")
        return self

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def settings_from_env() -> Settings:
    """Build Settings from the process environment, ignoring unset variables."""

    aliases = {
        field.alias: name
        for name, field in Settings.model_fields.items()
        if field.alias
    }
    values = {alias: os.environ[alias] for alias in aliases if alias in os.environ}
    return Settings(**values)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return settings_from_env()
