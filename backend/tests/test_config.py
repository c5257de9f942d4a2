import logging

import pytest
from pydantic import ValidationError

from timesheet_api.config import Settings, settings_from_env
from timesheet_api.logging import resolve_level, setup_logging


def test_settings_defaults():
    s = Settings()

    assert s.app_env == "development"
    assert s.database_url.startswith("sqlite+aiosqlite://")
    assert s.access_token_expires_minutes == 24 * 60
    assert s.cors_allow_origins == ["*"]
    assert not s.is_production


def test_production_requires_a_real_secret():
    with pytest.raises(ValidationError):
        Settings(app_env="production")
    with pytest.raises(ValidationError):
        Settings(app_env="production", secret_key="")

    s = Settings(app_env="production", secret_key="a-long-random-value")
    assert s.is_production


def test_unknown_environment_is_rejected():
    with pytest.raises(ValidationError):
        Settings(app_env="staging")


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "Production")
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./env.db")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("PORT", "8080")

    s = settings_from_env()
    assert s.app_env == "production"
    assert s.secret_key == "from-env"
    assert s.database_url == "sqlite+aiosqlite:///./env.db"
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.port == 8080


def test_production_env_without_secret_fails_fast(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("JWT_SECRET", raising=False)

    with pytest.raises(ValidationError):
        settings_from_env()


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("WARN") == logging.WARNING
    assert resolve_level(10) == logging.DEBUG
    assert resolve_level("40") == logging.ERROR
    assert resolve_level("nonsense") == logging.INFO


def test_setup_logging_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    setup_logging(None)
    root = logging.getLogger()
    assert root.getEffectiveLevel() == logging.WARNING
    assert len(root.handlers) >= 1

    setup_logging("info")
    assert root.getEffectiveLevel() == logging.INFO
