import jwt
import pytest

from timesheet_api.models import User
from timesheet_api.security import (
    decode_access_token,
    hash_password,
    issue_access_token,
    verify_password,
)


def test_hash_is_salted_bcrypt_at_cost_ten():
    first = hash_password("secret123")
    second = hash_password("secret123")

    assert first.startswith("$2b$10$")
    assert first != second
    assert "secret123" not in first
    assert verify_password("secret123", first)
    assert verify_password("secret123", second)
    assert not verify_password("secret124", first)


def test_empty_hash_never_verifies():
    assert not verify_password("anything", "")


def test_token_round_trip(settings):
    user = User(id=7, username="alice", email="a@x.com")
    token = issue_access_token(user, settings)

    claims = decode_access_token(token, settings)
    assert (claims.id, claims.username, claims.email) == (7, "alice", "a@x.com")


def test_token_rejected_under_another_secret(settings):
    user = User(id=7, username="alice", email="a@x.com")
    token = issue_access_token(user, settings)

    other = settings.model_copy(update={"secret_key": "rotated"})
    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(token, other)


def test_token_expires_after_window(settings):
    user = User(id=7, username="alice", email="a@x.com")
    expired_settings = settings.model_copy(update={"access_token_expires_minutes": -1})
    token = issue_access_token(user, expired_settings)

    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token, settings)
