"""Tests for chromepass/core/security.py - hashing and bearer tokens."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from chromepass.core.security import (
    TokenError,
    create_access_token,
    decode_access_token,
    generate_verification_token,
    hash_password,
    verify_password,
)
from chromepass.core.settings import Settings


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    return Settings(jwt_secret_key="unit-test-secret", bcrypt_rounds=4)


def test_hash_and_verify_password():
    hashed = hash_password("s3cret!", rounds=4)

    assert hashed != "s3cret!"
    assert hashed.startswith("$2")
    assert verify_password("s3cret!", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_verify_password_with_non_bcrypt_value():
    assert verify_password("anything", "not-a-hash") is False


def test_access_token_round_trip(settings: Settings):
    token = create_access_token(42, settings, extra_claims={"role": 1})

    claims = decode_access_token(token, settings)

    assert claims.user_id == 42
    assert claims.expires_at > datetime.now(UTC)
    payload = jwt.decode(token, "unit-test-secret", algorithms=["HS256"])
    assert payload["role"] == 1
    assert payload["sub"] == "42"


def test_decode_rejects_wrong_secret(settings: Settings):
    token = create_access_token(1, Settings(jwt_secret_key="another-secret"))

    with pytest.raises(TokenError):
        decode_access_token(token, settings)


def test_decode_rejects_expired_token(settings: Settings):
    now = datetime.now(UTC)
    token = jwt.encode(
        {"sub": "1", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
        "unit-test-secret",
        algorithm="HS256",
    )

    with pytest.raises(TokenError, match="expired"):
        decode_access_token(token, settings)


def test_decode_rejects_non_numeric_subject(settings: Settings):
    token = jwt.encode(
        {"sub": "abc", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        "unit-test-secret",
        algorithm="HS256",
    )

    with pytest.raises(TokenError):
        decode_access_token(token, settings)


def test_decode_rejects_garbage(settings: Settings):
    with pytest.raises(TokenError):
        decode_access_token("not.a.token", settings)


def test_generate_verification_token():
    token = generate_verification_token()

    assert len(token) == 64
    assert token != generate_verification_token()
