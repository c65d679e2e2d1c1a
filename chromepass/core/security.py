"""Password hashing and bearer token helpers.

Passwords are hashed with bcrypt; access tokens are HS256 JWTs carrying the
user id in ``sub``.
"""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime

import bcrypt
import jwt

from chromepass.core.settings import Settings, get_settings

# bcrypt only looks at the first 72 bytes of a password.
_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class TokenClaims:
    """Decoded access token claims."""

    user_id: int
    expires_at: datetime


class TokenError(Exception):
    """Raised when a token cannot be decoded or is expired."""


def hash_password(raw_password: str, rounds: int | None = None) -> str:
    """Hash a plaintext password using bcrypt."""
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(raw_password.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode(
        "utf-8"
    )


def verify_password(raw_password: str, hashed_password: str) -> bool:
    """Verify that a raw password matches its hashed stored version."""
    try:
        return bcrypt.checkpw(
            raw_password.encode("utf-8")[:_BCRYPT_MAX_BYTES],
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def create_access_token(
    user_id: int,
    settings: Settings | None = None,
    extra_claims: dict[str, object] | None = None,
) -> str:
    """Create a signed access token for ``user_id``."""
    settings = settings or get_settings()
    now = datetime.now(UTC)
    payload: dict[str, object] = {
        **(extra_claims or {}),
        "sub": str(user_id),
        "iat": now,
        "exp": now + settings.jwt_expires_in,
    }
    return jwt.encode(
        payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str, settings: Settings | None = None) -> TokenClaims:
    """Decode and validate an access token.

    Raises:
        TokenError: If the token is malformed, badly signed or expired.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise TokenError("Invalid token subject") from e

    return TokenClaims(
        user_id=user_id,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )


def generate_verification_token() -> str:
    """Random token for e-mail verification links."""
    return secrets.token_hex(32)
