"""Who is calling: bearer token to ``User``.

The token only names the user; state and verification are re-read from the
database on every request, so blocking a user takes effect immediately.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chromepass.auth.exceptions import (
    AdminRequiredError,
    InvalidTokenError,
    NotAuthenticatedError,
)
from chromepass.core.deps import SessionDep, SettingsDep
from chromepass.core.security import TokenError, decode_access_token
from chromepass.user.exceptions import EmailNotVerifiedError, UserInactiveError
from chromepass.user.models import User
from chromepass.user.repository import UserRepository

security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    session: SessionDep,
    settings: SettingsDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ] = None,
) -> User:
    """Verify the bearer token and return the acting user.

    Raises:
        NotAuthenticatedError: If no bearer token was sent
        InvalidTokenError: If the token is invalid, expired or its user is gone
        EmailNotVerifiedError: If the user has not verified their e-mail
        UserInactiveError: If the user is not in the active state
    """
    if credentials is None:
        raise NotAuthenticatedError()

    try:
        claims = decode_access_token(credentials.credentials, settings)
    except TokenError as e:
        raise InvalidTokenError() from e

    user = UserRepository(session).get(claims.user_id)
    if user is None:
        raise InvalidTokenError()

    if not user.email_verified:
        raise EmailNotVerifiedError("Email not verified")

    if not user.is_active:
        raise UserInactiveError()

    request.state.user_id = user.id
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_auth(_user: CurrentUserDep) -> None:
    """Router-level guard: any active, verified user."""


def get_admin_user(user: CurrentUserDep) -> User:
    """Verify the current user has admin privileges.

    Raises:
        AdminRequiredError: If user is not an admin
    """
    if not user.is_admin:
        raise AdminRequiredError()
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def require_admin(_user: AdminUserDep) -> None:
    """Router-level guard: administrators only."""
