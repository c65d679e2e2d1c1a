"""Password login and bearer token issuance."""

import logging
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from chromepass.auth.exceptions import DashboardAccessError, InvalidCredentialsError
from chromepass.auth.schemas import LoginResponse, LoginUser
from chromepass.core.deps import SessionDep, SettingsDep
from chromepass.core.mixins import utc_now
from chromepass.core.security import create_access_token, verify_password
from chromepass.core.settings import Settings, get_settings
from chromepass.user.exceptions import EmailNotVerifiedError, UserInactiveError
from chromepass.user.models import User, UserState
from chromepass.user.repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: Session, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.users = UserRepository(session)

    def authenticate(self, email: str, password: str) -> User:
        """Check a password login.

        The password is checked first so that account state is only
        revealed to someone who knows it.

        Raises:
            InvalidCredentialsError: Unknown e-mail or wrong password
            EmailNotVerifiedError: E-mail not verified yet
            UserInactiveError: Account pending, blocked or trashed
        """
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        if not user.email_verified:
            raise EmailNotVerifiedError()
        if user.state == UserState.pending:
            raise UserInactiveError("Account is pending admin approval")
        if not user.is_active:
            raise UserInactiveError()
        return user

    def login(self, email: str, password: str, *, admin_only: bool) -> LoginResponse:
        """Authenticate and issue an access token.

        ``admin_only`` is set for the dashboard login, which regular users
        may not use.
        """
        user = self.authenticate(email, password)
        if admin_only and not user.is_admin:
            raise DashboardAccessError()

        user.last_login = utc_now()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)

        token = create_access_token(
            user.id,  # type: ignore[arg-type]
            self.settings,
            extra_claims={"email": user.email, "role": int(user.role)},
        )
        logger.info("User logged in", extra={"user_id": user.id})
        return LoginResponse(token=token, user=LoginUser.model_validate(user))


def get_auth_service(session: SessionDep, settings: SettingsDep) -> AuthService:
    return AuthService(session, settings)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
