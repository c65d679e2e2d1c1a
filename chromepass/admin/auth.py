from sqladmin.authentication import AuthenticationBackend
from sqlmodel import Session
from starlette.requests import Request

from chromepass.core.security import verify_password
from chromepass.core.settings import get_settings
from chromepass.db.engine import engine
from chromepass.user.repository import UserRepository


class AdminAuth(AuthenticationBackend):
    """SQLAdmin auth against active admin accounts, using Starlette sessions."""

    def __init__(self) -> None:
        # SQLAdmin uses this secret internally (e.g. login form protection).
        # It must be stable and should match the session middleware secret.
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)

    def _check(self, email: str, password: str) -> int | None:
        with Session(engine) as session:
            user = UserRepository(session).get_by_email(email)
            if (
                user is None
                or not user.is_admin
                or not user.is_active
                or not verify_password(password, user.password_hash)
            ):
                return None
            return user.id

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email = str(form.get("username", form.get("email", ""))).strip()
        password = str(form.get("password", ""))

        user_id = self._check(email, password)
        if user_id is None:
            return False
        request.session["admin_user_id"] = user_id
        return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        user_id = request.session.get("admin_user_id")
        if user_id is None:
            return False
        with Session(engine) as session:
            user = UserRepository(session).get(user_id)
            return user is not None and user.is_admin and user.is_active
