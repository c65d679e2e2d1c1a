import inspect
import os

# Keep bcrypt fast and outgoing e-mail off for the whole test run.
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("RESEND_API_KEY", None)

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

import chromepass.models  # noqa: E402, F401
from chromepass.core.rate_limit import auth_rate_limiter  # noqa: E402
from chromepass.core.security import create_access_token, hash_password  # noqa: E402
from chromepass.core.settings import Settings, get_settings  # noqa: E402
from chromepass.db.engine import get_session  # noqa: E402
from chromepass.main import app  # noqa: E402
from chromepass.user.models import User, UserRole, UserState  # noqa: E402

TEST_PASSWORD = "password123"


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    auth_rate_limiter.reset()
    yield
    auth_rate_limiter.reset()


@pytest.fixture(name="session")
def session_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session):
    """Factory creating users straight in the database."""

    def _make_user(
        email: str,
        *,
        role: UserRole = UserRole.user,
        state: UserState = UserState.active,
        email_verified: bool = True,
        first_name: str = "Test",
        last_name: str = "User",
        password: str = TEST_PASSWORD,
    ) -> User:
        user = User(
            email=email,
            password_hash=hash_password(password, rounds=4),
            first_name=first_name,
            last_name=last_name,
            role=role,
            state=state,
            email_verified=email_verified,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture(name="admin_user")
def admin_user_fixture(make_user) -> User:
    return make_user("admin@example.com", role=UserRole.admin, first_name="Admin")


@pytest.fixture(name="test_user")
def test_user_fixture(make_user) -> User:
    return make_user("test@example.com")


@pytest.fixture(name="other_user")
def other_user_fixture(make_user) -> User:
    return make_user("other@example.com", first_name="Other")


@pytest.fixture(name="mock_settings")
def mock_settings_fixture():
    """Create mock settings."""
    return Settings(
        env_name="test",
        database_url="sqlite://",
        jwt_secret_key="test-jwt-secret",
        session_secret_key="test-secret-key",
        bcrypt_rounds=4,
        rate_limit_enabled=True,
        auth_rate_limit=20,
    )


@pytest.fixture(name="auth_headers")
def auth_headers_fixture(mock_settings: Settings):
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(user.id, mock_settings)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture(name="app_overrides")
def app_overrides_fixture(session: Session, mock_settings: Settings):
    """Point the app at the test database and settings."""

    def get_session_override():
        return session

    def get_settings_override():
        return mock_settings

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_settings] = get_settings_override
    yield
    app.dependency_overrides.clear()


@pytest.fixture(name="unauthenticated_client")
def unauthenticated_client_fixture(app_overrides):
    """Create a test client without credentials (for testing auth failures)."""
    return TestClient(app)


@pytest.fixture(name="client")
def client_fixture(app_overrides, test_user: User, auth_headers):
    """Test client authenticated as a regular user."""
    return TestClient(app, headers=auth_headers(test_user))


@pytest.fixture(name="admin_client")
def admin_client_fixture(app_overrides, admin_user: User, auth_headers):
    """Test client authenticated as an admin."""
    return TestClient(app, headers=auth_headers(admin_user))


@pytest.fixture(name="client_for")
def client_for_fixture(app_overrides, auth_headers):
    """Build a test client authenticated as any user."""

    def _client_for(user: User) -> TestClient:
        return TestClient(app, headers=auth_headers(user))

    return _client_for
