"""Tests for chromepass/admin/auth.py - SQLAdmin authentication."""

from unittest.mock import MagicMock, patch

import pytest
from sqlmodel import Session

from chromepass.admin.auth import AdminAuth
from chromepass.user.models import User, UserRole, UserState

PASSWORD = "password123"


@pytest.fixture
def admin_auth(session: Session):
    """Create AdminAuth instance bound to the test database."""
    with patch("chromepass.admin.auth.engine", session.get_bind()):
        yield AdminAuth()


@pytest.fixture
def mock_request():
    """Create a mock Starlette request with session."""
    request = MagicMock()
    request.session = {}
    return request


def _form(mock_request, **fields):
    async def mock_form():
        return fields

    mock_request.form = mock_form


@pytest.mark.asyncio
async def test_admin_login_success(admin_auth, mock_request, admin_user: User):
    """Test AdminAuth.login() with an active admin's credentials returns True."""
    _form(mock_request, username=admin_user.email, password=PASSWORD)

    result = await admin_auth.login(mock_request)

    assert result is True
    assert mock_request.session["admin_user_id"] == admin_user.id


@pytest.mark.asyncio
async def test_admin_login_with_email_field(admin_auth, mock_request, admin_user: User):
    """Test AdminAuth.login() falls back to email field."""
    _form(mock_request, email=admin_user.email, password=PASSWORD)

    assert await admin_auth.login(mock_request) is True


@pytest.mark.asyncio
async def test_admin_login_invalid_password(admin_auth, mock_request, admin_user: User):
    """Test AdminAuth.login() with invalid password returns False."""
    _form(mock_request, username=admin_user.email, password="wrong")

    result = await admin_auth.login(mock_request)

    assert result is False
    assert "admin_user_id" not in mock_request.session


@pytest.mark.asyncio
async def test_admin_login_regular_user(admin_auth, mock_request, test_user: User):
    """Test AdminAuth.login() rejects users without the admin role."""
    _form(mock_request, username=test_user.email, password=PASSWORD)

    assert await admin_auth.login(mock_request) is False


@pytest.mark.asyncio
async def test_admin_login_blocked_admin(admin_auth, mock_request, make_user):
    blocked = make_user("blocked@example.com", role=UserRole.admin, state=UserState.blocked)
    _form(mock_request, username=blocked.email, password=PASSWORD)

    assert await admin_auth.login(mock_request) is False


@pytest.mark.asyncio
async def test_admin_logout(admin_auth, mock_request):
    """Test AdminAuth.logout() clears session and returns True."""
    mock_request.session = {"admin_user_id": 1}

    result = await admin_auth.logout(mock_request)

    assert result is True
    assert mock_request.session == {}


@pytest.mark.asyncio
async def test_admin_authenticate(admin_auth, mock_request, admin_user: User):
    """Test AdminAuth.authenticate() accepts a session for an active admin."""
    mock_request.session = {"admin_user_id": admin_user.id}

    assert await admin_auth.authenticate(mock_request) is True


@pytest.mark.asyncio
async def test_admin_authenticate_without_session(admin_auth, mock_request):
    assert await admin_auth.authenticate(mock_request) is False


@pytest.mark.asyncio
async def test_admin_authenticate_revoked_admin(
    admin_auth, mock_request, admin_user: User, session: Session
):
    """A session stops working once the admin is blocked."""
    mock_request.session = {"admin_user_id": admin_user.id}
    admin_user.state = UserState.blocked
    session.add(admin_user)
    session.commit()

    assert await admin_auth.authenticate(mock_request) is False
