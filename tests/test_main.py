"""Tests for chromepass/main.py - Application lifespan and initialization."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI

from chromepass.core.settings import Settings
from chromepass.main import app, lifespan


@pytest.mark.asyncio
async def test_lifespan_initialization():
    """Test lifespan context manager initializes the database and Resend."""
    mock_app = FastAPI()

    with (
        patch("chromepass.main.init_db") as mock_init_db,
        patch("chromepass.main.init_resend") as mock_resend,
    ):
        async with lifespan(mock_app):
            mock_init_db.assert_called_once()
            mock_resend.assert_called_once()


@pytest.mark.asyncio
async def test_lifespan_warns_on_default_secret_outside_development(caplog):
    """Test lifespan logs a warning when production runs with default secrets."""
    mock_app = FastAPI()
    production = Settings(env_name="production")

    with (
        patch("chromepass.main.get_settings", return_value=production),
        patch("chromepass.main.init_db"),
        patch("chromepass.main.init_resend"),
        caplog.at_level("WARNING", logger="chromepass.main"),
    ):
        async with lifespan(mock_app):
            pass

    assert "Default secret key in use outside development" in caplog.text


def test_routers_are_mounted():
    """Test every domain router is reachable from the application."""
    paths = {route.path for route in app.routes}

    assert "/health" in paths
    assert "/auth/login" in paths
    assert "/auth/extension-login" in paths
    assert "/users" in paths
    assert "/teams" in paths
    assert "/projects" in paths
    assert "/credentials" in paths
    assert "/credentials/for-url" in paths
