"""Tests for chromepass/core/cors.py - CORS middleware configuration."""

from unittest.mock import MagicMock, patch

from chromepass.core.cors import add_cors_middleware
from chromepass.core.settings import Settings, get_settings


def test_add_cors_middleware_with_wildcard():
    """Test a wildcard origin disables credentialed requests."""
    mock_app = MagicMock()
    settings = Settings(cors_origins="*")

    with patch("chromepass.core.cors.get_settings", return_value=settings):
        add_cors_middleware(mock_app)

    mock_app.add_middleware.assert_called_once()
    call_kwargs = mock_app.add_middleware.call_args[1]
    assert call_kwargs["allow_origins"] == ["*"]
    assert call_kwargs["allow_credentials"] is False
    assert call_kwargs["allow_methods"] == ["*"]
    assert call_kwargs["allow_headers"] == ["*"]


def test_add_cors_middleware_with_explicit_origins():
    """Test explicit origins allow credentials."""
    mock_app = MagicMock()
    settings = Settings(cors_origins="http://localhost:3000, chrome-extension://abc")

    with patch("chromepass.core.cors.get_settings", return_value=settings):
        add_cors_middleware(mock_app)

    call_kwargs = mock_app.add_middleware.call_args[1]
    assert call_kwargs["allow_origins"] == [
        "http://localhost:3000",
        "chrome-extension://abc",
    ]
    assert call_kwargs["allow_credentials"] is True


def test_cors_origins_list_parsing():
    """Test that Settings.cors_origins_list correctly parses CORS origins."""
    settings = get_settings()

    assert isinstance(settings.cors_origins_list, list)

    for origin in settings.cors_origins_list:
        assert isinstance(origin, str)
        assert origin.strip() == origin
        assert len(origin) > 0


def test_cors_origins_list_skips_empty_entries():
    settings = Settings(cors_origins="http://a.test,, ,http://b.test,")
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
