"""Tests for chromepass/core/exception_handlers.py."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from chromepass.core.exception_handlers import register_exception_handlers
from chromepass.core.exceptions import DuplicateNameError, RateLimitError
from chromepass.core.settings import Settings


@pytest.fixture
def error_client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/duplicate")
    def duplicate():
        raise DuplicateNameError("team", "Dev")

    @app.get("/limited")
    def limited():
        raise RateLimitError(retry_after=12)

    @app.get("/integrity")
    def integrity():
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    @app.get("/boom")
    def boom():
        raise RuntimeError("database exploded")

    return TestClient(app, raise_server_exceptions=False)


def test_app_exception_extra_fields(error_client: TestClient):
    response = error_client.get("/duplicate")

    assert response.status_code == 400
    assert response.json() == {
        "type": "duplicate_name",
        "message": "A team with a similar name already exists",
        "duplicate": "Dev",
        "suggestion": 'Consider using a different name. Similar team: "Dev"',
    }


def test_rate_limit_sets_retry_after_header(error_client: TestClient):
    response = error_client.get("/limited")

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "12"
    assert response.json()["retry_after"] == 12


def test_integrity_error_is_conflict(error_client: TestClient):
    response = error_client.get("/integrity")

    assert response.status_code == 400
    assert response.json()["type"] == "conflict"


def test_unknown_route(error_client: TestClient):
    response = error_client.get("/missing")

    assert response.status_code == 404
    assert response.json() == {"type": "http_error", "message": "Not Found"}


def test_unhandled_error_hides_detail_outside_development(error_client: TestClient):
    with patch(
        "chromepass.core.exception_handlers.get_settings",
        return_value=Settings(env_name="production"),
    ):
        response = error_client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "type": "internal_error",
        "message": "An unexpected error occurred",
    }


def test_unhandled_error_detail_in_development(error_client: TestClient):
    with patch(
        "chromepass.core.exception_handlers.get_settings",
        return_value=Settings(env_name="development"),
    ):
        response = error_client.get("/boom")

    assert response.status_code == 500
    assert response.json()["error"] == "database exploded"
