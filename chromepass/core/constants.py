"""Route prefixes, OpenAPI error descriptions and the e-mail template loader."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape


@dataclass(frozen=True)
class RouteConfig:
    prefix: str
    tag: str


class Routes:
    AUTH = RouteConfig(prefix="/auth", tag="auth")
    USER = RouteConfig(prefix="/users", tag="users")
    TEAM = RouteConfig(prefix="/teams", tag="teams")
    PROJECT = RouteConfig(prefix="/projects", tag="projects")
    CREDENTIAL = RouteConfig(prefix="/credentials", tag="credentials")
    HEALTH = RouteConfig(prefix="/health", tag="health")


def _documented(status_code: int, description: str) -> dict[int, dict[str, Any]]:
    return {status_code: {"description": description}}


class CommonResponses:
    """Error responses shared by many routes, for the OpenAPI schema.

    Combine them with ``{**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST}``.
    """

    BAD_REQUEST = _documented(400, "Rule violation, duplicate name or bad input")
    UNAUTHORIZED = _documented(401, "Missing, invalid or expired bearer token")
    FORBIDDEN = _documented(403, "Account not active or verified, or not allowed")
    NOT_FOUND = _documented(404, "Unknown or deleted resource")
    RATE_LIMITED = _documented(429, "Too many attempts, see retry_after")


EMAIL_TEMPLATES_DIR = Path(__file__).parent.parent / "templates" / "emails"

email_templates = Environment(
    loader=FileSystemLoader(str(EMAIL_TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)
