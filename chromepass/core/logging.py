"""Logging setup.

Everything goes to stdout through one console handler so container logs and
Uvicorn output end up in the same stream. ``LOG_JSON`` switches that handler
to one JSON object per line; the request, user and resource ids that
services pass through ``extra=`` become top-level fields there.
"""

import json
import logging
import logging.config
import sys
from datetime import UTC, datetime
from typing import Any

from chromepass.core.settings import Settings, get_settings

# Fields copied from ``extra=`` into JSON records.
CONTEXT_FIELDS = (
    "method",
    "path",
    "query",
    "status_code",
    "duration_ms",
    "client_ip",
    "error_type",
    "user_id",
    "actor_id",
    "team_id",
    "project_id",
    "credential_id",
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (field, getattr(record, field))
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """``dictConfig`` mapping for ``settings``.

    Uvicorn's access log is muted while the request logging middleware is
    on, otherwise every request would be logged twice.
    """
    level = settings.log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s"},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "json" if settings.log_json else "text",
            }
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {
            "uvicorn": {"level": level},
            "uvicorn.access": {
                "level": "WARNING" if settings.log_requests else "INFO"
            },
            "sqlalchemy.engine": {"level": "INFO" if settings.log_sql else "WARNING"},
        },
    }


def configure_logging(settings: Settings | None = None) -> None:
    logging.config.dictConfig(build_logging_config(settings or get_settings()))
