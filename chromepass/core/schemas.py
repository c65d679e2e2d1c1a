"""Schema building blocks shared by every domain."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BaseModel, PlainSerializer


def format_utc(value: datetime) -> str:
    """Format datetime as ISO 8601 string in UTC.

    Converts datetime to UTC timezone and formats with Z suffix
    (e.g. 2026-01-19T12:34:56Z).
    """
    # Convert to UTC if timezone-aware, otherwise assume UTC
    if value.tzinfo is not None:
        utc_value = value.astimezone(UTC)
    else:
        # Naive datetime - assume it's already UTC (from TimestampMixin)
        utc_value = value.replace(tzinfo=UTC)

    return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


UtcDatetime = Annotated[datetime, PlainSerializer(format_utc, return_type=str)]


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
