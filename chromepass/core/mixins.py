"""Columns shared by the Chrome Pass tables."""

from datetime import UTC, datetime

from sqlalchemy import text
from sqlmodel import Field


def utc_now() -> datetime:
    """Return current UTC time without microseconds."""
    return datetime.now(UTC).replace(microsecond=0)


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamps.

    Usage:
        class Team(TimestampMixin, SQLModel, table=True):
            id: int | None = Field(default=None, primary_key=True)
            name: str
    """

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={
            "server_default": text("CURRENT_TIMESTAMP"),
            "onupdate": utc_now,
        },
    )


class SoftDeleteMixin:
    """Mixin for rows that are deactivated instead of deleted.

    Rows with ``is_active`` False are hidden from default listings.
    """

    is_active: bool = Field(default=True, index=True)


class OwnedMixin:
    """Mixin for resources that record their creator."""

    created_by_id: int | None = Field(
        default=None, foreign_key="cp_users.id", index=True
    )
