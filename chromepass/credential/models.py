"""Credential domain models.

Credential passwords are stored as entered (no field-level encryption);
the extension needs the clear value to fill login forms.
"""

from datetime import datetime

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field, SQLModel

from chromepass.core.mixins import OwnedMixin, SoftDeleteMixin, TimestampMixin


class Credential(TimestampMixin, SoftDeleteMixin, OwnedMixin, SQLModel, table=True):
    __tablename__: str = "cp_credentials"

    id: int | None = Field(default=None, primary_key=True)
    label: str = Field(max_length=255)
    url: str = Field(max_length=2048, index=True)
    url_pattern: str | None = Field(default=None, max_length=2048)
    username: str = Field(max_length=255)
    password: str = Field(max_length=1024)
    description: str | None = Field(default=None, sa_type=Text)
    project_id: int | None = Field(
        default=None, foreign_key="cp_projects.id", index=True
    )
    last_used: datetime | None = Field(default=None)
    use_count: int = Field(default=0)


class CredentialUser(TimestampMixin, SQLModel, table=True):
    """Direct grant of a credential to a user."""

    __tablename__: str = "cp_credential_users"
    __table_args__ = (UniqueConstraint("credential_id", "user_id"),)

    id: int | None = Field(default=None, primary_key=True)
    credential_id: int = Field(foreign_key="cp_credentials.id", index=True)
    user_id: int = Field(foreign_key="cp_users.id", index=True)


class CredentialTeam(TimestampMixin, SQLModel, table=True):
    """Grant of a credential to every member of a team."""

    __tablename__: str = "cp_credential_groups"
    __table_args__ = (UniqueConstraint("credential_id", "group_id"),)

    id: int | None = Field(default=None, primary_key=True)
    credential_id: int = Field(foreign_key="cp_credentials.id", index=True)
    group_id: int = Field(foreign_key="cp_groups.id", index=True)
