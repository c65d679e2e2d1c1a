"""Credential domain schemas.

Credential reads include the stored password: the extension fills it into
login forms. Only users with access to a credential ever receive it.
"""

from pydantic import Field
from sqlmodel import SQLModel

from chromepass.core.schemas import UtcDatetime
from chromepass.user.schemas import UserSummary


class CredentialCreate(SQLModel):
    """``user_ids`` and ``team_ids`` grant the new credential right away."""

    label: str = Field(min_length=1, max_length=255)
    url: str = Field(min_length=1, max_length=2048)
    url_pattern: str | None = Field(default=None, max_length=2048)
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)
    description: str | None = None
    project_id: int | None = None
    user_ids: list[int] | None = None
    team_ids: list[int] | None = None


class CredentialUpdate(SQLModel):
    """Partial update. ``user_ids`` / ``team_ids`` replace the grant lists."""

    label: str | None = Field(default=None, min_length=1, max_length=255)
    url: str | None = Field(default=None, min_length=1, max_length=2048)
    url_pattern: str | None = Field(default=None, max_length=2048)
    username: str | None = Field(default=None, min_length=1, max_length=255)
    password: str | None = Field(default=None, min_length=1, max_length=1024)
    description: str | None = None
    project_id: int | None = None
    user_ids: list[int] | None = None
    team_ids: list[int] | None = None


class CredentialRead(SQLModel):
    id: int
    label: str
    url: str
    url_pattern: str | None
    username: str
    password: str
    description: str | None
    project_id: int | None
    project_name: str | None = None
    is_active: bool
    created_by_id: int | None
    created_by: UserSummary | None = None
    last_used: UtcDatetime | None
    use_count: int
    created_at: UtcDatetime
    updated_at: UtcDatetime
