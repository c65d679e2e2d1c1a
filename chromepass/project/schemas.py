"""Project domain schemas."""

from pydantic import BaseModel, Field
from sqlmodel import SQLModel

from chromepass.core.schemas import UtcDatetime
from chromepass.user.schemas import UserSummary


class ProjectCreate(SQLModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None


class ProjectUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    is_active: bool | None = None


class ProjectRead(SQLModel):
    id: int
    name: str
    description: str | None
    is_active: bool
    created_by_id: int | None
    created_by: UserSummary | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    credentials_count: int = 0
    user_count: int = 0


class ProjectRef(BaseModel):
    """Project id and name, as used by credential filters."""

    id: int
    name: str
