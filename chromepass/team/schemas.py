"""Team domain schemas."""

from pydantic import BaseModel, Field
from sqlmodel import SQLModel

from chromepass.core.schemas import MessageResponse, UtcDatetime
from chromepass.user.schemas import UserSummary


class TeamCreate(SQLModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    member_ids: list[int] | None = None


class TeamUpdate(SQLModel):
    """Partial team update. ``member_ids`` replaces the whole member list."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    member_ids: list[int] | None = None


class TeamRead(SQLModel):
    id: int
    name: str
    description: str | None
    is_active: bool
    created_by_id: int | None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    user_count: int
    members: list[UserSummary]


class TeamMemberRequest(BaseModel):
    user_id: int


class TeamMembersRequest(BaseModel):
    user_ids: list[int] = Field(min_length=1)


class BatchAddResponse(MessageResponse):
    added: int
    already_members: int
    team: TeamRead


class BatchRemoveResponse(MessageResponse):
    removed: int
    team: TeamRead


class MyTeamRead(BaseModel):
    """A team the current user belongs to."""

    id: int
    name: str
    description: str | None
    joined_at: UtcDatetime
