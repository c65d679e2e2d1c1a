"""Team domain models.

Teams are stored in ``cp_groups``; membership lives in the ``cp_user_groups``
join table.
"""

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from chromepass.core.mixins import OwnedMixin, SoftDeleteMixin, TimestampMixin


class Team(TimestampMixin, SoftDeleteMixin, OwnedMixin, SQLModel, table=True):
    __tablename__: str = "cp_groups"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=100)
    description: str | None = Field(default=None)


class TeamMember(TimestampMixin, SQLModel, table=True):
    """Membership of a user in a team."""

    __tablename__: str = "cp_user_groups"
    __table_args__ = (UniqueConstraint("user_id", "group_id"),)

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="cp_users.id", index=True)
    group_id: int = Field(foreign_key="cp_groups.id", index=True)
