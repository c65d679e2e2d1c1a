"""Project domain models."""

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from chromepass.core.mixins import OwnedMixin, SoftDeleteMixin, TimestampMixin


class Project(TimestampMixin, SoftDeleteMixin, OwnedMixin, SQLModel, table=True):
    __tablename__: str = "cp_projects"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=100)
    description: str | None = Field(default=None)


class ProjectUser(TimestampMixin, SQLModel, table=True):
    """Direct grant of a project to a user."""

    __tablename__: str = "cp_project_users"
    __table_args__ = (UniqueConstraint("project_id", "user_id"),)

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="cp_projects.id", index=True)
    user_id: int = Field(foreign_key="cp_users.id", index=True)


class ProjectTeam(TimestampMixin, SQLModel, table=True):
    """Grant of a project to every member of a team."""

    __tablename__: str = "cp_project_groups"
    __table_args__ = (UniqueConstraint("project_id", "group_id"),)

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="cp_projects.id", index=True)
    group_id: int = Field(foreign_key="cp_groups.id", index=True)
