"""Schemas for grants and provenance listings."""

from typing import Literal

from pydantic import BaseModel, EmailStr

from chromepass.access.resolver import AssignedUser, Assignment, UserAssignments
from chromepass.core.schemas import UtcDatetime


class UserAssignmentRequest(BaseModel):
    user_id: int


class TeamAssignmentRequest(BaseModel):
    team_id: int


class AssignedUserRead(BaseModel):
    """A user with access to a resource and where the access comes from."""

    id: int
    email: EmailStr
    first_name: str
    last_name: str
    assignment_type: Literal["direct", "team"]
    team_id: int | None = None
    team_name: str | None = None

    @classmethod
    def from_assigned(cls, assigned: AssignedUser) -> "AssignedUserRead":
        user = assigned.user
        return cls(
            id=user.id,  # type: ignore[arg-type]
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            assignment_type=assigned.assignment_type,
            team_id=assigned.team_id,
            team_name=assigned.team_name,
        )


class AssignedTeamRead(BaseModel):
    id: int
    name: str
    description: str | None = None


class _AssignmentRead(BaseModel):
    id: int
    description: str | None = None
    assignment_type: Literal["direct", "team"]
    team_id: int | None = None
    team_name: str | None = None
    assigned_at: UtcDatetime


class ProjectAssignmentRead(_AssignmentRead):
    name: str

    @classmethod
    def from_assignment(cls, assignment: Assignment) -> "ProjectAssignmentRead":
        project = assignment.resource
        return cls(
            id=project.id,  # type: ignore[arg-type]
            name=project.name,  # type: ignore[union-attr]
            description=project.description,
            assignment_type=assignment.assignment_type,
            team_id=assignment.team_id,
            team_name=assignment.team_name,
            assigned_at=assignment.assigned_at,
        )


class CredentialAssignmentRead(_AssignmentRead):
    label: str
    url: str
    project_id: int | None = None
    last_used: UtcDatetime | None = None
    use_count: int = 0

    @classmethod
    def from_assignment(cls, assignment: Assignment) -> "CredentialAssignmentRead":
        credential = assignment.resource
        return cls(
            id=credential.id,  # type: ignore[arg-type]
            label=credential.label,  # type: ignore[union-attr]
            url=credential.url,  # type: ignore[union-attr]
            description=credential.description,
            project_id=credential.project_id,  # type: ignore[union-attr]
            last_used=credential.last_used,  # type: ignore[union-attr]
            use_count=credential.use_count,  # type: ignore[union-attr]
            assignment_type=assignment.assignment_type,
            team_id=assignment.team_id,
            team_name=assignment.team_name,
            assigned_at=assignment.assigned_at,
        )


class UserAssignmentsRead(BaseModel):
    projects: list[ProjectAssignmentRead]
    credentials: list[CredentialAssignmentRead]


def assignments_response(assignments: UserAssignments) -> UserAssignmentsRead:
    return UserAssignmentsRead(
        projects=[ProjectAssignmentRead.from_assignment(a) for a in assignments.projects],
        credentials=[
            CredentialAssignmentRead.from_assignment(a)
            for a in assignments.credentials
        ],
    )
