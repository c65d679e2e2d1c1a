"""Who can see which credentials and projects.

Access to a credential or project comes from three places: a direct grant to
the user, a grant to an active team the user belongs to, or having created
it. Inactive rows never surface, whatever the grants say.

Assignee listings carry provenance: each user appears once, tagged
``direct`` or ``team``. A user who is both directly assigned and reachable
through a team is reported as ``direct``; a user reachable only through
several teams is reported through the first team granted.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from sqlmodel import Session, col, select

from chromepass.access.grants import (
    CREDENTIAL_GRANTS,
    PROJECT_GRANTS,
    GrantRepository,
)
from chromepass.credential.matching import matches
from chromepass.credential.models import Credential
from chromepass.credential.repository import CredentialRepository
from chromepass.project.models import Project
from chromepass.project.repository import ProjectRepository
from chromepass.team.models import Team, TeamMember
from chromepass.team.repository import TeamRepository
from chromepass.user.models import User

AssignmentType = Literal["direct", "team"]


@dataclass(frozen=True)
class AssignedUser:
    user: User
    assignment_type: AssignmentType
    team_id: int | None = None
    team_name: str | None = None


@dataclass(frozen=True)
class Assignment:
    """A credential or project reachable by a user, with provenance."""

    resource: Credential | Project
    assignment_type: AssignmentType
    assigned_at: datetime
    team_id: int | None = None
    team_name: str | None = None


@dataclass(frozen=True)
class UserAssignments:
    projects: list[Assignment]
    credentials: list[Assignment]


class AccessResolver:
    def __init__(self, session: Session):
        self.session = session
        self.teams = TeamRepository(session)
        self.credentials = CredentialRepository(session)
        self.projects = ProjectRepository(session)

    def team_ids_for_user(self, user_id: int) -> set[int]:
        """Ids of the active teams ``user_id`` is a member of."""
        return set(
            self.session.exec(
                select(TeamMember.group_id)
                .join(Team, col(Team.id) == col(TeamMember.group_id))
                .where(TeamMember.user_id == user_id, Team.is_active)
            )
        )

    # Accessible sets

    def _accessible_ids(
        self, grants: GrantRepository, user_id: int, team_ids: set[int]
    ) -> set[int]:
        resource = grants.tables.resource
        created = set(
            self.session.exec(
                select(resource.id).where(  # type: ignore[attr-defined]
                    resource.created_by_id == user_id  # type: ignore[attr-defined]
                )
            )
        )
        candidates = (
            grants.resource_ids_for_user(user_id)
            | grants.resource_ids_for_teams(team_ids)
            | created
        )
        if not candidates:
            return set()
        return set(
            self.session.exec(
                select(resource.id).where(  # type: ignore[attr-defined]
                    col(resource.id).in_(candidates),  # type: ignore[attr-defined]
                    resource.is_active,  # type: ignore[attr-defined]
                )
            )
        )

    def accessible_credential_ids(self, user_id: int) -> set[int]:
        """Active credentials granted to, or created by, ``user_id``."""
        return self._accessible_ids(
            self.credentials.grants, user_id, self.team_ids_for_user(user_id)
        )

    def accessible_project_ids(self, user_id: int) -> set[int]:
        """Active projects granted to, or created by, ``user_id``."""
        return self._accessible_ids(
            self.projects.grants, user_id, self.team_ids_for_user(user_id)
        )

    def visible_credentials(
        self,
        user_id: int,
        *,
        project_id: int | None = None,
        search: str | None = None,
    ) -> list[Credential]:
        return self.credentials.list_active(
            ids=self.accessible_credential_ids(user_id),
            project_id=project_id,
            search=search,
        )

    def visible_projects(self, user_id: int) -> list[Project]:
        return self.projects.list_active(ids=self.accessible_project_ids(user_id))

    def can_access_credential(self, user_id: int, credential: Credential) -> bool:
        if not credential.is_active:
            return False
        if credential.created_by_id == user_id:
            return True
        return credential.id in self.accessible_credential_ids(user_id)

    def credentials_for_url(self, user_id: int, url: str) -> list[Credential]:
        """Visible credentials whose url or url pattern matches ``url``."""
        return [
            credential
            for credential in self.visible_credentials(user_id)
            if matches(credential, url)
        ]

    # Provenance

    def _assignees(self, grants: GrantRepository, resource_id: int) -> list[AssignedUser]:
        assignees: dict[int, AssignedUser] = {}
        for user in grants.direct_users(resource_id):
            assignees.setdefault(user.id, AssignedUser(user, "direct"))  # type: ignore[arg-type]
        for team in grants.teams(resource_id):
            for user in self.teams.members(team.id):  # type: ignore[arg-type]
                assignees.setdefault(
                    user.id,  # type: ignore[arg-type]
                    AssignedUser(user, "team", team_id=team.id, team_name=team.name),
                )
        return list(assignees.values())

    def credential_assignees(self, credential_id: int) -> list[AssignedUser]:
        return self._assignees(self.credentials.grants, credential_id)

    def project_assignees(self, project_id: int) -> list[AssignedUser]:
        return self._assignees(self.projects.grants, project_id)

    def _assignments(
        self, grants: GrantRepository, user_id: int, team_ids: set[int]
    ) -> list[Assignment]:
        resource_model = grants.tables.resource
        key = grants.tables.resource_key
        found: dict[int, Assignment] = {}

        for row in grants.user_grants_for_user(user_id):
            resource = self.session.get(resource_model, getattr(row, key))
            if resource is None or not resource.is_active:  # type: ignore[attr-defined]
                continue
            found.setdefault(
                resource.id,  # type: ignore[attr-defined]
                Assignment(resource, "direct", assigned_at=row.created_at),  # type: ignore[arg-type]
            )

        teams = {team.id: team for team in self.teams.get_many_active(list(team_ids))}
        for row in grants.team_grants_for_teams(team_ids):
            resource = self.session.get(resource_model, getattr(row, key))
            team = teams.get(row.group_id)
            if resource is None or team is None or not resource.is_active:  # type: ignore[attr-defined]
                continue
            found.setdefault(
                resource.id,  # type: ignore[attr-defined]
                Assignment(
                    resource,  # type: ignore[arg-type]
                    "team",
                    assigned_at=row.created_at,
                    team_id=team.id,
                    team_name=team.name,
                ),
            )
        return list(found.values())

    def user_assignments(self, user_id: int) -> UserAssignments:
        """Projects and credentials granted to a user, directly or via teams."""
        team_ids = self.team_ids_for_user(user_id)
        return UserAssignments(
            projects=self._assignments(self.projects.grants, user_id, team_ids),
            credentials=self._assignments(self.credentials.grants, user_id, team_ids),
        )
