"""Direct and team grants on credentials and projects.

Credentials and projects share the same shape: a resource table plus one
join table granting it to users and one granting it to teams. ``GrantTables``
names those three tables so the queries below are written once.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import InstrumentedAttribute
from sqlmodel import Session, SQLModel, col, select

from chromepass.credential.models import Credential, CredentialTeam, CredentialUser
from chromepass.project.models import Project, ProjectTeam, ProjectUser
from chromepass.team.models import Team
from chromepass.user.models import User


@dataclass(frozen=True)
class GrantTables:
    resource: type[SQLModel]
    user_grant: type[SQLModel]
    team_grant: type[SQLModel]
    resource_key: str

    def user_grant_key(self) -> InstrumentedAttribute[Any]:
        return getattr(self.user_grant, self.resource_key)

    def team_grant_key(self) -> InstrumentedAttribute[Any]:
        return getattr(self.team_grant, self.resource_key)


CREDENTIAL_GRANTS = GrantTables(
    resource=Credential,
    user_grant=CredentialUser,
    team_grant=CredentialTeam,
    resource_key="credential_id",
)
PROJECT_GRANTS = GrantTables(
    resource=Project,
    user_grant=ProjectUser,
    team_grant=ProjectTeam,
    resource_key="project_id",
)


class GrantRepository:
    """Join-table queries for one kind of resource."""

    def __init__(self, session: Session, tables: GrantTables):
        self.session = session
        self.tables = tables

    # Direct (user) grants

    def get_user_grant(self, resource_id: int, user_id: int) -> Any | None:
        grant = self.tables.user_grant
        return self.session.exec(
            select(grant).where(
                self.tables.user_grant_key() == resource_id,
                col(grant.user_id) == user_id,  # type: ignore[attr-defined]
            )
        ).first()

    def add_user_grant(self, resource_id: int, user_id: int) -> Any:
        row = self.tables.user_grant(
            **{self.tables.resource_key: resource_id, "user_id": user_id}
        )
        self.session.add(row)
        return row

    def direct_users(self, resource_id: int) -> list[User]:
        """Users granted the resource directly, in grant order."""
        grant = self.tables.user_grant
        return list(
            self.session.exec(
                select(User)
                .join(grant, col(grant.user_id) == col(User.id))  # type: ignore[attr-defined]
                .where(self.tables.user_grant_key() == resource_id)
                .order_by(col(grant.created_at), col(grant.id))  # type: ignore[attr-defined]
            )
        )

    def resource_ids_for_user(self, user_id: int) -> set[int]:
        grant = self.tables.user_grant
        return set(
            self.session.exec(
                select(self.tables.user_grant_key()).where(
                    col(grant.user_id) == user_id  # type: ignore[attr-defined]
                )
            )
        )

    def user_grants_for_user(self, user_id: int) -> list[Any]:
        grant = self.tables.user_grant
        return list(
            self.session.exec(
                select(grant)
                .where(col(grant.user_id) == user_id)  # type: ignore[attr-defined]
                .order_by(col(grant.created_at), col(grant.id))  # type: ignore[attr-defined]
            )
        )

    def replace_user_grants(self, resource_id: int, user_ids: Iterable[int]) -> None:
        self._delete_all(self.tables.user_grant, self.tables.user_grant_key(), resource_id)
        for user_id in dict.fromkeys(user_ids):
            self.add_user_grant(resource_id, user_id)

    # Team grants

    def get_team_grant(self, resource_id: int, team_id: int) -> Any | None:
        grant = self.tables.team_grant
        return self.session.exec(
            select(grant).where(
                self.tables.team_grant_key() == resource_id,
                col(grant.group_id) == team_id,  # type: ignore[attr-defined]
            )
        ).first()

    def add_team_grant(self, resource_id: int, team_id: int) -> Any:
        row = self.tables.team_grant(
            **{self.tables.resource_key: resource_id, "group_id": team_id}
        )
        self.session.add(row)
        return row

    def teams(self, resource_id: int) -> list[Team]:
        """Active teams granted the resource, in grant order."""
        grant = self.tables.team_grant
        return list(
            self.session.exec(
                select(Team)
                .join(grant, col(grant.group_id) == col(Team.id))  # type: ignore[attr-defined]
                .where(self.tables.team_grant_key() == resource_id, Team.is_active)
                .order_by(col(grant.created_at), col(grant.id))  # type: ignore[attr-defined]
            )
        )

    def resource_ids_for_teams(self, team_ids: Iterable[int]) -> set[int]:
        ids = list(team_ids)
        if not ids:
            return set()
        grant = self.tables.team_grant
        return set(
            self.session.exec(
                select(self.tables.team_grant_key()).where(
                    col(grant.group_id).in_(ids)  # type: ignore[attr-defined]
                )
            )
        )

    def team_grants_for_teams(self, team_ids: Iterable[int]) -> list[Any]:
        ids = list(team_ids)
        if not ids:
            return []
        grant = self.tables.team_grant
        return list(
            self.session.exec(
                select(grant)
                .where(col(grant.group_id).in_(ids))  # type: ignore[attr-defined]
                .order_by(col(grant.created_at), col(grant.id))  # type: ignore[attr-defined]
            )
        )

    def replace_team_grants(self, resource_id: int, team_ids: Iterable[int]) -> None:
        self._delete_all(self.tables.team_grant, self.tables.team_grant_key(), resource_id)
        for team_id in dict.fromkeys(team_ids):
            self.add_team_grant(resource_id, team_id)

    def remove(self, row: Any) -> None:
        self.session.delete(row)

    def _delete_all(
        self, model: type[SQLModel], key: InstrumentedAttribute[Any], resource_id: int
    ) -> None:
        for row in self.session.exec(select(model).where(key == resource_id)).all():
            self.session.delete(row)
        # Flush now: within one flush SQLAlchemy inserts before it deletes.
        self.session.flush()
