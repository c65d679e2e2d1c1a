"""Grant and revoke access to a credential or project."""

import logging
from collections.abc import Iterable

from sqlmodel import Session

from chromepass.access.exceptions import AlreadyAssignedError, AssignmentNotFoundError
from chromepass.access.grants import GrantRepository
from chromepass.team.exceptions import TeamNotFoundError
from chromepass.team.repository import TeamRepository
from chromepass.user.exceptions import UserNotFoundError
from chromepass.user.repository import UserRepository

logger = logging.getLogger(__name__)


class GrantService:
    """Direct and team grants for one kind of resource.

    ``kind`` is the resource name used in messages (``"credential"``,
    ``"project"``).
    """

    def __init__(self, session: Session, grants: GrantRepository, kind: str):
        self.session = session
        self.grants = grants
        self.kind = kind
        self.users = UserRepository(session)
        self.teams = TeamRepository(session)

    def _ensure_users_exist(self, user_ids: Iterable[int]) -> None:
        ids = set(user_ids)
        found = {user.id for user in self.users.get_many(list(ids))}
        if ids - found:
            raise UserNotFoundError()

    def _ensure_teams_exist(self, team_ids: Iterable[int]) -> None:
        ids = set(team_ids)
        found = {team.id for team in self.teams.get_many_active(list(ids))}
        if ids - found:
            raise TeamNotFoundError()

    def assign_user(self, resource_id: int, user_id: int) -> None:
        self._ensure_users_exist([user_id])
        if self.grants.get_user_grant(resource_id, user_id) is not None:
            raise AlreadyAssignedError(f"User is already assigned to this {self.kind}")
        self.grants.add_user_grant(resource_id, user_id)
        self.session.commit()
        logger.info("User %s assigned to %s %s", user_id, self.kind, resource_id)

    def unassign_user(self, resource_id: int, user_id: int) -> None:
        grant = self.grants.get_user_grant(resource_id, user_id)
        if grant is None:
            raise AssignmentNotFoundError("User assignment not found")
        self.grants.remove(grant)
        self.session.commit()
        logger.info("User %s removed from %s %s", user_id, self.kind, resource_id)

    def assign_team(self, resource_id: int, team_id: int) -> None:
        self._ensure_teams_exist([team_id])
        if self.grants.get_team_grant(resource_id, team_id) is not None:
            raise AlreadyAssignedError(f"Team is already assigned to this {self.kind}")
        self.grants.add_team_grant(resource_id, team_id)
        self.session.commit()
        logger.info("Team %s assigned to %s %s", team_id, self.kind, resource_id)

    def unassign_team(self, resource_id: int, team_id: int) -> None:
        grant = self.grants.get_team_grant(resource_id, team_id)
        if grant is None:
            raise AssignmentNotFoundError("Team assignment not found")
        self.grants.remove(grant)
        self.session.commit()
        logger.info("Team %s removed from %s %s", team_id, self.kind, resource_id)

    def replace(
        self,
        resource_id: int,
        user_ids: list[int] | None = None,
        team_ids: list[int] | None = None,
    ) -> None:
        """Stage a full replacement of the grant lists that are not None.

        The caller commits.
        """
        if user_ids is not None:
            self._ensure_users_exist(user_ids)
            self.grants.replace_user_grants(resource_id, user_ids)
        if team_ids is not None:
            self._ensure_teams_exist(team_ids)
            self.grants.replace_team_grants(resource_id, team_ids)
