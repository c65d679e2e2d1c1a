"""Team management.

Teams are soft deleted and only once they have no members. Names are unique
among active teams, exactly and after normalization.
"""

import logging
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from chromepass.access.policy import ensure_can_modify
from chromepass.core.deps import SessionDep
from chromepass.core.exceptions import DuplicateNameError
from chromepass.core.names import find_duplicate
from chromepass.team.exceptions import (
    NotTeamMemberError,
    TeamHasMembersError,
    TeamNotFoundError,
)
from chromepass.team.models import Team
from chromepass.team.repository import TeamRepository
from chromepass.team.schemas import (
    BatchAddResponse,
    BatchRemoveResponse,
    MyTeamRead,
    TeamCreate,
    TeamRead,
    TeamUpdate,
)
from chromepass.user.exceptions import UserNotFoundError
from chromepass.user.models import User
from chromepass.user.repository import UserRepository
from chromepass.user.schemas import UserSummary

logger = logging.getLogger(__name__)


class TeamService:
    def __init__(self, session: Session):
        self.session = session
        self.teams = TeamRepository(session)
        self.users = UserRepository(session)

    def get(self, team_id: int) -> Team:
        team = self.teams.get_active(team_id)
        if team is None:
            raise TeamNotFoundError()
        return team

    def to_read(self, team: Team) -> TeamRead:
        members = self.teams.members(team.id)  # type: ignore[arg-type]
        return TeamRead(
            id=team.id,  # type: ignore[arg-type]
            name=team.name,
            description=team.description,
            is_active=team.is_active,
            created_by_id=team.created_by_id,
            created_at=team.created_at,
            updated_at=team.updated_at,
            user_count=len(members),
            members=[UserSummary.model_validate(member) for member in members],
        )

    def list_teams(self) -> list[TeamRead]:
        return [self.to_read(team) for team in self.teams.list_active()]

    def _ensure_unique_name(self, name: str, exclude_id: int | None = None) -> None:
        duplicate = find_duplicate(name, self.teams.active_names(exclude_id=exclude_id))
        if duplicate is not None:
            raise DuplicateNameError("team", duplicate)

    def _ensure_users_exist(self, user_ids: list[int]) -> None:
        found = {user.id for user in self.users.get_many(user_ids)}
        if set(user_ids) - found:
            raise UserNotFoundError()

    def _replace_members(self, team: Team, user_ids: list[int]) -> None:
        self._ensure_users_exist(user_ids)
        current = self.teams.member_ids(team.id)  # type: ignore[arg-type]
        self.teams.remove_members(team.id, current - set(user_ids))  # type: ignore[arg-type]
        for user_id in dict.fromkeys(user_ids):
            if user_id not in current:
                self.teams.add_member(team.id, user_id)  # type: ignore[arg-type]

    def create(self, actor: User, data: TeamCreate) -> Team:
        self._ensure_unique_name(data.name)
        team = self.teams.add(
            Team(name=data.name, description=data.description, created_by_id=actor.id)
        )
        try:
            self.session.flush()
            if data.member_ids:
                self._replace_members(team, data.member_ids)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(team)
        logger.info(
            "Team %s created", team.id, extra={"team_id": team.id, "actor_id": actor.id}
        )
        return team

    def update(self, actor: User, team: Team, data: TeamUpdate) -> Team:
        ensure_can_modify(actor, team, "update", "team")
        update_data = data.model_dump(exclude_unset=True)
        member_ids = update_data.pop("member_ids", None)

        if update_data.get("name") and update_data["name"] != team.name:
            self._ensure_unique_name(update_data["name"], exclude_id=team.id)
        for key, value in update_data.items():
            if key == "name" and value is None:
                continue
            setattr(team, key, value)
        self.session.add(team)

        try:
            if member_ids is not None:
                self._replace_members(team, member_ids)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(team)
        return team

    def delete(self, actor: User, team: Team) -> None:
        """Soft delete an empty team.

        Raises:
            TeamHasMembersError: If any user is still a member
        """
        ensure_can_modify(actor, team, "delete", "team")
        user_count = self.teams.member_count(team.id)  # type: ignore[arg-type]
        if user_count > 0:
            raise TeamHasMembersError(user_count)
        team.is_active = False
        self.session.add(team)
        self.session.commit()
        logger.info(
            "Team %s deleted", team.id, extra={"team_id": team.id, "actor_id": actor.id}
        )

    # Membership

    def add_member(self, actor: User, team: Team, user_id: int) -> Team:
        ensure_can_modify(actor, team, "modify", "team")
        if self.users.get(user_id) is None:
            raise UserNotFoundError()
        if self.teams.get_membership(team.id, user_id) is None:  # type: ignore[arg-type]
            self.teams.add_member(team.id, user_id)  # type: ignore[arg-type]
            self.session.commit()
        return team

    def remove_member(self, actor: User, team: Team, user_id: int) -> Team:
        ensure_can_modify(actor, team, "modify", "team")
        if self.teams.remove_members(team.id, [user_id]):  # type: ignore[arg-type]
            self.session.commit()
        return team

    def batch_add_members(
        self, actor: User, team: Team, user_ids: list[int]
    ) -> BatchAddResponse:
        """Add several users at once. Either every new membership is written
        or none is."""
        ensure_can_modify(actor, team, "modify", "team")
        self._ensure_users_exist(user_ids)
        current = self.teams.member_ids(team.id)  # type: ignore[arg-type]
        wanted = list(dict.fromkeys(user_ids))
        new_ids = [user_id for user_id in wanted if user_id not in current]
        try:
            for user_id in new_ids:
                self.teams.add_member(team.id, user_id)  # type: ignore[arg-type]
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(
            "Added %d member(s) to team %s",
            len(new_ids),
            team.id,
            extra={"team_id": team.id, "actor_id": actor.id},
        )
        return BatchAddResponse(
            message=f"Added {len(new_ids)} user(s) to team {team.name}",
            added=len(new_ids),
            already_members=len(wanted) - len(new_ids),
            team=self.to_read(team),
        )

    def batch_remove_members(
        self, actor: User, team: Team, user_ids: list[int]
    ) -> BatchRemoveResponse:
        ensure_can_modify(actor, team, "modify", "team")
        try:
            removed = self.teams.remove_members(team.id, user_ids)  # type: ignore[arg-type]
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(
            "Removed %d member(s) from team %s",
            removed,
            team.id,
            extra={"team_id": team.id, "actor_id": actor.id},
        )
        return BatchRemoveResponse(
            message=f"Removed {removed} user(s) from team {team.name}",
            removed=removed,
            team=self.to_read(team),
        )

    # Self-service

    def teams_of(self, user: User) -> list[MyTeamRead]:
        return [
            MyTeamRead(
                id=team.id,  # type: ignore[arg-type]
                name=team.name,
                description=team.description,
                joined_at=membership.created_at,
            )
            for team, membership in self.teams.memberships_for_user(user.id)  # type: ignore[arg-type]
        ]

    def leave(self, user: User, team_id: int) -> None:
        membership = self.teams.get_membership(team_id, user.id)  # type: ignore[arg-type]
        if membership is None:
            raise NotTeamMemberError()
        self.session.delete(membership)
        self.session.commit()
        logger.info(
            "User left team %s", team_id, extra={"team_id": team_id, "user_id": user.id}
        )


def get_team_service(session: SessionDep) -> TeamService:
    return TeamService(session)


TeamServiceDep = Annotated[TeamService, Depends(get_team_service)]
