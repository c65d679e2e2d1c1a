"""Data access for teams and team membership."""

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlmodel import Session, col, select

from chromepass.team.models import Team, TeamMember
from chromepass.user.models import User


class TeamRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, team_id: int) -> Team | None:
        return self.session.get(Team, team_id)

    def get_active(self, team_id: int) -> Team | None:
        team = self.get(team_id)
        if team is None or not team.is_active:
            return None
        return team

    def get_many_active(self, team_ids: Sequence[int]) -> list[Team]:
        if not team_ids:
            return []
        return list(
            self.session.exec(
                select(Team).where(col(Team.id).in_(team_ids), Team.is_active)
            )
        )

    def list_active(self) -> list[Team]:
        return list(
            self.session.exec(
                select(Team)
                .where(Team.is_active)
                .order_by(col(Team.created_at).desc(), col(Team.id).desc())
            )
        )

    def active_names(self, exclude_id: int | None = None) -> list[str]:
        statement = select(Team.name).where(Team.is_active)
        if exclude_id is not None:
            statement = statement.where(Team.id != exclude_id)
        return list(self.session.exec(statement))

    def add(self, team: Team) -> Team:
        self.session.add(team)
        return team

    # Membership

    def members(self, team_id: int) -> list[User]:
        return list(
            self.session.exec(
                select(User)
                .join(TeamMember, col(TeamMember.user_id) == col(User.id))
                .where(TeamMember.group_id == team_id)
                .order_by(col(TeamMember.created_at), col(TeamMember.id))
            )
        )

    def member_ids(self, team_id: int) -> set[int]:
        return set(
            self.session.exec(
                select(TeamMember.user_id).where(TeamMember.group_id == team_id)
            )
        )

    def member_count(self, team_id: int) -> int:
        return self.session.exec(
            select(func.count())
            .select_from(TeamMember)
            .where(TeamMember.group_id == team_id)
        ).one()

    def get_membership(self, team_id: int, user_id: int) -> TeamMember | None:
        return self.session.exec(
            select(TeamMember).where(
                TeamMember.group_id == team_id, TeamMember.user_id == user_id
            )
        ).first()

    def add_member(self, team_id: int, user_id: int) -> TeamMember:
        membership = TeamMember(group_id=team_id, user_id=user_id)
        self.session.add(membership)
        return membership

    def remove_members(self, team_id: int, user_ids: Iterable[int]) -> int:
        ids = list(user_ids)
        if not ids:
            return 0
        memberships = self.session.exec(
            select(TeamMember).where(
                TeamMember.group_id == team_id, col(TeamMember.user_id).in_(ids)
            )
        ).all()
        for membership in memberships:
            self.session.delete(membership)
        # Flush now: within one flush SQLAlchemy inserts before it deletes.
        self.session.flush()
        return len(memberships)

    def memberships_for_user(self, user_id: int) -> list[tuple[Team, TeamMember]]:
        """Active teams of a user along with the membership row."""
        rows = self.session.exec(
            select(Team, TeamMember)
            .join(TeamMember, col(TeamMember.group_id) == col(Team.id))
            .where(TeamMember.user_id == user_id, Team.is_active)
            .order_by(col(TeamMember.created_at), col(TeamMember.id))
        )
        return list(rows.all())
