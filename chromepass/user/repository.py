"""Data access for users."""

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from chromepass.user.models import User, UserRole, UserState


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_many(self, user_ids: Sequence[int]) -> list[User]:
        if not user_ids:
            return []
        return list(self.session.exec(select(User).where(col(User.id).in_(user_ids))))

    def get_by_email(self, email: str) -> User | None:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get_by_verification_token(self, token: str) -> User | None:
        return self.session.exec(
            select(User).where(User.email_verification_token == token)
        ).first()

    def find(
        self,
        *,
        search: str | None = None,
        role: UserRole | None = None,
        state: UserState | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[User]:
        statement = select(User)
        if search:
            pattern = f"%{search.lower()}%"
            statement = statement.where(
                or_(
                    func.lower(User.first_name).like(pattern),
                    func.lower(User.last_name).like(pattern),
                    func.lower(User.email).like(pattern),
                )
            )
        if role is not None:
            statement = statement.where(User.role == role)
        if state is not None:
            statement = statement.where(User.state == state)
        statement = (
            statement.order_by(col(User.created_at).desc(), col(User.id).desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.exec(statement))

    def count(
        self,
        *,
        role: UserRole | None = None,
        state: UserState | None = None,
        email_verified: bool | None = None,
    ) -> int:
        statement = select(func.count()).select_from(User)
        if role is not None:
            statement = statement.where(User.role == role)
        if state is not None:
            statement = statement.where(User.state == state)
        if email_verified is not None:
            statement = statement.where(User.email_verified == email_verified)
        return self.session.exec(statement).one()

    def count_active_admins(self, exclude_user_id: int | None = None) -> int:
        statement = (
            select(func.count())
            .select_from(User)
            .where(User.role == UserRole.admin, User.state == UserState.active)
        )
        if exclude_user_id is not None:
            statement = statement.where(User.id != exclude_user_id)
        return self.session.exec(statement).one()

    def recent(self, limit: int = 5) -> list[User]:
        return list(
            self.session.exec(
                select(User)
                .where(User.state == UserState.active)
                .order_by(col(User.created_at).desc(), col(User.id).desc())
                .limit(limit)
            )
        )

    def add(self, user: User) -> User:
        self.session.add(user)
        return user
