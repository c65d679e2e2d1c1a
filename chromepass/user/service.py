"""User lifecycle.

Accounts move through ``pending -> active``, ``active <-> blocked`` and
``active -> trashed -> active``. Admins never change their own role or
state, and no change may leave the system without an active admin.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from chromepass.core.deps import SessionDep
from chromepass.core.email import send_email_verification_email
from chromepass.core.exceptions import BadRequestError
from chromepass.core.security import (
    generate_verification_token,
    hash_password,
    verify_password,
)
from chromepass.user.exceptions import (
    EmailExistsError,
    IncorrectPasswordError,
    InvalidStateTransitionError,
    LastAdminError,
    SelfModificationError,
    UnverifiedApprovalError,
    UserNotFoundError,
)
from chromepass.user.models import User, UserRole, UserState
from chromepass.user.repository import UserRepository
from chromepass.user.schemas import (
    UserProfileUpdate,
    UserRead,
    UserStats,
    UserUpdate,
)

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[UserState, frozenset[UserState]] = {
    UserState.pending: frozenset({UserState.active}),
    UserState.active: frozenset({UserState.blocked, UserState.trashed}),
    UserState.blocked: frozenset({UserState.active}),
    UserState.trashed: frozenset({UserState.active}),
}


@dataclass(frozen=True)
class Registration:
    user: User
    is_first_user: bool
    email_sent: bool


class UserService:
    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepository(session)

    def get(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def _save(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    # Creation

    def create_user(
        self,
        *,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        role: UserRole = UserRole.user,
        state: UserState = UserState.pending,
        email_verified: bool = False,
    ) -> User:
        """Hash ``password`` and persist a new user.

        Raises:
            EmailExistsError: If the e-mail is already registered
        """
        if self.users.get_by_email(email) is not None:
            raise EmailExistsError("User already exists")

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
            state=state,
            email_verified=email_verified,
        )
        return self._save(self.users.add(user))

    def register(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: UserRole | None = None,
    ) -> Registration:
        """Register a new account.

        The very first account becomes an active, verified admin. Later
        accounts start pending and unverified and need an admin's approval,
        whatever role they ask for.
        """
        is_first_user = self.users.count() == 0
        if is_first_user:
            user = self.create_user(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=UserRole.admin,
                state=UserState.active,
                email_verified=True,
            )
            logger.info("First user registered as admin", extra={"user_id": user.id})
            return Registration(user=user, is_first_user=True, email_sent=False)

        user = self.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            role=role or UserRole.user,
        )
        user.email_verification_token = generate_verification_token()
        self._save(user)
        logger.info("User registered, awaiting approval", extra={"user_id": user.id})

        email_sent = send_email_verification_email(
            user.email, user.email_verification_token
        )
        return Registration(user=user, is_first_user=False, email_sent=email_sent)

    # E-mail verification

    def verify_email(self, user: User) -> User:
        user.email_verified = True
        user.email_verification_token = None
        return self._save(user)

    def resend_verification(self, email: str) -> bool:
        user = self.users.get_by_email(email)
        if user is None:
            raise UserNotFoundError()
        if user.email_verified:
            raise BadRequestError("Email already verified")

        user.email_verification_token = generate_verification_token()
        self._save(user)
        return send_email_verification_email(user.email, user.email_verification_token)

    # Queries

    def list_users(
        self,
        *,
        search: str | None = None,
        role: UserRole | None = None,
        state: UserState | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[User]:
        return self.users.find(
            search=search, role=role, state=state, limit=limit, offset=offset
        )

    def pending_users(self) -> list[User]:
        return self.users.find(state=UserState.pending, limit=1000)

    def stats(self) -> UserStats:
        return UserStats(
            total_users=self.users.count(),
            active_users=self.users.count(state=UserState.active),
            pending_users=self.users.count(state=UserState.pending),
            blocked_users=self.users.count(state=UserState.blocked),
            verified_users=self.users.count(email_verified=True),
            admin_users=self.users.count(role=UserRole.admin),
            recent_users=[UserRead.model_validate(u) for u in self.users.recent()],
        )

    # Lifecycle guards

    def _ensure_not_self(self, actor: User, target: User) -> None:
        if actor.id == target.id:
            raise SelfModificationError()

    def _ensure_admin_remains(self, target: User) -> None:
        """Reject changes removing ``target`` from the active admins when it
        is the last one."""
        if not (target.is_admin and target.is_active):
            return
        if self.users.count_active_admins(exclude_user_id=target.id) == 0:
            raise LastAdminError()

    def _apply_state(self, actor: User, target: User, state: UserState) -> None:
        self._ensure_not_self(actor, target)
        current = UserState(target.state)
        if state == current:
            return
        if state not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStateTransitionError(
                f"Cannot change user state from {current.name} to {state.name}"
            )
        if current == UserState.pending and not target.email_verified:
            raise UnverifiedApprovalError()
        if state != UserState.active:
            self._ensure_admin_remains(target)
        target.state = state

    def _apply_role(self, actor: User, target: User, role: UserRole) -> None:
        self._ensure_not_self(actor, target)
        if role == target.role:
            return
        if role != UserRole.admin:
            self._ensure_admin_remains(target)
        target.role = role

    # Lifecycle transitions

    def set_state(self, actor: User, target: User, state: UserState) -> User:
        previous = UserState(target.state)
        self._apply_state(actor, target, state)
        user = self._save(target)
        logger.info(
            "User state changed from %s to %s",
            previous.name,
            state.name,
            extra={"user_id": target.id, "actor_id": actor.id},
        )
        return user

    def _transition(
        self, actor: User, target: User, expected: UserState, state: UserState
    ) -> User:
        if target.state != expected:
            raise InvalidStateTransitionError(
                f"User must be {expected.name} to become {state.name}"
            )
        return self.set_state(actor, target, state)

    def approve(self, actor: User, target: User) -> User:
        return self._transition(actor, target, UserState.pending, UserState.active)

    def block(self, actor: User, target: User) -> User:
        return self._transition(actor, target, UserState.active, UserState.blocked)

    def unblock(self, actor: User, target: User) -> User:
        return self._transition(actor, target, UserState.blocked, UserState.active)

    def trash(self, actor: User, target: User) -> User:
        return self._transition(actor, target, UserState.active, UserState.trashed)

    def restore(self, actor: User, target: User) -> User:
        return self._transition(actor, target, UserState.trashed, UserState.active)

    def change_role(self, actor: User, target: User, role: UserRole) -> User:
        previous = UserRole(target.role)
        self._apply_role(actor, target, role)
        user = self._save(target)
        logger.info(
            "User role changed from %s to %s",
            previous.name,
            role.name,
            extra={"user_id": target.id, "actor_id": actor.id},
        )
        return user

    # Updates

    def _change_email(self, user: User, email: str) -> bool:
        """Switch ``user`` to a new e-mail and restart verification.

        Returns True when the address actually changed.
        """
        if email == user.email:
            return False
        existing = self.users.get_by_email(email)
        if existing is not None and existing.id != user.id:
            raise EmailExistsError("Email already exists")
        user.email = email
        user.email_verified = False
        user.email_verification_token = generate_verification_token()
        return True

    def update(self, actor: User, target: User, data: UserUpdate) -> User:
        """Admin update of profile fields, role and state in one step."""
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        if "role" in update_data:
            self._apply_role(actor, target, update_data.pop("role"))
        if "state" in update_data:
            self._apply_state(actor, target, update_data.pop("state"))

        email_changed = False
        if "email" in update_data:
            email_changed = self._change_email(target, update_data.pop("email"))

        for key, value in update_data.items():
            setattr(target, key, value)

        user = self._save(target)
        logger.info("User updated", extra={"user_id": target.id, "actor_id": actor.id})
        if email_changed and user.email_verification_token:
            send_email_verification_email(user.email, user.email_verification_token)
        return user

    def update_profile(self, user: User, data: UserProfileUpdate) -> User:
        """Self-service profile update.

        Raises:
            BadRequestError: If a new password is given without the current one
            IncorrectPasswordError: If the current password does not match
        """
        if data.new_password:
            if not data.current_password:
                raise BadRequestError(
                    "Current password is required to change password"
                )
            if not verify_password(data.current_password, user.password_hash):
                raise IncorrectPasswordError()
            user.password_hash = hash_password(data.new_password)

        if data.first_name is not None:
            user.first_name = data.first_name
        if data.last_name is not None:
            user.last_name = data.last_name

        email_changed = False
        if data.email is not None:
            email_changed = self._change_email(user, data.email)

        user = self._save(user)
        if email_changed and user.email_verification_token:
            send_email_verification_email(user.email, user.email_verification_token)
        return user


def get_user_service(session: SessionDep) -> UserService:
    return UserService(session)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
