"""User domain models.

SQLModel table definition for User.
"""

from datetime import datetime
from enum import IntEnum

from pydantic import EmailStr
from sqlalchemy import Integer
from sqlmodel import Field, SQLModel

from chromepass.core.mixins import TimestampMixin


class UserRole(IntEnum):
    """User role, stored as an integer.

    - user (0): extension access to assigned credentials
    - admin (1): dashboard access and management of every resource
    """

    user = 0
    admin = 1


class UserState(IntEnum):
    """User account state, stored as an integer.

    - trashed (-2): soft-deleted by an admin, restorable
    - blocked (-1): blocked by an admin
    - pending (0): registered, awaiting admin approval
    - active (1): approved and allowed to sign in
    """

    trashed = -2
    blocked = -1
    pending = 0
    active = 1


class User(TimestampMixin, SQLModel, table=True):
    """User database model.

    Note: password_hash and email_verification_token are internal-only
    and must never be exposed in API responses.
    """

    __tablename__: str = "cp_users"

    id: int | None = Field(default=None, primary_key=True)
    email: EmailStr = Field(index=True, unique=True, max_length=255)
    password_hash: str = Field(max_length=255)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    email_verified: bool = Field(default=False)
    email_verification_token: str | None = Field(
        default=None, index=True, max_length=64
    )
    role: UserRole = Field(default=UserRole.user, sa_type=Integer)
    state: UserState = Field(default=UserState.pending, sa_type=Integer, index=True)
    last_login: datetime | None = Field(default=None)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @property
    def is_active(self) -> bool:
        return self.state == UserState.active
