"""User domain schemas.

Request and response schemas for user operations.

Security notes:
- password_hash and email_verification_token are internal-only, never
  exposed in responses
- UserProfileUpdate is restricted to prevent privilege escalation
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from sqlmodel import SQLModel

from chromepass.core.schemas import UtcDatetime
from chromepass.user.models import UserRole, UserState


class UserSummary(SQLModel):
    """Minimal user reference embedded in other resources."""

    id: int
    email: EmailStr
    first_name: str
    last_name: str


class UserPublicRead(UserSummary):
    """Response schema for the current user (``/auth/me``)."""

    role: UserRole
    email_verified: bool
    created_at: UtcDatetime
    last_login: UtcDatetime | None


class UserRead(UserPublicRead):
    """Full response schema for admin contexts."""

    state: UserState
    updated_at: UtcDatetime


class UserUpdate(SQLModel):
    """Schema for admin updating a user.

    Changing ``role`` or ``state`` goes through the same lifecycle rules as
    the dedicated role/state endpoints.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    role: UserRole | None = None
    state: UserState | None = None


class UserProfileUpdate(BaseModel):
    """Schema for users updating their own profile.

    Users cannot modify their role or state. A new password needs the
    current one and a matching confirmation.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    current_password: str | None = None
    new_password: str | None = Field(default=None, min_length=6)
    confirm_password: str | None = None

    @model_validator(mode="after")
    def passwords_match(self) -> "UserProfileUpdate":
        if self.confirm_password is not None and self.confirm_password != self.new_password:
            raise ValueError("Passwords do not match")
        return self


class RoleUpdate(BaseModel):
    role: UserRole


class StateUpdate(BaseModel):
    state: UserState


class UserStats(BaseModel):
    total_users: int
    active_users: int
    pending_users: int
    blocked_users: int
    verified_users: int
    admin_users: int
    recent_users: list[UserRead]
