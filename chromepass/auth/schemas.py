"""Auth domain schemas.

Request and response schemas for authentication operations.
"""

from pydantic import BaseModel, EmailStr, Field

from chromepass.user.models import UserRole, UserState
from chromepass.user.schemas import UserPublicRead


class RegisterRequest(BaseModel):
    """Request schema for user registration.

    ``role`` is only a request: accounts after the first still need an
    admin's approval.
    """

    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    role: UserRole | None = None


class RegisterResponse(BaseModel):
    message: str
    user_id: int
    is_first_user: bool
    requires_approval: bool
    email_configured: bool


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class LoginUser(UserPublicRead):
    state: UserState


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: LoginUser


class ResendVerificationRequest(BaseModel):
    email: EmailStr


class ProfileResponse(BaseModel):
    message: str
    user: UserPublicRead
