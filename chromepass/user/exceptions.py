"""User domain exceptions.

User-related exceptions for not found, inactive, conflict and lifecycle
rule violations.
"""

from chromepass.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class UserNotFoundError(NotFoundError):
    """Raised when user cannot be found."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class UserInactiveError(AuthorizationError):
    """Raised when a user whose state is not active tries to act."""

    error_type = "user_inactive"

    def __init__(self, message: str = "Account is not active"):
        super().__init__(message)


class EmailNotVerifiedError(AuthorizationError):
    """Raised when a user with an unverified email tries to act."""

    error_type = "email_not_verified"

    def __init__(self, message: str = "Please verify your email before logging in"):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when attempting to use an email that is already registered."""

    error_type = "email_exists"

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)


class InvalidStateTransitionError(ValidationError):
    """Raised when a requested state change is not an allowed transition."""

    error_type = "invalid_state_transition"


class SelfModificationError(ValidationError):
    """Raised when an admin tries to change their own role or state."""

    error_type = "self_modification"

    def __init__(self, message: str = "You cannot change your own role or state"):
        super().__init__(message)


class LastAdminError(ValidationError):
    """Raised when a change would leave the system without an active admin."""

    error_type = "last_admin"

    def __init__(
        self,
        message: str = "Cannot remove the last active administrator. "
        "Promote another user to admin first.",
    ):
        super().__init__(message)


class UnverifiedApprovalError(ValidationError):
    """Raised when approving a user whose e-mail is not verified yet."""

    error_type = "email_not_verified"

    def __init__(
        self, message: str = "Cannot approve a user who has not verified their email"
    ):
        super().__init__(message)


class IncorrectPasswordError(ValidationError):
    """Raised when a profile change supplies a wrong current password."""

    error_type = "incorrect_password"

    def __init__(self, message: str = "Current password is incorrect"):
        super().__init__(message)
