"""Auth domain exceptions.

Authentication and authorization related exceptions.
"""

from chromepass.core.exceptions import AuthenticationError, AuthorizationError


# Authentication errors (401)
class NotAuthenticatedError(AuthenticationError):
    """Raised when a protected route is called without a bearer token."""

    error_type = "not_authenticated"

    def __init__(self, message: str = "No token, authorization denied"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password combination is invalid."""

    error_type = "invalid_credentials"

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when authentication token is invalid or expired."""

    error_type = "invalid_token"

    def __init__(self, message: str = "Token is not valid"):
        super().__init__(message)


class InvalidVerificationTokenError(AuthenticationError):
    """Raised when an e-mail verification link does not match any account."""

    status_code = 400
    error_type = "invalid_verification_token"

    def __init__(self, message: str = "Invalid or expired verification token"):
        super().__init__(message)


# Authorization errors (403)
class AdminRequiredError(AuthorizationError):
    """Raised when admin privileges are required."""

    error_type = "admin_required"

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message)


class DashboardAccessError(AdminRequiredError):
    """Raised when a non-admin tries to sign in to the admin dashboard."""

    error_type = "dashboard_access_denied"

    def __init__(
        self,
        message: str = "Access denied. Only administrators can access the admin "
        "dashboard. Please use the Chrome extension to access your credentials.",
    ):
        super().__init__(message)
