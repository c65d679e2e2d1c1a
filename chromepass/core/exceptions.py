"""Errors that reach the client as ``{"type": ..., "message": ...}``.

Each class fixes the HTTP status and the ``type`` string. Domain packages
subclass the category that fits in their own ``exceptions`` module, and
``extra`` carries any additional response fields.
"""

from typing import Any


class AppException(Exception):
    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        self.extra: dict[str, Any] = {}
        super().__init__(message)


# 400
class ValidationError(AppException):
    """A request that breaks a business rule."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message)


class BadRequestError(ValidationError):
    error_type = "bad_request"

    def __init__(self, message: str = "Bad request"):
        super().__init__(message)


class ConflictError(AppException):
    """The request collides with existing data."""

    status_code = 400
    error_type = "conflict"

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)


class DuplicateNameError(ConflictError):
    """A team or project name matches an active one, exactly or fuzzily.

    The response names the existing entry so the dashboard can show it.
    """

    error_type = "duplicate_name"

    def __init__(self, kind: str, duplicate: str):
        super().__init__(f"A {kind} with a similar name already exists")
        self.duplicate = duplicate
        self.extra = {
            "duplicate": duplicate,
            "suggestion": (
                f'Consider using a different name. Similar {kind}: "{duplicate}"'
            ),
        }


# 401
class AuthenticationError(AppException):
    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


# 403
class AuthorizationError(AppException):
    status_code = 403
    error_type = "authorization_error"

    def __init__(self, message: str = "Not allowed"):
        super().__init__(message)


# 404
class NotFoundError(AppException):
    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


# 429
class RateLimitError(AppException):
    """Too many attempts from one client; ``retry_after`` is in seconds."""

    status_code = 429
    error_type = "rate_limit_exceeded"

    def __init__(
        self,
        message: str = "Too many attempts, please try again later",
        retry_after: int = 60,
    ):
        super().__init__(message)
        self.retry_after = retry_after
        self.extra = {"retry_after": retry_after}
