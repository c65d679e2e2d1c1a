"""Access domain exceptions.

Ownership and grant (assignment) errors shared by credentials, projects and
teams.
"""

from chromepass.core.exceptions import AuthorizationError, ConflictError, NotFoundError


class NotOwnerError(AuthorizationError):
    """Raised when an actor changes a resource they neither created nor
    administer."""

    error_type = "not_owner"


class AlreadyAssignedError(ConflictError):
    """Raised when a user or team already holds the requested grant."""

    error_type = "already_assigned"


class AssignmentNotFoundError(NotFoundError):
    """Raised when removing a grant that does not exist."""

    error_type = "assignment_not_found"
