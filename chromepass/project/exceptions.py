"""Project domain exceptions."""

from chromepass.core.exceptions import NotFoundError


class ProjectNotFoundError(NotFoundError):
    """Raised when project cannot be found or has been deleted."""

    error_type = "project_not_found"

    def __init__(self, message: str = "Project not found"):
        super().__init__(message)
