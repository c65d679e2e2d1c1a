"""Credential domain exceptions."""

from chromepass.core.exceptions import NotFoundError


class CredentialNotFoundError(NotFoundError):
    """Raised when credential cannot be found or has been deleted."""

    error_type = "credential_not_found"

    def __init__(self, message: str = "Credential not found"):
        super().__init__(message)
