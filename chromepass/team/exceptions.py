"""Team domain exceptions."""

from chromepass.core.exceptions import NotFoundError, ValidationError


class TeamNotFoundError(NotFoundError):
    """Raised when team cannot be found or has been deleted."""

    error_type = "team_not_found"

    def __init__(self, message: str = "Team not found"):
        super().__init__(message)


class TeamHasMembersError(ValidationError):
    """Raised when deleting a team that still has members."""

    error_type = "team_has_members"

    def __init__(self, user_count: int):
        super().__init__(
            f"Cannot delete team with {user_count} member(s). "
            "Remove all members first."
        )
        self.user_count = user_count
        self.extra = {"user_count": user_count}


class NotTeamMemberError(NotFoundError):
    """Raised when a user leaves a team they do not belong to."""

    error_type = "not_team_member"

    def __init__(self, message: str = "You are not a member of this team"):
        super().__init__(message)
