"""Auth domain router.

Registration, password login for the dashboard and the extension, e-mail
verification and the current user's profile, teams and assignments.
Every route here is rate limited per client.
"""

from fastapi import APIRouter, Depends, status

from chromepass.access.exceptions import AssignmentNotFoundError
from chromepass.access.resolver import AccessResolver
from chromepass.access.schemas import UserAssignmentsRead, assignments_response
from chromepass.auth.dependencies import CurrentUserDep
from chromepass.auth.exceptions import InvalidVerificationTokenError
from chromepass.auth.schemas import (
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
)
from chromepass.auth.service import AuthServiceDep
from chromepass.core.constants import CommonResponses, Routes
from chromepass.core.deps import SessionDep, SettingsDep
from chromepass.core.rate_limit import limit_auth_requests
from chromepass.core.schemas import MessageResponse
from chromepass.credential.repository import CredentialRepository
from chromepass.project.repository import ProjectRepository
from chromepass.team.schemas import MyTeamRead
from chromepass.team.service import TeamServiceDep
from chromepass.user.repository import UserRepository
from chromepass.user.schemas import UserProfileUpdate, UserPublicRead
from chromepass.user.service import UserServiceDep

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    dependencies=[Depends(limit_auth_requests)],
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.RATE_LIMITED},
)


def _registration_message(
    is_first_user: bool, requested_admin: bool, email_configured: bool
) -> str:
    if is_first_user:
        return "Admin user created successfully! You can now log in."
    who = "Admin user" if requested_admin else "User"
    if email_configured:
        return (
            f"{who} registered successfully. Please check your email for "
            "verification and wait for admin approval."
        )
    return f"{who} registered successfully. Please wait for admin approval."


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(data: RegisterRequest, users: UserServiceDep, settings: SettingsDep):
    """Register a new user.

    The first account becomes an active, verified admin. Later accounts
    start pending and need an admin's approval. The verification e-mail is
    best-effort and never fails registration.
    """
    registration = users.register(
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
    )
    return RegisterResponse(
        message=_registration_message(
            registration.is_first_user,
            registration.user.is_admin,
            settings.email_configured,
        ),
        user_id=registration.user.id,  # type: ignore[arg-type]
        is_first_user=registration.is_first_user,
        requires_approval=not registration.is_first_user,
        email_configured=settings.email_configured,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def login(data: LoginRequest, auth: AuthServiceDep):
    """Dashboard login. Only administrators may sign in here."""
    return auth.login(data.email, data.password, admin_only=True)


@router.post(
    "/extension-login",
    response_model=LoginResponse,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def extension_login(data: LoginRequest, auth: AuthServiceDep):
    """Extension login, open to every active user."""
    return auth.login(data.email, data.password, admin_only=False)


@router.get("/verify-email/{token}", response_model=MessageResponse)
async def verify_email(token: str, users: UserServiceDep, session: SessionDep):
    user = UserRepository(session).get_by_verification_token(token)
    if user is None:
        raise InvalidVerificationTokenError()
    users.verify_email(user)
    return MessageResponse(message="Email verified successfully")


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def resend_verification(data: ResendVerificationRequest, users: UserServiceDep):
    sent = users.resend_verification(data.email)
    if not sent:
        return MessageResponse(
            message="Verification token regenerated, but email could not be sent"
        )
    return MessageResponse(message="Verification email sent successfully")


@router.get(
    "/me",
    response_model=UserPublicRead,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def get_me(user: CurrentUserDep):
    """Get current authenticated user's profile."""
    return user


@router.put(
    "/me",
    response_model=ProfileResponse,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def update_me(data: UserProfileUpdate, user: CurrentUserDep, users: UserServiceDep):
    """Update current authenticated user's profile.

    Changing the e-mail resets its verification; changing the password
    requires the current one.
    """
    updated = users.update_profile(user, data)
    return ProfileResponse(
        message="Profile updated successfully",
        user=UserPublicRead.model_validate(updated),
    )


@router.get(
    "/me/assignments",
    response_model=UserAssignmentsRead,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def my_assignments(user: CurrentUserDep, session: SessionDep):
    """Projects and credentials granted to the current user."""
    return assignments_response(AccessResolver(session).user_assignments(user.id))  # type: ignore[arg-type]


@router.get(
    "/me/teams",
    response_model=list[MyTeamRead],
    responses={**CommonResponses.UNAUTHORIZED},
)
async def my_teams(user: CurrentUserDep, teams: TeamServiceDep):
    return teams.teams_of(user)


@router.delete(
    "/me/teams/{team_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.NOT_FOUND},
)
async def leave_team(team_id: int, user: CurrentUserDep, teams: TeamServiceDep):
    teams.leave(user, team_id)
    return MessageResponse(message="Successfully left the team")


@router.delete(
    "/me/projects/{project_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.NOT_FOUND},
)
async def drop_project_access(project_id: int, user: CurrentUserDep, session: SessionDep):
    """Give up a direct project assignment. Team access is not affected."""
    grants = ProjectRepository(session).grants
    grant = grants.get_user_grant(project_id, user.id)  # type: ignore[arg-type]
    if grant is None:
        raise AssignmentNotFoundError("Project access not found")
    grants.remove(grant)
    session.commit()
    return MessageResponse(message="Project access removed successfully")


@router.delete(
    "/me/credentials/{credential_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.NOT_FOUND},
)
async def drop_credential_access(
    credential_id: int, user: CurrentUserDep, session: SessionDep
):
    """Give up a direct credential assignment. Team access is not affected."""
    grants = CredentialRepository(session).grants
    grant = grants.get_user_grant(credential_id, user.id)  # type: ignore[arg-type]
    if grant is None:
        raise AssignmentNotFoundError("Credential access not found")
    grants.remove(grant)
    session.commit()
    return MessageResponse(message="Credential access removed successfully")
