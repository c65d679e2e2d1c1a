"""Credential domain router.

Credential CRUD for the dashboard, url lookup and usage tracking for the
extension, and direct (user) and team assignment routes.
"""

from typing import Literal

from fastapi import APIRouter, Depends, status

from chromepass.access.policy import ensure_can_modify
from chromepass.access.schemas import (
    AssignedTeamRead,
    AssignedUserRead,
    TeamAssignmentRequest,
    UserAssignmentRequest,
)
from chromepass.auth.dependencies import CurrentUserDep, require_auth
from chromepass.core.constants import CommonResponses, Routes
from chromepass.core.exceptions import BadRequestError
from chromepass.core.schemas import MessageResponse
from chromepass.credential.schemas import (
    CredentialCreate,
    CredentialRead,
    CredentialUpdate,
)
from chromepass.credential.service import CredentialServiceDep
from chromepass.project.schemas import ProjectRef

router = APIRouter(
    prefix=Routes.CREDENTIAL.prefix,
    tags=[Routes.CREDENTIAL.tag],
    dependencies=[Depends(require_auth)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.get("", response_model=list[CredentialRead])
async def list_credentials(
    user: CurrentUserDep,
    credentials: CredentialServiceDep,
    project_id: int | None = None,
    search: str | None = None,
    scope: Literal["mine", "all"] = "mine",
):
    """List credentials the current user can access, newest first.

    Access comes from a direct assignment, a team assignment or having
    created the credential. Admins may pass ``scope=all`` to list every
    active credential.
    """
    found = credentials.list_credentials(
        user,
        project_id=project_id,
        search=search,
        all_credentials=scope == "all",
    )
    return [credentials.to_read(credential) for credential in found]


@router.get(
    "/for-url",
    response_model=list[CredentialRead],
    responses={**CommonResponses.BAD_REQUEST},
)
async def credentials_for_url(
    user: CurrentUserDep, credentials: CredentialServiceDep, url: str | None = None
):
    """Credentials matching the page the extension is on.

    A credential matches on exact ``url`` equality, or when ``url`` fits its
    ``url_pattern`` where ``*`` stands for any run of characters.
    """
    if not url:
        raise BadRequestError("URL is required")
    return [credentials.to_read(c) for c in credentials.for_url(user, url)]


@router.get("/projects/list", response_model=list[ProjectRef])
async def list_credential_projects(user: CurrentUserDep, credentials: CredentialServiceDep):
    """Projects used by the credentials the current user can access."""
    return [
        ProjectRef(id=project.id, name=project.name)  # type: ignore[arg-type]
        for project in credentials.projects_in_use(user)
    ]


@router.post(
    "",
    response_model=CredentialRead,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.NOT_FOUND},
)
async def create_credential(
    data: CredentialCreate, user: CurrentUserDep, credentials: CredentialServiceDep
):
    return credentials.to_read(credentials.create(user, data))


@router.get(
    "/{credential_id}",
    response_model=CredentialRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_credential(
    credential_id: int, user: CurrentUserDep, credentials: CredentialServiceDep
):
    return credentials.to_read(credentials.get_accessible(user, credential_id))


@router.put(
    "/{credential_id}",
    response_model=CredentialRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def update_credential(
    credential_id: int,
    data: CredentialUpdate,
    user: CurrentUserDep,
    credentials: CredentialServiceDep,
):
    credential = credentials.update(user, credentials.get(credential_id), data)
    return credentials.to_read(credential)


@router.delete(
    "/{credential_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_credential(
    credential_id: int, user: CurrentUserDep, credentials: CredentialServiceDep
):
    credentials.delete(user, credentials.get(credential_id))
    return MessageResponse(message="Credential deleted successfully")


@router.post(
    "/{credential_id}/use",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def record_credential_use(
    credential_id: int, user: CurrentUserDep, credentials: CredentialServiceDep
):
    credentials.record_use(user, credential_id)
    return MessageResponse(message="Usage recorded")


# Assignments


@router.get(
    "/{credential_id}/users",
    response_model=list[AssignedUserRead],
    responses={**CommonResponses.NOT_FOUND},
)
async def list_credential_users(
    credential_id: int, user: CurrentUserDep, credentials: CredentialServiceDep
):
    """Users with access to the credential, direct assignments first.

    A user reachable both directly and through a team is listed once, as
    ``direct``.
    """
    credential = credentials.get(credential_id)
    ensure_can_modify(user, credential, "view", "credential")
    return [
        AssignedUserRead.from_assigned(assigned)
        for assigned in credentials.resolver.credential_assignees(credential_id)
    ]


@router.post(
    "/{credential_id}/users",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def assign_credential_user(
    credential_id: int,
    data: UserAssignmentRequest,
    user: CurrentUserDep,
    credentials: CredentialServiceDep,
):
    credential = credentials.get(credential_id)
    ensure_can_modify(user, credential, "modify", "credential")
    credentials.grants.assign_user(credential_id, data.user_id)
    return MessageResponse(message="User assigned successfully")


@router.delete(
    "/{credential_id}/users/{user_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def unassign_credential_user(
    credential_id: int,
    user_id: int,
    user: CurrentUserDep,
    credentials: CredentialServiceDep,
):
    credential = credentials.get(credential_id)
    ensure_can_modify(user, credential, "modify", "credential")
    credentials.grants.unassign_user(credential_id, user_id)
    return MessageResponse(message="User removed successfully")


@router.get(
    "/{credential_id}/teams",
    response_model=list[AssignedTeamRead],
    responses={**CommonResponses.NOT_FOUND},
)
async def list_credential_teams(
    credential_id: int, user: CurrentUserDep, credentials: CredentialServiceDep
):
    credential = credentials.get(credential_id)
    ensure_can_modify(user, credential, "view", "credential")
    return [
        AssignedTeamRead.model_validate(team, from_attributes=True)
        for team in credentials.credentials.grants.teams(credential_id)
    ]


@router.post(
    "/{credential_id}/teams",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def assign_credential_team(
    credential_id: int,
    data: TeamAssignmentRequest,
    user: CurrentUserDep,
    credentials: CredentialServiceDep,
):
    credential = credentials.get(credential_id)
    ensure_can_modify(user, credential, "modify", "credential")
    credentials.grants.assign_team(credential_id, data.team_id)
    return MessageResponse(message="Team assigned successfully")


@router.delete(
    "/{credential_id}/teams/{team_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def unassign_credential_team(
    credential_id: int,
    team_id: int,
    user: CurrentUserDep,
    credentials: CredentialServiceDep,
):
    credential = credentials.get(credential_id)
    ensure_can_modify(user, credential, "modify", "credential")
    credentials.grants.unassign_team(credential_id, team_id)
    return MessageResponse(message="Team removed successfully")
