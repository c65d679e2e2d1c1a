"""Team domain router.

Team CRUD and membership routes. Any authenticated user can list teams and
create one; changes are limited to the team's creator and admins.
"""

from fastapi import APIRouter, Depends, status

from chromepass.auth.dependencies import CurrentUserDep, require_auth
from chromepass.core.constants import CommonResponses, Routes
from chromepass.core.schemas import MessageResponse
from chromepass.team.schemas import (
    BatchAddResponse,
    BatchRemoveResponse,
    TeamCreate,
    TeamMemberRequest,
    TeamMembersRequest,
    TeamRead,
    TeamUpdate,
)
from chromepass.team.service import TeamServiceDep
from chromepass.user.schemas import UserSummary

router = APIRouter(
    prefix=Routes.TEAM.prefix,
    tags=[Routes.TEAM.tag],
    dependencies=[Depends(require_auth)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.get("", response_model=list[TeamRead])
async def list_teams(teams: TeamServiceDep):
    """List active teams with their members, newest first."""
    return teams.list_teams()


@router.post(
    "",
    response_model=TeamRead,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.BAD_REQUEST},
)
async def create_team(data: TeamCreate, user: CurrentUserDep, teams: TeamServiceDep):
    """Create a team.

    Names that match an existing active team, exactly or after
    normalization (case, punctuation, common abbreviations), are rejected
    with the conflicting name in ``duplicate``.
    """
    team = teams.create(user, data)
    return teams.to_read(team)


@router.get("/{team_id}", response_model=TeamRead, responses={**CommonResponses.NOT_FOUND})
async def get_team(team_id: int, teams: TeamServiceDep):
    return teams.to_read(teams.get(team_id))


@router.put(
    "/{team_id}",
    response_model=TeamRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def update_team(
    team_id: int, data: TeamUpdate, user: CurrentUserDep, teams: TeamServiceDep
):
    team = teams.update(user, teams.get(team_id), data)
    return teams.to_read(team)


@router.delete(
    "/{team_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def delete_team(team_id: int, user: CurrentUserDep, teams: TeamServiceDep):
    """Soft delete a team. Rejected while the team still has members."""
    teams.delete(user, teams.get(team_id))
    return MessageResponse(message="Team deleted successfully")


@router.get(
    "/{team_id}/members",
    response_model=list[UserSummary],
    responses={**CommonResponses.NOT_FOUND},
)
async def list_members(team_id: int, teams: TeamServiceDep):
    return teams.to_read(teams.get(team_id)).members


@router.post(
    "/{team_id}/members",
    response_model=TeamRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def add_member(
    team_id: int, data: TeamMemberRequest, user: CurrentUserDep, teams: TeamServiceDep
):
    team = teams.add_member(user, teams.get(team_id), data.user_id)
    return teams.to_read(team)


@router.delete(
    "/{team_id}/members/{user_id}",
    response_model=TeamRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def remove_member(
    team_id: int, user_id: int, user: CurrentUserDep, teams: TeamServiceDep
):
    team = teams.remove_member(user, teams.get(team_id), user_id)
    return teams.to_read(team)


@router.post(
    "/{team_id}/batch-add-members",
    response_model=BatchAddResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def batch_add_members(
    team_id: int, data: TeamMembersRequest, user: CurrentUserDep, teams: TeamServiceDep
):
    """Add several users in one transaction. Existing members are skipped."""
    return teams.batch_add_members(user, teams.get(team_id), data.user_ids)


@router.post(
    "/{team_id}/remove-members",
    response_model=BatchRemoveResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def batch_remove_members(
    team_id: int, data: TeamMembersRequest, user: CurrentUserDep, teams: TeamServiceDep
):
    return teams.batch_remove_members(user, teams.get(team_id), data.user_ids)
