"""Project domain router.

Project CRUD plus direct (user) and team assignment routes.
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
from chromepass.core.schemas import MessageResponse
from chromepass.project.schemas import ProjectCreate, ProjectRead, ProjectUpdate
from chromepass.project.service import ProjectServiceDep

router = APIRouter(
    prefix=Routes.PROJECT.prefix,
    tags=[Routes.PROJECT.tag],
    dependencies=[Depends(require_auth)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.get("", response_model=list[ProjectRead])
async def list_projects(
    user: CurrentUserDep,
    projects: ProjectServiceDep,
    scope: Literal["mine", "all"] = "mine",
):
    """List projects the current user can access.

    Admins may pass ``scope=all`` to list every active project.
    """
    return projects.to_reads(
        projects.list_projects(user, all_projects=scope == "all")
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.BAD_REQUEST},
)
async def create_project(
    data: ProjectCreate, user: CurrentUserDep, projects: ProjectServiceDep
):
    return projects.to_read(projects.create(user, data))


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_project(project_id: int, user: CurrentUserDep, projects: ProjectServiceDep):
    return projects.to_read(projects.get_visible(user, project_id))


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def update_project(
    project_id: int,
    data: ProjectUpdate,
    user: CurrentUserDep,
    projects: ProjectServiceDep,
):
    project = projects.update(user, projects.get(project_id), data)
    return projects.to_read(project)


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_project(
    project_id: int, user: CurrentUserDep, projects: ProjectServiceDep
):
    projects.delete(user, projects.get(project_id))
    return MessageResponse(message="Project deleted successfully")


# Assignments


@router.get(
    "/{project_id}/users",
    response_model=list[AssignedUserRead],
    responses={**CommonResponses.NOT_FOUND},
)
async def list_project_users(
    project_id: int, user: CurrentUserDep, projects: ProjectServiceDep
):
    """Users with access to the project, direct assignments first.

    A user reachable both directly and through a team is listed once, as
    ``direct``.
    """
    project = projects.get(project_id)
    ensure_can_modify(user, project, "view", "project")
    return [
        AssignedUserRead.from_assigned(assigned)
        for assigned in projects.resolver.project_assignees(project_id)
    ]


@router.get(
    "/{project_id}/teams",
    response_model=list[AssignedTeamRead],
    responses={**CommonResponses.NOT_FOUND},
)
async def list_project_teams(
    project_id: int, user: CurrentUserDep, projects: ProjectServiceDep
):
    project = projects.get(project_id)
    ensure_can_modify(user, project, "view", "project")
    return [
        AssignedTeamRead.model_validate(team, from_attributes=True)
        for team in projects.projects.grants.teams(project_id)
    ]


@router.post(
    "/{project_id}/users",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def assign_project_user(
    project_id: int,
    data: UserAssignmentRequest,
    user: CurrentUserDep,
    projects: ProjectServiceDep,
):
    project = projects.get(project_id)
    ensure_can_modify(user, project, "modify", "project")
    projects.grants.assign_user(project_id, data.user_id)
    return MessageResponse(message="User assigned successfully")


@router.delete(
    "/{project_id}/users/{user_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def unassign_project_user(
    project_id: int, user_id: int, user: CurrentUserDep, projects: ProjectServiceDep
):
    project = projects.get(project_id)
    ensure_can_modify(user, project, "modify", "project")
    projects.grants.unassign_user(project_id, user_id)
    return MessageResponse(message="User removed successfully")


@router.post(
    "/{project_id}/teams",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def assign_project_team(
    project_id: int,
    data: TeamAssignmentRequest,
    user: CurrentUserDep,
    projects: ProjectServiceDep,
):
    project = projects.get(project_id)
    ensure_can_modify(user, project, "modify", "project")
    projects.grants.assign_team(project_id, data.team_id)
    return MessageResponse(message="Team assigned successfully")


@router.delete(
    "/{project_id}/teams/{team_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def unassign_project_team(
    project_id: int, team_id: int, user: CurrentUserDep, projects: ProjectServiceDep
):
    project = projects.get(project_id)
    ensure_can_modify(user, project, "modify", "project")
    projects.grants.unassign_team(project_id, team_id)
    return MessageResponse(message="Team removed successfully")
