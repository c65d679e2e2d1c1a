"""User domain router.

Admin user management: listing, lifecycle transitions (approve, block,
unblock, trash, restore), role changes and assignment overviews.
"""

from fastapi import APIRouter, Depends, Query

from chromepass.access.resolver import AccessResolver
from chromepass.access.schemas import UserAssignmentsRead, assignments_response
from chromepass.auth.dependencies import AdminUserDep, require_admin
from chromepass.core.constants import CommonResponses, Routes
from chromepass.core.deps import SessionDep
from chromepass.core.schemas import MessageResponse
from chromepass.user.models import UserRole, UserState
from chromepass.user.schemas import (
    RoleUpdate,
    StateUpdate,
    UserRead,
    UserStats,
    UserUpdate,
)
from chromepass.user.service import UserServiceDep

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    dependencies=[Depends(require_admin)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.get("", response_model=list[UserRead])
async def list_users(
    users: UserServiceDep,
    search: str | None = None,
    role: UserRole | None = None,
    state: UserState | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
):
    """List users, newest first. Admin only."""
    return users.list_users(
        search=search, role=role, state=state, limit=limit, offset=offset
    )


@router.get("/pending", response_model=list[UserRead])
async def list_pending_users(users: UserServiceDep):
    """Users waiting for approval."""
    return users.pending_users()


@router.get("/stats/overview", response_model=UserStats)
async def user_stats(users: UserServiceDep):
    return users.stats()


@router.get("/{user_id}", response_model=UserRead, responses={**CommonResponses.NOT_FOUND})
async def get_user(user_id: int, users: UserServiceDep):
    return users.get(user_id)


@router.put(
    "/{user_id}",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
@router.patch(
    "/{user_id}",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def update_user(
    user_id: int, data: UserUpdate, admin: AdminUserDep, users: UserServiceDep
):
    """Update a user by ID. Admin only.

    Role and state changes follow the same rules as the dedicated
    endpoints: no changes to one's own account, allowed transitions only,
    and at least one active admin must remain.
    """
    return users.update(admin, users.get(user_id), data)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def trash_user(user_id: int, admin: AdminUserDep, users: UserServiceDep):
    """Move an active user to the trash. Users are never hard deleted."""
    users.trash(admin, users.get(user_id))
    return MessageResponse(message="User deleted successfully")


@router.patch(
    "/{user_id}/approve",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def approve_user(user_id: int, admin: AdminUserDep, users: UserServiceDep):
    """Approve a pending user whose e-mail is verified."""
    return users.approve(admin, users.get(user_id))


@router.patch(
    "/{user_id}/activate",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def activate_user(user_id: int, admin: AdminUserDep, users: UserServiceDep):
    """Unblock a blocked user."""
    return users.unblock(admin, users.get(user_id))


@router.patch(
    "/{user_id}/deactivate",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def deactivate_user(user_id: int, admin: AdminUserDep, users: UserServiceDep):
    """Block an active user."""
    return users.block(admin, users.get(user_id))


@router.patch(
    "/{user_id}/role",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def change_user_role(
    user_id: int, data: RoleUpdate, admin: AdminUserDep, users: UserServiceDep
):
    return users.change_role(admin, users.get(user_id), data.role)


@router.patch(
    "/{user_id}/state",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def change_user_state(
    user_id: int, data: StateUpdate, admin: AdminUserDep, users: UserServiceDep
):
    """Move a user to another state along an allowed transition."""
    return users.set_state(admin, users.get(user_id), data.state)


@router.get(
    "/{user_id}/assignments",
    response_model=UserAssignmentsRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def user_assignments(user_id: int, users: UserServiceDep, session: SessionDep):
    """Projects and credentials granted to a user, directly or via teams."""
    user = users.get(user_id)
    return assignments_response(AccessResolver(session).user_assignments(user.id))  # type: ignore[arg-type]
