"""Health domain router.

Liveness and database health endpoints for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from chromepass.core.constants import Routes
from chromepass.core.deps import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix=Routes.HEALTH.prefix, tags=[Routes.HEALTH.tag])

REQUIRED_TABLES = (
    "cp_users",
    "cp_groups",
    "cp_user_groups",
    "cp_projects",
    "cp_project_users",
    "cp_project_groups",
    "cp_credentials",
    "cp_credential_users",
    "cp_credential_groups",
)


@router.get("")
async def health(session: SessionDep):
    """Health check endpoint with database connectivity verification."""
    try:
        session.exec(text("SELECT 1"))  # type: ignore[call-overload]
        return {"status": "ok", "database": "ok"}
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "error"},
        )


@router.get("/database")
async def database_health(session: SessionDep):
    """Report whether every table the API relies on exists."""
    try:
        existing = set(inspect(session.get_bind()).get_table_names())
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "error"},
        )

    missing = [name for name in REQUIRED_TABLES if name not in existing]
    if missing:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "ok",
                "missing_tables": missing,
            },
        )
    return {"status": "ok", "database": "ok", "tables": list(REQUIRED_TABLES)}
