import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from sqladmin import Admin

from chromepass.admin.auth import AdminAuth
from chromepass.admin.views import ADMIN_VIEWS
from chromepass.auth.router import router as auth_router
from chromepass.core.cors import add_cors_middleware
from chromepass.core.email import init_resend
from chromepass.core.exception_handlers import register_exception_handlers
from chromepass.core.logging import configure_logging
from chromepass.core.request_logging import add_request_logging_middleware
from chromepass.core.settings import get_settings
from chromepass.credential.router import router as credential_router
from chromepass.db.engine import engine, init_db
from chromepass.health.router import router as health_router
from chromepass.project.router import router as project_router
from chromepass.team.router import router as team_router
from chromepass.user.router import router as user_router

configure_logging()

logger = logging.getLogger(__name__)

_DEFAULT_SECRET = "change-me-in-production"


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    if not settings.is_development and _DEFAULT_SECRET in (
        settings.jwt_secret_key,
        settings.session_secret_key,
    ):
        logger.warning("Default secret key in use outside development")
    init_db()
    init_resend()
    yield


app = FastAPI(title="Chrome Pass", version="0.1.0", lifespan=lifespan)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(team_router)
api_router.include_router(project_router)
api_router.include_router(credential_router)

app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

# Mount SQLAdmin UI at /admin (SQLAdmin enables sessions via auth backend secret)
admin = Admin(
    app=app,
    engine=engine,
    authentication_backend=AdminAuth(),
)
for view in ADMIN_VIEWS:
    admin.add_view(view)
