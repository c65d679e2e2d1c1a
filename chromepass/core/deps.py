"""Centralized dependency type aliases for FastAPI routes.

Authenticated-user aliases live in ``chromepass.auth.dependencies``:
    from chromepass.core.deps import SessionDep, SettingsDep
    from chromepass.auth.dependencies import CurrentUserDep, AdminUserDep
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from chromepass.core.settings import Settings, get_settings
from chromepass.db.engine import get_session

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]
