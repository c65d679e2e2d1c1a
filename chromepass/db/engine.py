import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine

from chromepass.core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for ``settings.database_url``.

    Server databases get a small bounded pool with a short recycle interval.
    """
    kwargs: dict[str, Any] = {"echo": False}
    if settings.database_url.startswith("sqlite"):
        # Required for SQLite when used with FastAPI across threads.
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=True,
        )
    return create_engine(settings.database_url, **kwargs)


engine = build_engine(get_settings())


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db() -> None:
    """Create missing tables for every registered model."""
    # Importing the package registers every table model on SQLModel.metadata.
    import chromepass.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables verified/created")
