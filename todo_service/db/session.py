"""
Async engine and session plumbing for the todos database.

The engine is created on first use so that importing the app (tests,
alembic) never opens a connection.
"""

import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from todo_service.config import settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def engine_options(database_url: str) -> dict:
    """Keyword arguments for ``create_async_engine`` suited to the backend."""
    options = {"echo": settings.debug, "pool_pre_ping": True}
    if make_url(database_url).get_backend_name() == "sqlite":
        # SQLite pools are file handles, not server connections
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=300,
    )
    return options


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        url = make_url(settings.database_url)
        logger.info(f"Connecting to {url.render_as_string(hide_password=True)}")
        _engine = create_async_engine(url, **engine_options(settings.database_url))
    return _engine


def get_session_local() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(), expire_on_commit=False, autoflush=False
        )
    return _session_factory


async def get_db():
    """Request-scoped session; the FastAPI dependency behind every todo route."""
    async with get_session_local()() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections; the next request builds a fresh engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None
