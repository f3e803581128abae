"""
Database Configuration

Async SQLAlchemy 2.0 engine and session factories.
Uses asyncpg as the PostgreSQL driver for non-blocking I/O.

Engines are built per application (or per CLI run) from the Settings in use,
never at import time.
"""

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from mail_notes.core.config import Settings


def build_engine(app_settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured store.

    TLS is requested from asyncpg when the settings ask for it (production
    by default). Pool sizing is left to SQLAlchemy (pool_size=5, max_overflow=10).
    """
    connect_args: dict[str, Any] = {}
    if app_settings.use_ssl:
        connect_args["ssl"] = "require"
    return create_async_engine(
        app_settings.async_database_url,
        echo=False,
        connect_args=connect_args,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``bind``."""
    # expire_on_commit=False: no implicit I/O when reading attributes after commit
    return async_sessionmaker(bind, expire_on_commit=False)


__all__ = ["build_engine", "build_session_factory"]
