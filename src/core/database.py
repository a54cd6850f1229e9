"""
Async database engine and session factory.

Uses SQLAlchemy 2.0 async API with asyncpg driver (aiosqlite in tests).
"""

from __future__ import annotations

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, NoSuchModuleError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from core.exceptions import ConfigError


# ── Engine ────────────────────────────────────────────────────────────

def create_engine(database_url: str) -> AsyncEngine:
    """
    Build the async engine; pool sizing only applies to server databases.

    Raises:
        ConfigError: the URL is malformed or names a dialect / driver
            that is not installed.
    """
    try:
        if make_url(database_url).get_backend_name() == "sqlite":
            return create_async_engine(database_url, echo=False)

        return create_async_engine(
            database_url,
            echo=False,
            pool_size=2,
            max_overflow=2,
            pool_pre_ping=True,
        )
    except (ArgumentError, NoSuchModuleError, ImportError) as exc:
        raise ConfigError(f"Unusable database URL: {exc}") from exc


# ── Session Factory ───────────────────────────────────────────────────

def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Base Model ────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    pass
