"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Database owns one engine (connection pool) per process. It is built in the
application lifespan and shared through app.state; repositories open a
short-lived session per operation from it.

The schema is a single documents table. It is created on startup when
database_auto_create_schema is set, otherwise by: alembic upgrade head.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings
from app.infrastructure.exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _engine_kwargs(settings: Settings) -> dict[str, Any]:
    """Pool and driver options; pool sizing only applies to PostgreSQL."""
    kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if "postgresql" not in settings.database_url:
        return kwargs
    pool_size = settings.db_pool_size if settings.db_pool_size is not None else 20
    max_overflow = (
        settings.db_max_overflow if settings.db_max_overflow is not None else 30
    )
    command_timeout = (
        settings.db_command_timeout
        if settings.db_command_timeout is not None
        else 60
    )
    kwargs.update(
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=3600,
        connect_args={"command_timeout": command_timeout},
    )
    return kwargs


class Database:
    """Engine plus session factory for the metadata store."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
            autocommit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create the engine from settings. Does not connect yet."""
        return cls(create_async_engine(settings.database_url, **_engine_kwargs(settings)))

    async def ping(self) -> None:
        """Run SELECT 1. Raises whatever the driver raises when unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self, attempts: int, retry_delay: float) -> None:
        """Ping the database, retrying a bounded number of times.

        Raises:
            DatabaseUnavailableError: every attempt failed.
        """
        last_error: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                await self.ping()
                logger.info("Connected to database (attempt %d/%d)", attempt, attempts)
                return
            except Exception as e:
                last_error = e
                logger.warning(
                    "Database connection attempt %d/%d failed: %s", attempt, attempts, e
                )
                if attempt < attempts:
                    await asyncio.sleep(retry_delay)
        raise DatabaseUnavailableError(attempts, str(last_error)) from last_error

    async def create_schema(self) -> None:
        """Create missing tables (CREATE TABLE IF NOT EXISTS semantics)."""
        # Registers Document on Base.metadata
        from app.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Read session. Does not commit."""
        async with self.session_factory() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Write session. Commits on success, rolls back on exception."""
        async with self.session_factory() as session:
            async with session.begin():
                yield session

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
