"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (blob store
directory, database pool, schema bootstrap, pool dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import Settings, get_settings
from app.infrastructure.external.storage import LocalBlobStore
from app.infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: blob store (creates storage_root), database connect with
    bounded retries, schema bootstrap. A database that never answers raises
    DatabaseUnavailableError and the server does not start.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()

    # ---- Startup ----
    app.state.blob_store = LocalBlobStore(settings.storage_root)
    logger.info("Blob store ready at %s", app.state.blob_store.storage_root)

    database = Database.from_settings(settings)
    try:
        await database.connect(
            attempts=settings.db_connect_attempts,
            retry_delay=settings.db_connect_retry_delay_seconds,
        )
        if settings.database_auto_create_schema:
            await database.create_schema()
            logger.info("Database schema ensured")
    except BaseException:
        await database.dispose()
        raise
    app.state.database = database

    yield

    # ---- Shutdown ----
    await database.dispose()
    app.state.database = None
    logger.info("Database engine disposed")
