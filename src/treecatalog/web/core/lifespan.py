"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from treecatalog.system.structlog_configurator import configure_structlog
from treecatalog.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Context manager for application startup and shutdown events.

    Configures logging, creates database tables, and on shutdown closes the
    registry HTTP client and disposes the database engine.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control back to the application for normal operation.
    """
    container: Container = app.container  # type: ignore[attr-defined]

    config = container.config()
    configure_structlog(config)

    core_database = container.core_database()
    await core_database.initialize()

    logger.info("Starting %s", config.site_name)

    try:
        yield
    finally:
        logger.info("Shutting down application services...")
        await container.http_client().aclose()
        await core_database.dispose()
        logger.info("All services stopped successfully")
