import contextlib
import logging
from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,  # type: ignore[attr-defined]
    create_async_engine,
)
from sqlmodel import SQLModel

# Register table models with SQLModel.metadata before create_all runs
from treecatalog.species import models as _species_models  # noqa: F401

logger = logging.getLogger(__name__)


class CoreDatabaseService:
    """Provides an interface for the catalog database, including initialization."""

    def __init__(self, db_path: Path | None = None, db_url: str | None = None):
        if db_url is None:
            if db_path is None:
                raise ValueError("Either db_path or db_url is required")
            db_path.parent.mkdir(parents=True, exist_ok=True)
            db_url = f"sqlite+aiosqlite:///{db_path}"

        self.db_path = db_path
        self.db_url = db_url

        self.async_engine = create_async_engine(self.db_url, pool_pre_ping=True)

        self.async_session_local = async_sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.async_engine,
            class_=AsyncSession,
        )

        # Tables are created by initialize(), which must be awaited after construction

    async def initialize(self) -> None:
        """Initialize the database asynchronously."""
        async with self.async_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        if self.db_url.startswith("sqlite"):
            await self._apply_sqlite_pragmas()

    @contextlib.asynccontextmanager
    async def get_async_db(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide an async database session for dependency injection."""
        async with self.async_session_local() as session:
            yield session

    async def _apply_sqlite_pragmas(self) -> None:
        """Apply one-time SQLite settings for concurrent readers."""
        async with self.get_async_db() as session:
            try:
                await session.execute(text("PRAGMA journal_mode = WAL"))
                await session.execute(text("PRAGMA synchronous = NORMAL"))
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.warning("Failed to apply SQLite pragmas: %s", e)

    async def ping(self) -> None:
        """Run a trivial query; raises SQLAlchemyError when the database is unreachable."""
        async with self.get_async_db() as session:
            await session.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Dispose of database engines to release resources.

        This should be called when the service is no longer needed,
        especially in tests, to prevent file descriptor leaks.
        """
        if self.async_engine:
            await self.async_engine.dispose()
            logger.debug("Async database engine disposed")
