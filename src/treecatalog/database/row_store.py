"""Generic row-store interface over the catalog database.

The species core only needs equality filters, case-insensitive substring
filters, ordering and a row cap, so that is all the interface exposes.
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from treecatalog.species.exceptions import DataAccessError

if TYPE_CHECKING:
    from treecatalog.database.core import CoreDatabaseService

logger = logging.getLogger(__name__)

TableT = TypeVar("TableT", bound=SQLModel)


class RowStore(Protocol):
    """Protocol for the row store consumed by the species services."""

    async def select(
        self,
        table: type[TableT],
        filters: Mapping[str, Any] | None = None,
        *,
        contains: Mapping[str, str] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[TableT]:
        """Return rows matching all ``filters`` and any of the ``contains`` patterns."""
        ...

    async def select_one(self, table: type[TableT], filters: Mapping[str, Any]) -> TableT | None:
        """Return the first row matching ``filters``, or None."""
        ...

    async def insert(self, table: type[TableT], values: Mapping[str, Any]) -> TableT:
        """Insert one row and return it as stored."""
        ...

    async def update(
        self, table: type[TableT], filters: Mapping[str, Any], values: Mapping[str, Any]
    ) -> TableT | None:
        """Update rows matching ``filters``; return the first updated row, or None."""
        ...


class SQLModelRowStore:
    """RowStore backed by the async SQLAlchemy session of CoreDatabaseService.

    Every SQLAlchemy failure surfaces as DataAccessError carrying the driver message.
    """

    def __init__(self, core_database: "CoreDatabaseService"):
        self.core_database = core_database

    def _build_query(
        self,
        table: type[TableT],
        filters: Mapping[str, Any] | None,
        contains: Mapping[str, str] | None = None,
    ) -> Any:
        stmt = select(table)
        for column, value in (filters or {}).items():
            stmt = stmt.where(getattr(table, column) == value)
        if contains:
            stmt = stmt.where(
                or_(
                    *(
                        getattr(table, column).icontains(pattern, autoescape=True)
                        for column, pattern in contains.items()
                    )
                )
            )
        return stmt

    async def select(
        self,
        table: type[TableT],
        filters: Mapping[str, Any] | None = None,
        *,
        contains: Mapping[str, str] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[TableT]:
        """Return rows matching all ``filters`` and any of the ``contains`` patterns."""
        stmt = self._build_query(table, filters, contains)
        if order_by:
            stmt = stmt.order_by(getattr(table, order_by).asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self.core_database.get_async_db() as session:
            try:
                result = await session.execute(stmt)
                return list(result.scalars().all())
            except SQLAlchemyError as e:
                logger.error("Select on %s failed: %s", table.__name__, e)
                raise DataAccessError(str(e)) from e

    async def select_one(self, table: type[TableT], filters: Mapping[str, Any]) -> TableT | None:
        """Return the first row matching ``filters``, or None."""
        stmt = self._build_query(table, filters).limit(1)

        async with self.core_database.get_async_db() as session:
            try:
                result = await session.execute(stmt)
                return result.scalars().first()
            except SQLAlchemyError as e:
                logger.error("Lookup on %s failed: %s", table.__name__, e)
                raise DataAccessError(str(e)) from e

    async def insert(self, table: type[TableT], values: Mapping[str, Any]) -> TableT:
        """Insert one row and return it as stored."""
        row = table(**values)

        async with self.core_database.get_async_db() as session:
            try:
                session.add(row)
                await session.commit()
                await session.refresh(row)
                return row
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Insert into %s failed: %s", table.__name__, e)
                raise DataAccessError(str(e)) from e

    async def update(
        self, table: type[TableT], filters: Mapping[str, Any], values: Mapping[str, Any]
    ) -> TableT | None:
        """Update rows matching ``filters``; return the first updated row, or None."""
        stmt = self._build_query(table, filters)

        async with self.core_database.get_async_db() as session:
            try:
                result = await session.execute(stmt)
                rows = list(result.scalars().all())
                for row in rows:
                    for column, value in values.items():
                        setattr(row, column, value)
                await session.commit()
                if not rows:
                    return None
                await session.refresh(rows[0])
                return rows[0]
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Update on %s failed: %s", table.__name__, e)
                raise DataAccessError(str(e)) from e
