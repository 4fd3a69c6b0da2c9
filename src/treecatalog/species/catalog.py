"""Canonical species records: resolve-or-create and direct lookups."""

import logging
import uuid

from treecatalog.database.row_store import RowStore
from treecatalog.species.exceptions import DataAccessError, NotFoundError
from treecatalog.species.models import ScientificTree

logger = logging.getLogger(__name__)


class ScientificTreeService:
    """Reads and writes canonical species rows through the row store."""

    def __init__(self, row_store: RowStore):
        self.row_store = row_store

    async def resolve_or_create(
        self, scientific_name: str, common_name: str | None = None
    ) -> ScientificTree:
        """Return the canonical row for ``scientific_name``, creating it if absent.

        A differing ``common_name`` overwrites the stored one. The lookup and the
        insert are not atomic: two concurrent calls for a new name both try to
        insert, and the unique constraint on ``scientific_name`` turns the loser
        into a DataAccessError.

        Raises:
            ValueError: If ``scientific_name`` is blank.
            DataAccessError: If the lookup, update or insert fails.
        """
        if not scientific_name or not scientific_name.strip():
            raise ValueError("scientific_name must not be empty")

        try:
            existing = await self.row_store.select_one(
                ScientificTree, {"scientific_name": scientific_name}
            )
        except DataAccessError as e:
            raise DataAccessError(f"Failed to look up scientific tree: {e}") from e

        if existing is not None:
            if common_name and existing.common_name != common_name:
                try:
                    updated = await self.row_store.update(
                        ScientificTree, {"id": existing.id}, {"common_name": common_name}
                    )
                except DataAccessError as e:
                    raise DataAccessError(f"Failed to update scientific tree: {e}") from e
                logger.info("Updated common name of %s to %s", scientific_name, common_name)
                return updated or existing
            return existing

        try:
            created = await self.row_store.insert(
                ScientificTree,
                {"scientific_name": scientific_name, "common_name": common_name or None},
            )
        except DataAccessError as e:
            raise DataAccessError(f"Failed to create scientific tree: {e}") from e

        logger.info("Created scientific tree %s (%s)", scientific_name, created.id)
        return created

    async def find_one(self, tree_id: uuid.UUID | str) -> ScientificTree:
        """Get a single canonical record by id.

        Raises:
            NotFoundError: If no record has this id.
            DataAccessError: If the lookup fails.
        """
        try:
            key = tree_id if isinstance(tree_id, uuid.UUID) else uuid.UUID(str(tree_id))
        except ValueError:
            raise NotFoundError(f"Scientific tree with ID {tree_id} not found") from None

        try:
            row = await self.row_store.select_one(ScientificTree, {"id": key})
        except DataAccessError as e:
            raise DataAccessError(f"Failed to fetch scientific tree: {e}") from e

        if row is None:
            raise NotFoundError(f"Scientific tree with ID {tree_id} not found")
        return row

    async def find_all(self) -> list[ScientificTree]:
        """Get every canonical record, ordered by scientific name."""
        try:
            return await self.row_store.select(ScientificTree, order_by="scientific_name")
        except DataAccessError as e:
            raise DataAccessError(f"Failed to fetch scientific trees: {e}") from e
