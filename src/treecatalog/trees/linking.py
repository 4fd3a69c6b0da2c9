"""Species references on tree records.

Tree create/update requests carry either a canonical species id or free text
typed by the user. Ids must already exist; free text is resolved (and created
when new) through the species catalog.
"""

import logging
import re
import uuid

from treecatalog.species.catalog import ScientificTreeService
from treecatalog.species.exceptions import InvalidReferenceError, NotFoundError

logger = logging.getLogger(__name__)

CANONICAL_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

# Values clients send to clear a tree's species link
_UNLINK_VALUES = {"", "null"}


def is_canonical_id(value: str) -> bool:
    """Check whether ``value`` has the shape of a canonical species id."""
    return bool(CANONICAL_ID_PATTERN.match(value))


class TreeSpeciesLinker:
    """Maps a tree's species reference to a canonical species id."""

    def __init__(self, catalog: ScientificTreeService):
        self.catalog = catalog

    async def resolve_reference(self, value: str | None) -> uuid.UUID | None:
        """Resolve a species reference for storing on a tree.

        Returns:
            The canonical id, or None when the reference clears the link.

        Raises:
            InvalidReferenceError: If an id-shaped reference matches no record.
            DataAccessError: If resolving a free-text name fails.
        """
        if value is None:
            return None
        reference = str(value).strip()
        if reference in _UNLINK_VALUES:
            return None

        if is_canonical_id(reference):
            try:
                row = await self.catalog.find_one(reference)
            except NotFoundError:
                raise InvalidReferenceError(
                    f"Scientific tree with ID {reference} not found."
                ) from None
            return row.id

        row = await self.catalog.resolve_or_create(reference)
        logger.debug("Resolved species reference %r to %s", reference, row.id)
        return row.id
