"""Species search: registry lookup, enrichment, store reconciliation and local fallback."""

import asyncio
import logging
import unicodedata

from treecatalog.config.models import SearchConfig
from treecatalog.database.row_store import RowStore
from treecatalog.species.enrichment import SpeciesEnricher
from treecatalog.species.exceptions import DataAccessError, TaxonSourceError
from treecatalog.species.models import (
    EnrichedCandidate,
    ScientificTree,
    SearchResultItem,
    TaxonHit,
    normalize_scientific_name,
)
from treecatalog.species.taxon_source import GBIFTaxonSource

logger = logging.getLogger(__name__)


def _collation_key(value: str) -> tuple[str, str]:
    """Accent- and case-insensitive ordering, with the raw value as tie-breaker."""
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (base.casefold(), value)


def result_sort_key(item: SearchResultItem) -> tuple[int, tuple[str, str]]:
    """Sort named results first by common name, then the rest by scientific name."""
    if item.common_name:
        return (0, _collation_key(item.common_name))
    return (1, _collation_key(item.scientific_name))


class SpeciesSearchService:
    """Turns a free-text species query into reconciled, enriched search results.

    The registry search is the only call whose failure switches to the local
    database search; enrichment and reconciliation failures only thin out the
    affected candidate.
    """

    def __init__(
        self,
        taxon_source: GBIFTaxonSource,
        enricher: SpeciesEnricher,
        row_store: RowStore,
        config: SearchConfig | None = None,
    ):
        self.taxon_source = taxon_source
        self.enricher = enricher
        self.row_store = row_store
        self.config = config or SearchConfig()

    async def search(self, query: str, limit: int | None = None) -> list[SearchResultItem]:
        """Search the registry for species matching ``query``.

        Args:
            query: Free text, scientific or common name
            limit: Maximum number of results (defaults to the configured limit)

        Returns:
            Results ordered by common name, then scientific name. When the registry
            is unreachable, the local database results in store order.

        Raises:
            DataAccessError: Only when the registry is down and the local search fails too.
        """
        if limit is None:
            limit = self.config.default_limit
        if len(query.strip()) < self.config.min_query_length or limit < 1:
            return []

        max_candidates = min(limit * 2, self.config.max_candidates)
        try:
            hits = await self.taxon_source.search_taxa(query, max_candidates)
        except TaxonSourceError as e:
            logger.warning("Registry search failed, falling back to local search: %s", e)
            return await self.search_database(query, limit)

        top_hits = self._dedupe_hits(hits[: min(limit, self.config.max_enriched_candidates)])
        enriched = await asyncio.gather(*(self.enricher.enrich(hit) for hit in top_hits))
        candidates = [candidate for candidate in enriched if candidate is not None]

        results = list(await asyncio.gather(*(self._reconcile(c) for c in candidates)))
        results.sort(key=result_sort_key)
        return results[:limit]

    async def search_database(self, query: str, limit: int) -> list[SearchResultItem]:
        """Substring search over catalogued species names, without enrichment.

        Raises:
            DataAccessError: If the database cannot be queried.
        """
        try:
            rows = await self.row_store.select(
                ScientificTree,
                contains={"scientific_name": query, "common_name": query},
                limit=limit,
            )
        except DataAccessError as e:
            raise DataAccessError(f"Failed to search database: {e}") from e

        seen: set[str] = set()
        results: list[SearchResultItem] = []
        for row in rows:
            normalized = normalize_scientific_name(row.scientific_name)
            if normalized in seen:
                continue
            seen.add(normalized)
            results.append(
                SearchResultItem(
                    id=str(row.id),
                    scientific_name=row.scientific_name,
                    common_name=row.common_name or None,
                )
            )
        return results

    @staticmethod
    def _dedupe_hits(hits: list[TaxonHit]) -> list[TaxonHit]:
        """Drop nameless hits and repeats of a name already seen (first one wins)."""
        seen: set[str] = set()
        unique: list[TaxonHit] = []
        for hit in hits:
            name = hit.name
            if name is None:
                continue
            normalized = normalize_scientific_name(name)
            if normalized in seen:
                continue
            seen.add(normalized)
            unique.append(hit)
        return unique

    async def _reconcile(self, candidate: EnrichedCandidate) -> SearchResultItem:
        """Attach the canonical id and common name if the species is already catalogued."""
        try:
            existing = await self.row_store.select_one(
                ScientificTree, {"scientific_name": candidate.scientific_name}
            )
        except DataAccessError as e:
            logger.warning("Could not reconcile %s: %s", candidate.scientific_name, e)
            existing = None

        return SearchResultItem(
            id=str(existing.id) if existing else candidate.scientific_name,
            scientific_name=candidate.scientific_name,
            common_name=(existing.common_name if existing else None)
            or candidate.common_name
            or None,
            family=candidate.family,
            genus=candidate.genus,
            images=candidate.images or None,
            countries=candidate.countries or None,
            description=candidate.description,
        )
