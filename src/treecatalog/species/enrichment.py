"""Per-hit enrichment: vernacular name, representative images and distribution."""

import asyncio
import logging
from typing import Any

from treecatalog.species.models import EnrichedCandidate, TaxonHit
from treecatalog.species.taxon_source import GBIFTaxonSource

logger = logging.getLogger(__name__)


def describe_taxon(genus: str | None, family: str | None) -> str | None:
    """Build the short taxonomic description shown under a search result.

    >>> describe_taxon("Quercus", "Fagaceae")
    'Quercus (Fagaceae family)'
    """
    if not genus:
        return None
    if family:
        return f"{genus} ({family} family)"
    return genus


class SpeciesEnricher:
    """Gathers the enrichment lookups for one search hit concurrently."""

    def __init__(self, taxon_source: GBIFTaxonSource, image_cap: int = 3, country_cap: int = 5):
        self.taxon_source = taxon_source
        self.image_cap = image_cap
        self.country_cap = country_cap

    async def enrich(self, hit: TaxonHit) -> EnrichedCandidate | None:
        """Return the enriched candidate for ``hit``, or None if it has no usable name.

        Hits without a registry key are still returned, built from their own
        fields only.
        """
        scientific_name = hit.name
        if scientific_name is None:
            return None

        common_name: str | None = None
        images: list[str] = []
        countries: list[str] = []

        if hit.key is not None:
            results = await asyncio.gather(
                self.taxon_source.vernacular_name(hit.key),
                self.taxon_source.occurrence_images(hit.key, self.image_cap),
                self.taxon_source.country_facet(hit.key, self.country_cap),
                return_exceptions=True,
            )
            common_name = self._unwrap(hit, "vernacular name", results[0], None)
            images = self._unwrap(hit, "images", results[1], [])
            countries = self._unwrap(hit, "countries", results[2], [])

        return EnrichedCandidate(
            scientific_name=scientific_name,
            common_name=common_name,
            family=hit.family,
            genus=hit.genus,
            key=hit.key,
            images=images,
            countries=countries,
            description=describe_taxon(hit.genus, hit.family),
        )

    @staticmethod
    def _unwrap(hit: TaxonHit, label: str, result: Any, empty: Any) -> Any:
        if isinstance(result, BaseException):
            logger.warning("Dropping %s for %s (key %s): %s", label, hit.name, hit.key, result)
            return empty
        return result if result is not None else empty
