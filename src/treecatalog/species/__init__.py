"""Species domain package.

This package contains the species resolution and enrichment pipeline:
- ScientificTree: canonical species record
- GBIFTaxonSource: remote taxonomic registry client
- SpeciesEnricher: per-hit vernacular name, image and distribution lookup
- SpeciesSearchService: registry search with store reconciliation and local fallback
- ScientificTreeService: resolve-or-create and direct lookups

Services should be imported from their modules, e.g.
``from treecatalog.species.search import SpeciesSearchService``.
"""

from treecatalog.species.exceptions import (
    DataAccessError,
    InvalidReferenceError,
    NotFoundError,
    SpeciesError,
    TaxonSourceError,
)
from treecatalog.species.models import (
    EnrichedCandidate,
    ScientificTree,
    SearchResultItem,
    TaxonHit,
)

__all__ = [
    "DataAccessError",
    "EnrichedCandidate",
    "InvalidReferenceError",
    "NotFoundError",
    "ScientificTree",
    "SearchResultItem",
    "SpeciesError",
    "TaxonHit",
    "TaxonSourceError",
]
