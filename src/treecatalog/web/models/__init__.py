"""Web API contract models using Pydantic for validation."""

from treecatalog.web.models.scientific_trees import (
    ResolveScientificTreeRequest,
    ScientificTreeResponse,
    SearchResultItemResponse,
)

__all__ = [
    "ResolveScientificTreeRequest",
    "ScientificTreeResponse",
    "SearchResultItemResponse",
]
