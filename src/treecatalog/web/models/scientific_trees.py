"""Scientific tree API contract models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# ==================== Request Models ====================


class ResolveScientificTreeRequest(BaseModel):
    """Request model for resolving a species name to its canonical record."""

    scientific_name: str = Field(
        ..., min_length=1, description="Scientific name, e.g. Quercus alba"
    )
    common_name: str | None = Field(None, description="Common name to store or backfill")


# ==================== Response Models ====================


class ScientificTreeResponse(BaseModel):
    """A canonical species record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    scientific_name: str
    common_name: str | None = None


class SearchResultItemResponse(BaseModel):
    """A single species search result.

    ``id`` is the canonical record id when catalogued, otherwise the scientific name.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    scientific_name: str
    common_name: str | None = None
    family: str | None = None
    genus: str | None = None
    images: list[str] | None = Field(None, description="Up to 3 still-image URLs")
    countries: list[str] | None = Field(None, description="Up to 5 countries, most records first")
    description: str | None = None
