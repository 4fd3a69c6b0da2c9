"""Species models: the persisted canonical record and the transient search types."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Column, String
from sqlmodel import Field, SQLModel


class ScientificTree(SQLModel, table=True):
    """Canonical species record, one row per scientific name."""

    __tablename__: str = "scientific_trees"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    scientific_name: str = Field(
        sa_column=Column(String(200), unique=True, index=True, nullable=False)
    )  # e.g. "Quercus alba"
    common_name: str | None = Field(default=None, sa_column=Column(String(200)))  # "White Oak"


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class TaxonHit:
    """A single species search hit from the remote taxonomic registry.

    Registries are inconsistent about which name field they fill in, so all three
    candidates are kept and ``name`` picks the first usable one.
    """

    key: int | None = None
    canonical_name: str | None = None
    scientific_name: str | None = None
    species: str | None = None
    family: str | None = None
    genus: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> TaxonHit:
        """Build a hit from one entry of a GBIF ``/species/search`` ``results`` list."""
        key = payload.get("key")
        return cls(
            key=key if isinstance(key, int) and not isinstance(key, bool) else None,
            canonical_name=_text(payload.get("canonicalName")),
            scientific_name=_text(payload.get("scientificName")),
            species=_text(payload.get("species")),
            family=_text(payload.get("family")),
            genus=_text(payload.get("genus")),
        )

    @property
    def name(self) -> str | None:
        """Return the best available name, or None if the hit has no usable name."""
        for candidate in (self.canonical_name, self.scientific_name, self.species):
            if isinstance(candidate, str) and candidate.strip():
                return candidate
        return None


@dataclass(frozen=True)
class EnrichedCandidate:
    """A search hit augmented with vernacular name, images and distribution."""

    scientific_name: str
    common_name: str | None = None
    family: str | None = None
    genus: str | None = None
    key: int | None = None
    images: list[str] = field(default_factory=list)
    countries: list[str] = field(default_factory=list)
    description: str | None = None


@dataclass
class SearchResultItem:
    """One row of a species search response.

    ``id`` is the canonical record id when the species is already catalogued,
    otherwise the scientific name serves as a provisional identifier.
    Empty enrichment collections are represented as None.
    """

    id: str
    scientific_name: str
    common_name: str | None = None
    family: str | None = None
    genus: str | None = None
    images: list[str] | None = None
    countries: list[str] | None = None
    description: str | None = None


def normalize_scientific_name(name: str) -> str:
    """Return the comparison form of a scientific name (trimmed, lowercased)."""
    return name.strip().lower()
