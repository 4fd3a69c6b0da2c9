"""Configuration models for the tree catalog.

This module contains all configuration-related Pydantic models used throughout the application.
"""

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "treecatalog"})


class TaxonSourceConfig(BaseModel):
    """Remote taxonomic registry (GBIF) connection settings."""

    base_url: str = "https://api.gbif.org/v1"
    timeout: float = 30.0  # Seconds, applied to every request
    max_connections: int = 20
    user_agent: str = "treecatalog/0.1"

    # Server-side search filters
    kingdom: str = "Plantae"
    rank: str = "SPECIES"
    status: str = "ACCEPTED"

    # Vernacular name language tags, in order of preference
    preferred_languages: list[str] = Field(default_factory=lambda: ["eng", "en"])

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid taxon source URL '{v}'. Must start with http:// or https://")
        return v.rstrip("/")


class SearchConfig(BaseModel):
    """Species search limits."""

    default_limit: int = 20
    min_query_length: int = 2
    max_candidates: int = 50  # Upper bound on hits requested from the registry
    max_enriched_candidates: int = 10  # Each enriched candidate costs up to 3 extra requests
    image_cap: int = 3
    country_cap: int = 5


class TreeCatalogConfig(BaseModel):
    """Configuration settings for the tree catalog application."""

    site_name: str = "Tree Catalog"

    # Logging settings
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # External taxonomy
    taxon_source: TaxonSourceConfig = Field(default_factory=TaxonSourceConfig)

    # Search behaviour
    search: SearchConfig = Field(default_factory=SearchConfig)
