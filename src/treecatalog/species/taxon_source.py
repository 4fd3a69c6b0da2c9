"""GBIF taxonomic registry client.

Wraps the four read-only lookups the species pipeline needs. The HTTP client is
injected so a single pooled ``httpx.AsyncClient`` can be shared across requests
and replaced with a mock transport in tests.

API docs: https://techdocs.gbif.org/en/openapi/
"""

import logging
from typing import Any

import httpx

from treecatalog.config.models import TaxonSourceConfig
from treecatalog.species.exceptions import TaxonSourceError
from treecatalog.species.models import TaxonHit

logger = logging.getLogger(__name__)

STILL_IMAGE = "StillImage"

# Payload shape errors: bad JSON, missing keys, wrong container types
_MALFORMED_PAYLOAD = (ValueError, KeyError, TypeError, AttributeError)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def create_http_client(config: TaxonSourceConfig) -> httpx.AsyncClient:
    """Create the pooled HTTP client used for all registry requests."""
    return httpx.AsyncClient(
        base_url=config.base_url,
        timeout=httpx.Timeout(config.timeout),
        limits=httpx.Limits(
            max_keepalive_connections=config.max_connections // 2,
            max_connections=config.max_connections,
        ),
        headers={"User-Agent": config.user_agent, "Accept": "application/json"},
    )


class GBIFTaxonSource:
    """Read-only client for GBIF species and occurrence endpoints.

    Only ``search_taxa`` raises; the enrichment lookups degrade to an empty
    value on any transport, status or payload failure.
    """

    def __init__(self, client: httpx.AsyncClient, config: TaxonSourceConfig | None = None):
        self.client = client
        self.config = config or TaxonSourceConfig()

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = await self.client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def search_taxa(self, query: str, max_candidates: int) -> list[TaxonHit]:
        """Search accepted plant species matching ``query``.

        Raises:
            TaxonSourceError: If the request fails or the payload is unusable.
        """
        params = {
            "q": query,
            "limit": max_candidates,
            "status": self.config.status,
            "rank": self.config.rank,
            "kingdom": self.config.kingdom,
        }
        try:
            data = await self._get_json("/species/search", params)
            results = data.get("results") or []
            if not isinstance(results, list):
                raise TypeError(f"Expected list of results, got {type(results).__name__}")
        except httpx.HTTPError as e:
            raise TaxonSourceError(f"GBIF species search failed: {e}") from e
        except _MALFORMED_PAYLOAD as e:
            raise TaxonSourceError(f"GBIF species search returned a malformed payload: {e}") from e

        return [TaxonHit.from_payload(result) for result in results if isinstance(result, dict)]

    async def vernacular_name(self, key: int) -> str | None:
        """Return the preferred-language vernacular name, else the first one, else None."""
        try:
            data = await self._get_json(f"/species/{key}/vernacularNames")
            entries = [
                entry
                for entry in data.get("results") or []
                if isinstance(entry, dict) and _is_text(entry.get("vernacularName"))
            ]
        except (httpx.HTTPError, *_MALFORMED_PAYLOAD) as e:
            logger.debug("Vernacular name lookup failed for %s: %s", key, e)
            return None

        for entry in entries:
            if entry.get("language") in self.config.preferred_languages:
                return entry["vernacularName"]
        if entries:
            return entries[0]["vernacularName"]
        return None

    async def occurrence_images(self, key: int, cap: int = 3) -> list[str]:
        """Return up to ``cap`` distinct still-image URLs from occurrence records."""
        params = {"speciesKey": key, "mediaType": STILL_IMAGE, "limit": cap}
        images: list[str] = []
        try:
            data = await self._get_json("/occurrence/search", params)
            for occurrence in data.get("results") or []:
                for media in occurrence.get("media") or []:
                    if not isinstance(media, dict) or media.get("type") != STILL_IMAGE:
                        continue
                    identifier = media.get("identifier")
                    if not _is_text(identifier):
                        continue
                    if identifier not in images:
                        images.append(identifier)
                    if len(images) >= cap:
                        return images
        except (httpx.HTTPError, *_MALFORMED_PAYLOAD) as e:
            logger.debug("Occurrence image lookup failed for %s: %s", key, e)
            return []
        return images

    async def country_facet(self, key: int, cap: int = 5) -> list[str]:
        """Return up to ``cap`` countries ordered by descending occurrence count."""
        try:
            # Unknown or withdrawn keys 404 here; skip the facet query for them
            await self._get_json(f"/species/{key}")
            data = await self._get_json(
                "/occurrence/search",
                {"speciesKey": key, "limit": 0, "facet": "country", "facetLimit": cap},
            )
            facets = data.get("facets") or []
            counts = (facets[0].get("counts") or []) if facets else []
        except (httpx.HTTPError, *_MALFORMED_PAYLOAD) as e:
            logger.debug("Country facet lookup failed for %s: %s", key, e)
            return []

        countries: list[str] = []
        for count in counts:
            name = count.get("name") if isinstance(count, dict) else None
            if _is_text(name) and name not in countries:
                countries.append(name)
            if len(countries) >= cap:
                break
        return countries
