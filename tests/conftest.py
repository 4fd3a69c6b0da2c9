"""Shared fixtures: isolated paths, a temporary catalog database and a fake GBIF."""

from pathlib import Path
from typing import Any

import httpx
import pytest

from treecatalog.config import TreeCatalogConfig
from treecatalog.database.core import CoreDatabaseService
from treecatalog.database.row_store import SQLModelRowStore
from treecatalog.species.taxon_source import GBIFTaxonSource
from treecatalog.system.path_resolver import PathResolver

GBIF_BASE_URL = "https://api.gbif.org/v1"


class FakeGBIF:
    """In-memory stand-in for the GBIF endpoints the taxon source calls.

    Tests fill in the response tables, then inspect ``requests`` to see what was asked.
    """

    def __init__(self) -> None:
        self.search_results: Any = []
        self.vernacular_names: dict[int, list[dict[str, Any]]] = {}
        self.occurrences: dict[int, list[dict[str, Any]]] = {}
        self.country_counts: dict[int, list[dict[str, Any]]] = {}
        self.unknown_keys: set[int] = set()
        self.failing_paths: set[str] = set()  # answered with HTTP 500
        self.search_down = False
        self.requests: list[httpx.Request] = []

    @property
    def paths(self) -> list[str]:
        return [request.url.path.removeprefix("/v1") for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")
        params = request.url.params

        if path == "/species/search" and self.search_down:
            raise httpx.ConnectError("registry unreachable", request=request)
        if path in self.failing_paths:
            return httpx.Response(500, json={"error": "internal"})

        if path == "/species/search":
            return httpx.Response(200, json={"results": self.search_results})

        if path == "/occurrence/search":
            key = int(params["speciesKey"])
            if params.get("facet") == "country":
                counts = self.country_counts.get(key, [])
                return httpx.Response(
                    200,
                    json={
                        "count": 0,
                        "results": [],
                        "facets": [{"field": "COUNTRY", "counts": counts}],
                    },
                )
            return httpx.Response(200, json={"results": self.occurrences.get(key, [])})

        parts = path.strip("/").split("/")
        if parts[0] == "species" and len(parts) in (2, 3):
            key = int(parts[1])
            if key in self.unknown_keys:
                return httpx.Response(404, json={"error": "not found"})
            if len(parts) == 2:
                return httpx.Response(200, json={"key": key})
            if parts[2] == "vernacularNames":
                return httpx.Response(200, json={"results": self.vernacular_names.get(key, [])})

        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def path_resolver(tmp_path: Path) -> PathResolver:
    """Provide a PathResolver whose writable paths all live under tmp_path.

    Config and database paths are overridden on the instance so tests never touch
    /var/lib/treecatalog.
    """
    resolver = PathResolver()

    temp_data_dir = tmp_path / "data"
    temp_data_dir.mkdir(parents=True)
    resolver.data_dir = temp_data_dir
    resolver.get_data_dir = lambda: temp_data_dir
    resolver.get_database_path = lambda: temp_data_dir / "database" / "treecatalog.db"
    resolver.get_treecatalog_config_path = lambda: temp_data_dir / "config" / "treecatalog.yaml"

    return resolver


@pytest.fixture
def test_config() -> TreeCatalogConfig:
    """Default configuration, never read from disk."""
    return TreeCatalogConfig()


@pytest.fixture
async def core_database(path_resolver):
    """Initialized catalog database in a temporary file."""
    service = CoreDatabaseService(path_resolver.get_database_path())
    await service.initialize()
    yield service
    await service.dispose()


@pytest.fixture
def row_store(core_database) -> SQLModelRowStore:
    return SQLModelRowStore(core_database)


@pytest.fixture
def fake_gbif() -> FakeGBIF:
    return FakeGBIF()


@pytest.fixture
def gbif_transport(fake_gbif) -> httpx.MockTransport:
    return httpx.MockTransport(fake_gbif.handler)


@pytest.fixture
async def gbif_client(gbif_transport):
    async with httpx.AsyncClient(base_url=GBIF_BASE_URL, transport=gbif_transport) as client:
        yield client


@pytest.fixture
def taxon_source(gbif_client, test_config) -> GBIFTaxonSource:
    """GBIF client wired to the fake registry."""
    return GBIFTaxonSource(gbif_client, test_config.taxon_source)
