"""Web test fixtures: an app on a temporary database and the fake GBIF."""

import httpx
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from treecatalog.config import TreeCatalogConfig
from treecatalog.web.core.container import Container
from treecatalog.web.core.factory import create_app


@pytest.fixture
def container(path_resolver, gbif_transport):
    """Container isolated to tmp_path, talking to the fake registry.

    Providers are overridden before the app is built so no singleton ever sees
    /var/lib/treecatalog or the real GBIF.
    """
    container = Container()
    container.path_resolver.override(providers.Singleton(lambda: path_resolver))
    container.config.override(
        providers.Singleton(lambda: TreeCatalogConfig(site_name="Test Catalog"))
    )
    container.http_client.override(
        providers.Singleton(
            lambda: httpx.AsyncClient(base_url="https://api.gbif.org/v1", transport=gbif_transport)
        )
    )
    yield container
    container.unwire()
    container.reset_singletons()


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def client(app):
    """Test client with the app lifespan running (database initialized)."""
    with TestClient(app) as test_client:
        yield test_client
