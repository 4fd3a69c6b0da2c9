"""Tests for the dependency injection container."""

from treecatalog.species.search import SpeciesSearchService
from treecatalog.trees.linking import TreeSpeciesLinker


class TestContainer:
    """Test provider wiring."""

    def test_services_share_singletons(self, container):
        """Should hand every service the same row store and registry client."""
        search_service = container.species_search_service()
        linker = container.tree_species_linker()

        assert isinstance(search_service, SpeciesSearchService)
        assert isinstance(linker, TreeSpeciesLinker)
        assert linker.catalog is container.scientific_tree_service()
        assert linker.catalog.row_store is search_service.row_store
        assert search_service.taxon_source.client is container.http_client()
        assert search_service.enricher.taxon_source is search_service.taxon_source

    def test_config_drives_services(self, container):
        """Should pass the configured search settings and database path through."""
        search_service = container.species_search_service()

        assert search_service.config.max_enriched_candidates == 10
        assert search_service.enricher.image_cap == 3
        assert search_service.enricher.country_cap == 5
        assert container.core_database().db_path == container.path_resolver().get_database_path()
