"""Dependency injection container for the tree catalog application."""

from dependency_injector import containers, providers

from treecatalog.database.core import CoreDatabaseService
from treecatalog.database.row_store import SQLModelRowStore
from treecatalog.species.catalog import ScientificTreeService
from treecatalog.species.enrichment import SpeciesEnricher
from treecatalog.species.search import SpeciesSearchService
from treecatalog.species.taxon_source import GBIFTaxonSource, create_http_client
from treecatalog.system.path_resolver import PathResolver
from treecatalog.trees.linking import TreeSpeciesLinker
from treecatalog.web.core.config import get_config


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    All services are singletons: they hold no per-request state, and the HTTP
    client and database engine are connection pools meant to be shared.
    """

    # Core infrastructure services
    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    # Database path provider
    database_path = providers.Factory(
        lambda resolver: resolver.get_database_path(),
        resolver=path_resolver,
    )

    core_database = providers.Singleton(
        CoreDatabaseService,
        db_path=database_path,
    )

    row_store = providers.Singleton(
        SQLModelRowStore,
        core_database=core_database,
    )

    # Remote taxonomic registry - one pooled client for the whole process
    http_client = providers.Singleton(
        create_http_client,
        config=config.provided.taxon_source,
    )

    taxon_source = providers.Singleton(
        GBIFTaxonSource,
        client=http_client,
        config=config.provided.taxon_source,
    )

    species_enricher = providers.Singleton(
        SpeciesEnricher,
        taxon_source=taxon_source,
        image_cap=config.provided.search.image_cap,
        country_cap=config.provided.search.country_cap,
    )

    # Species business services
    species_search_service = providers.Singleton(
        SpeciesSearchService,
        taxon_source=taxon_source,
        enricher=species_enricher,
        row_store=row_store,
        config=config.provided.search,
    )

    scientific_tree_service = providers.Singleton(
        ScientificTreeService,
        row_store=row_store,
    )

    tree_species_linker = providers.Singleton(
        TreeSpeciesLinker,
        catalog=scientific_tree_service,
    )
