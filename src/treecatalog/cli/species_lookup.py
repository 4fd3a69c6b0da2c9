"""CLI for searching species and resolving names against the catalog.

Examples:
    # Search GBIF, reconciled with the local catalog
    treecatalog-species search "red maple" --limit 5

    # Search the local catalog only
    treecatalog-species search oak --offline

    # Look up or create the canonical record for a name
    treecatalog-species resolve "Acer rubrum" --common-name "Red Maple"
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import click

from treecatalog.config import ConfigManager, TreeCatalogConfig
from treecatalog.database.core import CoreDatabaseService
from treecatalog.database.row_store import SQLModelRowStore
from treecatalog.species.catalog import ScientificTreeService
from treecatalog.species.enrichment import SpeciesEnricher
from treecatalog.species.exceptions import DataAccessError
from treecatalog.species.models import ScientificTree, SearchResultItem
from treecatalog.species.search import SpeciesSearchService
from treecatalog.species.taxon_source import GBIFTaxonSource, create_http_client
from treecatalog.system.path_resolver import PathResolver
from treecatalog.system.structlog_configurator import configure_structlog


@dataclass
class _Services:
    search: SpeciesSearchService
    catalog: ScientificTreeService


@asynccontextmanager
async def _open_services(
    config: TreeCatalogConfig, path_resolver: PathResolver
) -> AsyncIterator[_Services]:
    """Build the species services and release their pools on exit."""
    db_service = CoreDatabaseService(path_resolver.get_database_path())
    await db_service.initialize()
    http_client = create_http_client(config.taxon_source)
    try:
        row_store = SQLModelRowStore(db_service)
        taxon_source = GBIFTaxonSource(http_client, config.taxon_source)
        enricher = SpeciesEnricher(
            taxon_source,
            image_cap=config.search.image_cap,
            country_cap=config.search.country_cap,
        )
        yield _Services(
            search=SpeciesSearchService(taxon_source, enricher, row_store, config.search),
            catalog=ScientificTreeService(row_store),
        )
    finally:
        await http_client.aclose()
        await db_service.dispose()


def _format_result(item: SearchResultItem) -> str:
    label = item.scientific_name
    if item.common_name:
        label = f"{item.common_name} ({item.scientific_name})"
    line = f"{label} [{item.id}]"
    if item.description:
        line += f" - {item.description}"
    return line


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Tree Catalog species tools.

    Search GBIF for plant species and manage canonical species records.
    """
    ctx.ensure_object(dict)
    ctx.obj["path_resolver"] = PathResolver()
    ctx.obj["config"] = ConfigManager(ctx.obj["path_resolver"]).load()
    configure_structlog(ctx.obj["config"])


@cli.command()
@click.argument("query")
@click.option("--limit", type=click.IntRange(1, 100), default=20, help="Maximum results")
@click.option("--offline", is_flag=True, help="Search the local catalog only")
@click.pass_context
def search(ctx: click.Context, query: str, limit: int, offline: bool) -> None:
    """Search species by scientific or common name."""
    try:
        results = asyncio.run(
            _search_async(ctx.obj["config"], ctx.obj["path_resolver"], query, limit, offline)
        )
    except DataAccessError as e:
        raise click.ClickException(str(e)) from e

    if not results:
        click.echo(click.style("No species found", fg="yellow"))
        return
    for item in results:
        click.echo(_format_result(item))


async def _search_async(
    config: TreeCatalogConfig, path_resolver: PathResolver, query: str, limit: int, offline: bool
) -> list[SearchResultItem]:
    async with _open_services(config, path_resolver) as services:
        if offline:
            return await services.search.search_database(query, limit)
        return await services.search.search(query, limit)


@cli.command()
@click.argument("scientific_name")
@click.option("--common-name", default=None, help="Common name to store or backfill")
@click.pass_context
def resolve(ctx: click.Context, scientific_name: str, common_name: str | None) -> None:
    """Find or create the canonical record for SCIENTIFIC_NAME."""
    try:
        row = asyncio.run(
            _resolve_async(
                ctx.obj["config"], ctx.obj["path_resolver"], scientific_name, common_name
            )
        )
    except (DataAccessError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(click.style(f"{row.scientific_name}", fg="green", bold=True))
    click.echo(f"  id:          {row.id}")
    click.echo(f"  common name: {row.common_name or '-'}")


async def _resolve_async(
    config: TreeCatalogConfig,
    path_resolver: PathResolver,
    scientific_name: str,
    common_name: str | None,
) -> ScientificTree:
    async with _open_services(config, path_resolver) as services:
        return await services.catalog.resolve_or_create(scientific_name, common_name)


def main() -> None:
    """Entry point for the species CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
