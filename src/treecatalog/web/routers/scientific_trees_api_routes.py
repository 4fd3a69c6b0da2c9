"""Scientific tree API routes: species search, resolution and lookup."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from treecatalog.species.catalog import ScientificTreeService
from treecatalog.species.exceptions import DataAccessError, NotFoundError
from treecatalog.species.search import SpeciesSearchService
from treecatalog.web.core.container import Container
from treecatalog.web.models.scientific_trees import (
    ResolveScientificTreeRequest,
    ScientificTreeResponse,
    SearchResultItemResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scientific-trees")


@router.get(
    "/search",
    response_model=list[SearchResultItemResponse],
    response_model_exclude_none=True,
)
@inject
async def search_scientific_trees(
    search_service: Annotated[
        SpeciesSearchService, Depends(Provide[Container.species_search_service])
    ],
    q: str = Query(default="", description="Scientific or common name fragment"),
    limit: int = Query(default=20, ge=1, le=100),
) -> list[SearchResultItemResponse]:
    """Search species by name, enriched from GBIF and reconciled with the catalog."""
    try:
        results = await search_service.search(q, limit)
    except DataAccessError as e:
        logger.error("Species search failed for %r: %s", q, e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return [SearchResultItemResponse.model_validate(item) for item in results]


@router.post("/resolve", response_model=ScientificTreeResponse)
@inject
async def resolve_scientific_tree(
    request: ResolveScientificTreeRequest,
    tree_service: Annotated[
        ScientificTreeService, Depends(Provide[Container.scientific_tree_service])
    ],
) -> ScientificTreeResponse:
    """Return the canonical record for a scientific name, creating it when new."""
    try:
        row = await tree_service.resolve_or_create(request.scientific_name, request.common_name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except DataAccessError as e:
        logger.error("Resolving %s failed: %s", request.scientific_name, e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return ScientificTreeResponse.model_validate(row)


@router.get("/{tree_id}", response_model=ScientificTreeResponse)
@inject
async def get_scientific_tree(
    tree_id: str,
    tree_service: Annotated[
        ScientificTreeService, Depends(Provide[Container.scientific_tree_service])
    ],
) -> ScientificTreeResponse:
    """Get a single canonical species record."""
    try:
        row = await tree_service.find_one(tree_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except DataAccessError as e:
        logger.error("Fetching scientific tree %s failed: %s", tree_id, e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return ScientificTreeResponse.model_validate(row)


@router.get("/", response_model=list[ScientificTreeResponse])
@inject
async def list_scientific_trees(
    tree_service: Annotated[
        ScientificTreeService, Depends(Provide[Container.scientific_tree_service])
    ],
) -> list[ScientificTreeResponse]:
    """List every canonical species record, ordered by scientific name."""
    try:
        rows = await tree_service.find_all()
    except DataAccessError as e:
        logger.error("Listing scientific trees failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return [ScientificTreeResponse.model_validate(row) for row in rows]
