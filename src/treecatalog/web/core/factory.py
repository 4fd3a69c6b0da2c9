"""Application factory for creating FastAPI application with dependency injection."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from treecatalog.web.core.container import Container
from treecatalog.web.core.lifespan import lifespan
from treecatalog.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from treecatalog.web.routers import health_api_routes, scientific_trees_api_routes


def create_app(container: Container | None = None) -> FastAPI:
    """Create FastAPI application with dependency injection.

    Args:
        container: Optional pre-configured container (tests pass one with overrides).

    Returns:
        FastAPI: The configured application instance.
    """
    container = container or Container()

    app = FastAPI(
        lifespan=lifespan,
        title="Tree Catalog API",
        description="Species search and canonical species records for the tree map",
        version="0.1.0",
    )
    app.container = container  # type: ignore[attr-defined]

    # The map front end is served from a different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # nosemgrep
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(StructuredRequestLoggingMiddleware)

    container.wire(
        modules=[
            "treecatalog.web.routers.health_api_routes",
            "treecatalog.web.routers.scientific_trees_api_routes",
        ]
    )

    app.include_router(
        scientific_trees_api_routes.router, prefix="/api", tags=["Scientific Trees API"]
    )
    app.include_router(health_api_routes.router, prefix="/api", tags=["Health Check API"])

    return app
