"""Health check endpoints for monitoring service status."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response
from sqlalchemy.exc import SQLAlchemyError

from treecatalog.database.core import CoreDatabaseService
from treecatalog.web.core.container import Container
from treecatalog.web.models.health import LivenessProbeResponse, ReadinessProbeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health")


@router.get("/live", response_model=LivenessProbeResponse)
async def liveness_probe() -> LivenessProbeResponse:
    """Kubernetes-style liveness probe.

    Returns:
        Simple status indicating the service is alive.
    """
    return LivenessProbeResponse(status="alive")


@router.get("/ready", status_code=200, response_model=ReadinessProbeResponse)
@inject
async def readiness_probe(
    db_service: Annotated[CoreDatabaseService, Depends(Provide[Container.core_database])],
    response: Response,
) -> ReadinessProbeResponse:
    """Check if service is ready to handle requests by verifying database connectivity."""
    checks = {"database": False}

    try:
        await db_service.ping()
        checks["database"] = True
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)

    is_ready = all(checks.values())
    if not is_ready:
        response.status_code = 503

    return ReadinessProbeResponse(
        status="ready" if is_ready else "not_ready",
        checks=checks,
        timestamp=datetime.now(UTC).isoformat(),
    )
