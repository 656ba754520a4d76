"""Health check endpoint."""

import structlog
from fastapi import APIRouter, Depends

from mythoughts.api.dependencies import get_repository
from mythoughts.api.models import HealthResponse
from mythoughts.domain import ThoughtRepository

logger = structlog.get_logger()
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    repository: ThoughtRepository = Depends(get_repository),  # noqa: B008
) -> HealthResponse:
    """Health check - reports whether the storage backend answers."""
    storage = await repository.health_check()
    storage_status = "healthy" if storage.get("healthy") else "unhealthy"

    if storage_status != "healthy":
        logger.warning(
            "storage_unhealthy",
            backend=storage.get("backend"),
            error=storage.get("error"),
        )

    return HealthResponse(
        status="healthy" if storage_status == "healthy" else "degraded",
        storage=storage_status,
        backend=storage.get("backend", "unknown"),
    )
