"""
Health check endpoint.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, status

from github_wrapped.api.models.responses import HealthResponse
from github_wrapped.core.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

VERSION = "0.1.0"


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns basic system health status",
    tags=["Health"],
)
async def health_check(request: Request) -> HealthResponse:
    manager = request.app.state.pipeline_manager
    startup_time = getattr(request.app.state, "startup_time", None)

    uptime_seconds = None
    if startup_time:
        uptime_seconds = (datetime.now(timezone.utc) - startup_time).total_seconds()

    overall_status = "healthy" if manager.is_running else "unavailable"

    logger.debug("Health check performed", extra={"status": overall_status})

    return HealthResponse(
        status=overall_status,
        pipeline_running=manager.is_running,
        cache_backend=manager.store_backend,
        demo_mode=manager.settings.DEMO_MODE,
        uptime_seconds=uptime_seconds,
        version=VERSION,
    )
