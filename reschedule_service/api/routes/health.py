"""
Health check endpoints for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from reschedule_service.config.database import get_db_session
from reschedule_service.config.logging import get_logger
from reschedule_service.config.settings import settings
from reschedule_service.infrastructure.monitoring.health_checks import HealthChecker
from reschedule_service.infrastructure.monitoring.metrics import (
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


async def get_health_checker(
    db: AsyncSession = Depends(get_db_session),
) -> HealthChecker:
    """Get health checker instance."""
    return HealthChecker(db)


@router.get("")
async def health_check() -> Dict[str, Any]:
    """Liveness check."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready")
async def readiness_check(
    health_checker: HealthChecker = Depends(get_health_checker),
) -> Dict[str, Any]:
    """Readiness check for Kubernetes."""
    health = await health_checker.check_readiness()

    if not health.is_healthy:
        logger.warning("Service not ready", checks=health.checks)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready",
        )

    return {"status": "ready", "checks": health.checks, "timestamp": health.timestamp}


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics."""
    if not settings.ENABLE_METRICS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Metrics disabled")
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
