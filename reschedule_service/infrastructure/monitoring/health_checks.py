"""
Health check implementations for the application.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from reschedule_service.config.logging import get_logger
from reschedule_service.config.settings import settings
from reschedule_service.infrastructure.database.connection import get_database_health

logger = get_logger(__name__)


@dataclass
class HealthStatus:
    """Result of a readiness probe."""

    is_healthy: bool
    checks: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class HealthChecker:
    """Health checker for application components."""

    critical_services = ["database"]

    def __init__(self, db_session=None):
        self.db_session = db_session
        self.checks = {
            "database": self._check_database,
        }

    async def run_health_checks(self) -> Dict[str, Any]:
        """Run all health checks."""
        results = {}

        for check_name, check_func in self.checks.items():
            try:
                results[check_name] = await asyncio.wait_for(
                    check_func(), timeout=settings.HEALTH_CHECK_TIMEOUT
                )
            except Exception as e:
                logger.error("Health check failed", check_name=check_name, error=str(e))
                results[check_name] = {"status": "error", "error": str(e)}

        return results

    async def _check_database(self) -> Dict[str, Any]:
        """Check database health."""
        health_info = await get_database_health(self.db_session)

        if health_info["status"] == "healthy":
            return {
                "status": "healthy",
                "response_time_ms": health_info.get("response_time_ms", 0),
            }
        return {
            "status": "unhealthy",
            "error": health_info.get("error", "Unknown database error"),
        }

    async def check_readiness(self) -> HealthStatus:
        """Check if the service is ready to receive traffic."""
        health_results = await self.run_health_checks()

        critical_healthy = all(
            health_results.get(service, {}).get("status") == "healthy"
            for service in self.critical_services
        )

        return HealthStatus(is_healthy=critical_healthy, checks=health_results)
