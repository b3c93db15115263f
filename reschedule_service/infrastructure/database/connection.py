"""
Database connection utilities.
"""

import time
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from reschedule_service.config.database import async_session_factory
from reschedule_service.config.logging import get_logger

logger = get_logger(__name__)


async def get_database_health(session: Optional[AsyncSession] = None) -> Dict[str, Any]:
    """Check database health."""
    try:
        start_time = time.time()

        if session is not None:
            await session.execute(text("SELECT 1"))
        else:
            async with async_session_factory() as own_session:
                await own_session.execute(text("SELECT 1"))

        response_time = (time.time() - start_time) * 1000

        return {"status": "healthy", "response_time_ms": response_time}

    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return {"status": "unhealthy", "error": str(e)}


async def test_database_connection() -> bool:
    """Test database connection."""
    health = await get_database_health()
    return health["status"] == "healthy"


async def close_database_connections() -> None:
    """Dispose the pooled engine behind the global session factory."""
    engine = async_session_factory.kw.get("bind")
    if engine is not None:
        await engine.dispose()
    logger.info("Database connections closed")
