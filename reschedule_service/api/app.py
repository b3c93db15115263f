"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reschedule_service.api.dependencies import get_notification_dispatcher
from reschedule_service.api.middleware.error_handler import add_error_handlers
from reschedule_service.api.middleware.logging import LoggingMiddleware
from reschedule_service.api.routes import alternatives, health, optimizations, schedule
from reschedule_service.config.logging import get_logger
from reschedule_service.config.settings import settings
from reschedule_service.infrastructure.database.connection import (
    close_database_connections,
    test_database_connection,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Application startup", environment=settings.ENVIRONMENT)
    if not await test_database_connection():
        logger.warning("Database unreachable at startup")
    yield
    # Let in-flight notifications finish before the loop goes away
    await get_notification_dispatcher().drain(timeout=settings.NOTIFICATION_TIMEOUT_SECONDS)
    await close_database_connections()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Schedule conflict resolution and reschedule negotiation",
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
        docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    add_error_handlers(app)
    LoggingMiddleware(app)

    # Add routes
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(schedule.router, prefix=settings.API_PREFIX)
    app.include_router(alternatives.router, prefix=settings.API_PREFIX)
    app.include_router(optimizations.router, prefix=settings.API_PREFIX)

    return app
