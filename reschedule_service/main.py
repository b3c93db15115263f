"""
Main application entry point.
"""

from reschedule_service.api.app import create_app
from reschedule_service.config.logging import configure_logging, get_logger
from reschedule_service.config.settings import settings

configure_logging()
logger = get_logger(__name__)

app = create_app()


def run() -> None:
    """Run the API server."""
    import uvicorn

    logger.info(
        "Starting reschedule service", host=settings.API_HOST, port=settings.API_PORT
    )

    uvicorn.run(
        "reschedule_service.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
