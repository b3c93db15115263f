"""
Configuration package.
"""

from .database import (
    async_session_factory,
    create_engine,
    get_async_session_factory,
    get_database_url,
    get_db_session,
)
from .logging import configure_logging, get_logger
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
    # Database
    "async_session_factory",
    "create_engine",
    "get_async_session_factory",
    "get_database_url",
    "get_db_session",
    # Logging
    "configure_logging",
    "get_logger",
]
