"""
Database package.
"""

from .connection import (
    close_database_connections,
    get_database_health,
    test_database_connection,
)

__all__ = [
    "close_database_connections",
    "get_database_health",
    "test_database_connection",
]
