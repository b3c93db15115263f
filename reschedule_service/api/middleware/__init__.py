"""
API middleware package.
"""

from .error_handler import add_error_handlers
from .logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
    "add_error_handlers",
]
