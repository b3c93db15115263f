"""
Application interfaces package.
"""

from .notifier import Notification, NotificationType, NotifierInterface
from .repositories import (
    AlternativeSuggestionRepositoryInterface,
    JobRepositoryInterface,
    RouteOptimizationRepositoryInterface,
)

__all__ = [
    "AlternativeSuggestionRepositoryInterface",
    "JobRepositoryInterface",
    "Notification",
    "NotificationType",
    "NotifierInterface",
    "RouteOptimizationRepositoryInterface",
]
