"""
Database models package.
"""

from .alternative_suggestion import AlternativeSuggestionModel
from .base import Base, BaseModel
from .job import JobModel
from .notification import NotificationModel
from .route_optimization import (
    RouteOptimizationModel,
    RouteOptimizationSuggestionModel,
)

__all__ = [
    "AlternativeSuggestionModel",
    "Base",
    "BaseModel",
    "JobModel",
    "NotificationModel",
    "RouteOptimizationModel",
    "RouteOptimizationSuggestionModel",
]
