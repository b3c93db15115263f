"""
Domain package.
"""

from .entities import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "AlternativeSuggestion",
    "Job",
    "RouteOptimization",
    "RouteOptimizationSuggestion",
    # Exceptions
    "ConflictError",
    "InvalidTransitionError",
    "NotFoundError",
    "NotificationError",
    "OptimizationExclusivityError",
    "PermissionDeniedError",
    "StoreError",
    "ValidationError",
    # Value Objects
    "Actor",
    "ActorRole",
    "AlternativeSuggestionStatus",
    "AlternativeTimeSlot",
    "CustomerApprovalStatus",
    "JobStatus",
    "RouteOptimizationStatus",
    "RouteTimeSlot",
]
