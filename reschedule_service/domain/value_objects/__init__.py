"""
Domain value objects package.
"""

from .actor import Actor, ActorRole
from .job_status import JobStatus
from .optimization_status import RouteOptimizationStatus
from .suggestion_status import AlternativeSuggestionStatus, CustomerApprovalStatus
from .time_slot import AlternativeTimeSlot, RouteTimeSlot

__all__ = [
    "Actor",
    "ActorRole",
    "AlternativeSuggestionStatus",
    "AlternativeTimeSlot",
    "CustomerApprovalStatus",
    "JobStatus",
    "RouteOptimizationStatus",
    "RouteTimeSlot",
]
