"""
Domain entities package.
"""

from .alternative_suggestion import AlternativeSuggestion
from .job import Job
from .route_optimization import RouteOptimization, RouteOptimizationSuggestion

__all__ = [
    "AlternativeSuggestion",
    "Job",
    "RouteOptimization",
    "RouteOptimizationSuggestion",
]
