"""
Database repositories package.
"""

from .alternative_suggestion_repository import AlternativeSuggestionRepository
from .job_repository import JobRepository
from .route_optimization_repository import RouteOptimizationRepository
from .transaction_repository import TransactionService

__all__ = [
    "AlternativeSuggestionRepository",
    "JobRepository",
    "RouteOptimizationRepository",
    "TransactionService",
]
