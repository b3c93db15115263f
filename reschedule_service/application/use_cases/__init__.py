"""
Use cases package.

This package contains the business logic use cases that orchestrate
the application services and repositories.
"""

from .accept_optimization import AcceptOptimizationUseCase
from .ask_customers import AskCustomersUseCase
from .decline_optimization import DeclineOptimizationUseCase
from .optimization_base import OptimizationResult
from .propose_alternatives import (
    AlternativeOption,
    ProposalResult,
    ProposeAlternativesUseCase,
)
from .register_optimization import RegisterOptimizationUseCase, SuggestionDraft
from .reschedule_job import RescheduleJobUseCase, RescheduleResult
from .respond_alternative import (
    AcceptAlternativeCommand,
    AlternativeResponseResult,
    RespondAlternativeUseCase,
)
from .respond_optimization_suggestion import (
    RespondOptimizationSuggestionUseCase,
    SuggestionResponseResult,
)

__all__ = [
    "AcceptAlternativeCommand",
    "AcceptOptimizationUseCase",
    "AlternativeOption",
    "AlternativeResponseResult",
    "AskCustomersUseCase",
    "DeclineOptimizationUseCase",
    "OptimizationResult",
    "ProposalResult",
    "ProposeAlternativesUseCase",
    "RegisterOptimizationUseCase",
    "RescheduleJobUseCase",
    "RescheduleResult",
    "RespondAlternativeUseCase",
    "RespondOptimizationSuggestionUseCase",
    "SuggestionDraft",
    "SuggestionResponseResult",
]
