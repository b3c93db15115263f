"""
Route optimization API schemas.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from reschedule_service.domain.entities.route_optimization import (
    MAX_LEVEL,
    MIN_LEVEL,
    RouteOptimization,
    RouteOptimizationSuggestion,
)

from .schedule import JobResponse


class SuggestionDraftSchema(BaseModel):
    """One job move proposed by the optimizer."""

    job_id: UUID
    current_date: date
    current_time_slot: str = Field(..., description="morning or afternoon")
    suggested_date: date
    suggested_time_slot: str = Field(..., description="morning or afternoon")
    requires_customer_approval: bool = False


class RegisterOptimizationRequest(BaseModel):
    """Optimizer output for one contractor-day."""

    contractor_id: UUID
    optimization_date: date
    level: int = Field(..., ge=MIN_LEVEL, le=MAX_LEVEL)
    time_saved_minutes: int = Field(..., ge=0)
    suggestions: List[SuggestionDraftSchema] = Field(..., min_length=1)


class RouteOptimizationSuggestionResponse(BaseModel):
    """Route optimization line item response schema."""

    id: UUID
    route_optimization_id: UUID
    job_id: UUID
    current_date: date
    current_time_slot: str
    current_time_label: str
    suggested_date: date
    suggested_time_slot: str
    suggested_time_label: str
    requires_customer_approval: bool
    customer_approval_status: str

    @classmethod
    def from_entity(
        cls, suggestion: RouteOptimizationSuggestion
    ) -> "RouteOptimizationSuggestionResponse":
        return cls(
            id=suggestion.id,
            route_optimization_id=suggestion.route_optimization_id,
            job_id=suggestion.job_id,
            current_date=suggestion.current_date,
            current_time_slot=suggestion.current_time_slot.value,
            current_time_label=suggestion.current_time_slot.display_name,
            suggested_date=suggestion.suggested_date,
            suggested_time_slot=suggestion.suggested_time_slot.value,
            suggested_time_label=suggestion.suggested_time_slot.display_name,
            requires_customer_approval=suggestion.requires_customer_approval,
            customer_approval_status=suggestion.customer_approval_status.value,
        )


class RouteOptimizationResponse(BaseModel):
    """Route optimization response schema."""

    id: UUID
    contractor_id: UUID
    optimization_date: date
    level: int
    time_saved_minutes: int
    status: str
    suggestions: List[RouteOptimizationSuggestionResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, optimization: RouteOptimization) -> "RouteOptimizationResponse":
        return cls(
            id=optimization.id,
            contractor_id=optimization.contractor_id,
            optimization_date=optimization.optimization_date,
            level=optimization.level,
            time_saved_minutes=optimization.time_saved_minutes,
            status=optimization.status.value,
            suggestions=[
                RouteOptimizationSuggestionResponse.from_entity(s)
                for s in optimization.suggestions
            ],
            created_at=optimization.created_at,
            updated_at=optimization.updated_at,
        )


class OptimizationResultResponse(BaseModel):
    """Optimization and every job it moved."""

    changed: bool
    optimization: RouteOptimizationResponse
    jobs: List[JobResponse] = Field(default_factory=list)


class RespondSuggestionRequest(BaseModel):
    approved: bool


class SuggestionResponseResponse(BaseModel):
    changed: bool
    suggestion: RouteOptimizationSuggestionResponse
    optimization_status: str
