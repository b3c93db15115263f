"""
Alternative-time API schemas.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from reschedule_service.domain.entities.alternative_suggestion import (
    AlternativeSuggestion,
)

from .schedule import JobResponse


class AlternativeOptionSchema(BaseModel):
    """One proposed time."""

    suggested_date: date
    suggested_time_slot: str = Field(..., description="7am-10am, 10am-2pm or 2pm-5pm")


class ProposeAlternativesRequest(BaseModel):
    """Alternative times offered to the customer."""

    options: List[AlternativeOptionSchema] = Field(..., min_length=1)


class AlternativeSuggestionResponse(BaseModel):
    """Alternative suggestion response schema."""

    id: UUID
    job_id: UUID
    contractor_id: UUID
    suggested_date: date
    suggested_time_slot: str
    suggested_time_label: str
    status: str
    responded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, suggestion: AlternativeSuggestion) -> "AlternativeSuggestionResponse":
        return cls(
            id=suggestion.id,
            job_id=suggestion.job_id,
            contractor_id=suggestion.contractor_id,
            suggested_date=suggestion.suggested_date,
            suggested_time_slot=suggestion.suggested_time_slot.value,
            suggested_time_label=suggestion.suggested_time_slot.display_name,
            status=suggestion.status.value,
            responded_at=suggestion.responded_at,
            created_at=suggestion.created_at,
        )


class ProposalResponse(BaseModel):
    job: JobResponse
    suggestions: List[AlternativeSuggestionResponse]


class RespondAlternativeRequest(BaseModel):
    accept: bool


class AlternativeResponseResponse(BaseModel):
    """Final state of the job and its suggestions after an answer."""

    changed: bool
    job: JobResponse
    suggestion: AlternativeSuggestionResponse
    declined_suggestion_ids: List[UUID] = Field(default_factory=list)
    job_suggestions: List[AlternativeSuggestionResponse] = Field(default_factory=list)
