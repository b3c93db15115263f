"""
Schedule-related API schemas.
"""

from datetime import date, datetime, time
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from reschedule_service.application.services.schedule_planner import ShiftResult
from reschedule_service.domain.entities.job import Job


class ExistingSlotSchema(BaseModel):
    """A job already booked on the contractor's day."""

    start: str = Field(..., description="Start as HH:MM")
    duration_minutes: Optional[int] = Field(
        None, gt=0, description="Defaults to 60 when omitted"
    )


class PlanShiftRequest(BaseModel):
    """Conflict check request."""

    desired_start: str = Field(..., description="Desired start as HH:MM")
    duration_minutes: Optional[int] = Field(None, description="Length of the job")
    existing_slots: List[ExistingSlotSchema] = Field(default_factory=list)
    end_of_day_minutes: Optional[int] = Field(None, gt=0, le=24 * 60)


class ShiftResultResponse(BaseModel):
    """Planner verdict."""

    shifted: bool
    new_start: str
    note: str
    exceeds_working_hours: bool

    @classmethod
    def from_result(cls, result: ShiftResult) -> "ShiftResultResponse":
        return cls(**result.to_dict())


class RescheduleRequest(BaseModel):
    """Direct schedule edit."""

    scheduled_date: date
    scheduled_time: str = Field(..., description="Desired start as HH:MM")
    allow_overrun: bool = True


class JobResponse(BaseModel):
    """Job response schema."""

    id: UUID
    contractor_id: UUID
    client_id: UUID
    customer_user_id: Optional[UUID] = None
    title: Optional[str] = None
    scheduled_date: date
    scheduled_time: Optional[time] = None
    time_slot: Optional[str] = None
    duration_minutes: int
    status: str
    original_scheduled_date: Optional[date] = None
    original_scheduled_time: Optional[time] = None
    original_time_slot: Optional[str] = None
    route_optimization_locked: bool
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        return cls(
            id=job.id,
            contractor_id=job.contractor_id,
            client_id=job.client_id,
            customer_user_id=job.customer_user_id,
            title=job.title,
            scheduled_date=job.scheduled_date,
            scheduled_time=job.scheduled_time,
            time_slot=job.time_slot,
            duration_minutes=job.duration_minutes,
            status=job.status.value,
            original_scheduled_date=job.original_scheduled_date,
            original_scheduled_time=job.original_scheduled_time,
            original_time_slot=job.original_time_slot,
            route_optimization_locked=job.route_optimization_locked,
            updated_at=job.updated_at,
        )


class RescheduleResponse(BaseModel):
    """Job as stored after the edit, with the planner's verdict."""

    job: JobResponse
    shift: ShiftResultResponse
