"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Optional
from uuid import UUID, uuid4

from reschedule_service.domain.value_objects.job_status import JobStatus
from reschedule_service.domain.value_objects.time_slot import (
    AlternativeTimeSlot,
    RouteTimeSlot,
)


@dataclass
class Job:
    """Job domain entity.

    A scheduled unit of work for one contractor and one client. The schedule
    fields are only changed through the methods below so that the status and
    the pre-negotiation snapshot stay consistent with them.
    """

    contractor_id: UUID
    client_id: UUID
    scheduled_date: date
    id: UUID = field(default_factory=uuid4)
    scheduled_time: Optional[time] = None
    time_slot: Optional[str] = None
    duration_minutes: int = 60
    status: JobStatus = JobStatus.SCHEDULED
    title: Optional[str] = None
    customer_user_id: Optional[UUID] = None
    original_scheduled_date: Optional[date] = None
    original_scheduled_time: Optional[time] = None
    original_time_slot: Optional[str] = None
    route_optimization_locked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data."""
        if not self.contractor_id:
            raise ValueError("Job contractor is required")
        if not self.client_id:
            raise ValueError("Job client is required")
        if not self.scheduled_date:
            raise ValueError("Job scheduled date is required")
        if self.duration_minutes is None or self.duration_minutes <= 0:
            raise ValueError("Job duration must be a positive number of minutes")

        self.status = JobStatus(self.status)

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def start_minutes(self) -> Optional[int]:
        """Start of the job as minutes after midnight, if it has a wall-clock time."""
        if self.scheduled_time is None:
            return None
        return self.scheduled_time.hour * 60 + self.scheduled_time.minute

    @property
    def customer_recipient_id(self) -> Optional[UUID]:
        """User that receives customer-facing notifications."""
        return self.customer_user_id

    def can_be_rescheduled(self) -> bool:
        """Check if job may be moved to a new date/time."""
        return self.status.can_be_rescheduled()

    def reschedule(self, scheduled_date: date, scheduled_time: Optional[time]) -> None:
        """Direct contractor edit of the schedule."""
        if not self.can_be_rescheduled():
            raise ValueError(f"Job in status '{self.status.value}' cannot be rescheduled")

        self.scheduled_date = scheduled_date
        self.scheduled_time = scheduled_time
        self.time_slot = None
        self.updated_at = datetime.now(timezone.utc)

    def mark_pending_confirmation(self) -> bool:
        """Flag the job as waiting for the customer to pick a proposed time."""
        if self.status != JobStatus.SCHEDULED:
            return False

        self.status = JobStatus.PENDING_CONFIRMATION
        self.updated_at = datetime.now(timezone.utc)
        return True

    def apply_alternative(self, suggested_date: date, slot: AlternativeTimeSlot) -> None:
        """Book the job into an accepted alternative and confirm it."""
        self.scheduled_date = suggested_date
        self.scheduled_time = slot.start_time
        self.time_slot = slot.value
        self.status = JobStatus.SCHEDULED
        self.updated_at = datetime.now(timezone.utc)

    def apply_route_suggestion(
        self,
        suggested_date: date,
        suggested_slot: RouteTimeSlot,
        current_slot: Optional[RouteTimeSlot] = None,
    ) -> None:
        """Move the job as part of an applied route optimization.

        The schedule held before the move is kept in the ``original_*`` fields.
        """
        self.original_scheduled_date = self.scheduled_date
        self.original_scheduled_time = self.scheduled_time
        self.original_time_slot = (
            current_slot.value if current_slot is not None else self.time_slot
        )

        self.scheduled_date = suggested_date
        self.scheduled_time = suggested_slot.start_time
        self.time_slot = suggested_slot.value
        self.updated_at = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        """Convert job to dictionary."""
        return {
            "id": str(self.id),
            "contractor_id": str(self.contractor_id),
            "client_id": str(self.client_id),
            "scheduled_date": self.scheduled_date.isoformat(),
            "scheduled_time": self.scheduled_time.strftime("%H:%M")
            if self.scheduled_time
            else None,
            "time_slot": self.time_slot,
            "duration_minutes": self.duration_minutes,
            "status": self.status.value,
        }
