"""
Alternative suggestion entity: a single proposed replacement time for a job.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from reschedule_service.domain.value_objects.suggestion_status import (
    AlternativeSuggestionStatus,
)
from reschedule_service.domain.value_objects.time_slot import AlternativeTimeSlot


@dataclass
class AlternativeSuggestion:
    """Alternative suggestion domain entity."""

    job_id: UUID
    contractor_id: UUID
    suggested_date: date
    suggested_time_slot: AlternativeTimeSlot
    id: UUID = field(default_factory=uuid4)
    status: AlternativeSuggestionStatus = AlternativeSuggestionStatus.PENDING
    responded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate and normalize suggestion data."""
        if not self.job_id:
            raise ValueError("Suggestion job is required")
        if not self.suggested_date:
            raise ValueError("Suggested date is required")

        self.suggested_time_slot = AlternativeTimeSlot(self.suggested_time_slot)
        self.status = AlternativeSuggestionStatus(self.status)

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    @property
    def is_pending(self) -> bool:
        return self.status == AlternativeSuggestionStatus.PENDING

    def accept(self, responded_at: Optional[datetime] = None) -> bool:
        """Accept the suggestion. Returns False when it was already terminal."""
        return self._resolve(AlternativeSuggestionStatus.ACCEPTED, responded_at)

    def decline(self, responded_at: Optional[datetime] = None) -> bool:
        """Decline the suggestion. Returns False when it was already terminal."""
        return self._resolve(AlternativeSuggestionStatus.DECLINED, responded_at)

    def _resolve(
        self, status: AlternativeSuggestionStatus, responded_at: Optional[datetime]
    ) -> bool:
        if not self.is_pending:
            return False

        self.status = status
        self.responded_at = responded_at or datetime.now(timezone.utc)
        return True
