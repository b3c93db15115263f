"""
Job status value object.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle status enumeration."""

    SCHEDULED = "scheduled"
    PENDING_CONFIRMATION = "pending_confirmation"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def is_final(self) -> bool:
        """Check if status is final (no more scheduling changes)."""
        return self in [self.COMPLETED, self.CANCELLED]

    def can_be_rescheduled(self) -> bool:
        """Check if a job in this status may receive a new date/time."""
        return self in [self.SCHEDULED, self.PENDING_CONFIRMATION]

    def occupies_schedule(self) -> bool:
        """Check if a job in this status blocks the contractor's time."""
        return self != self.CANCELLED
