"""
Route optimization entities: a batch proposal for one contractor-day and its
per-job line items.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from reschedule_service.domain.exceptions.conflict_error import InvalidTransitionError
from reschedule_service.domain.value_objects.optimization_status import (
    RouteOptimizationStatus,
)
from reschedule_service.domain.value_objects.suggestion_status import (
    CustomerApprovalStatus,
)
from reschedule_service.domain.value_objects.time_slot import RouteTimeSlot

MIN_LEVEL = 1
MAX_LEVEL = 3


@dataclass
class RouteOptimizationSuggestion:
    """One job move inside a route optimization."""

    route_optimization_id: UUID
    job_id: UUID
    current_date: date
    current_time_slot: RouteTimeSlot
    suggested_date: date
    suggested_time_slot: RouteTimeSlot
    id: UUID = field(default_factory=uuid4)
    requires_customer_approval: bool = False
    customer_approval_status: CustomerApprovalStatus = CustomerApprovalStatus.PENDING

    def __post_init__(self):
        self.current_time_slot = RouteTimeSlot(self.current_time_slot)
        self.suggested_time_slot = RouteTimeSlot(self.suggested_time_slot)
        self.customer_approval_status = CustomerApprovalStatus(
            self.customer_approval_status
        )

    def record_customer_answer(self, approved: bool) -> bool:
        """Store the customer's answer. Returns False when it is unchanged."""
        status = CustomerApprovalStatus.from_answer(approved)
        if self.customer_approval_status == status:
            return False

        self.customer_approval_status = status
        return True

    def auto_approve(self) -> bool:
        """Approve a line item that never needed the customer's consent."""
        if (
            self.requires_customer_approval
            or self.customer_approval_status != CustomerApprovalStatus.PENDING
        ):
            return False

        self.customer_approval_status = CustomerApprovalStatus.APPROVED
        return True


@dataclass
class RouteOptimization:
    """Route optimization domain entity."""

    contractor_id: UUID
    optimization_date: date
    level: int
    time_saved_minutes: int
    id: UUID = field(default_factory=uuid4)
    status: RouteOptimizationStatus = RouteOptimizationStatus.PENDING_APPROVAL
    suggestions: List[RouteOptimizationSuggestion] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate optimization data."""
        if not MIN_LEVEL <= self.level <= MAX_LEVEL:
            raise ValueError(f"Optimization level must be between {MIN_LEVEL} and {MAX_LEVEL}")
        if self.time_saved_minutes is None or self.time_saved_minutes < 0:
            raise ValueError("Time saved must be zero or more minutes")

        self.status = RouteOptimizationStatus(self.status)

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def is_final(self) -> bool:
        return self.status.is_final()

    @property
    def job_ids(self) -> List[UUID]:
        return [suggestion.job_id for suggestion in self.suggestions]

    def suggestions_requiring_approval(self) -> List[RouteOptimizationSuggestion]:
        return [s for s in self.suggestions if s.requires_customer_approval]

    def transition_to(self, target: RouteOptimizationStatus) -> bool:
        """Move to ``target``.

        Returns False without changing anything when the optimization is
        already terminal. Raises InvalidTransitionError for an illegal move out
        of a live status.
        """
        if self.is_final:
            return False

        if not self.status.can_transition_to(target):
            raise InvalidTransitionError(
                "route optimization", self.status.value, target.value
            )

        self.status = target
        self.updated_at = datetime.now(timezone.utc)
        return True
