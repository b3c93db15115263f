"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from reschedule_service.domain.entities.alternative_suggestion import (
    AlternativeSuggestion,
)
from reschedule_service.domain.entities.job import Job
from reschedule_service.domain.entities.route_optimization import (
    RouteOptimization,
    RouteOptimizationSuggestion,
)
from reschedule_service.domain.value_objects.optimization_status import (
    RouteOptimizationStatus,
)
from reschedule_service.domain.value_objects.suggestion_status import (
    AlternativeSuggestionStatus,
    CustomerApprovalStatus,
)


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create a new job."""
        pass

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        pass

    @abstractmethod
    async def get_for_update(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID and hold its row lock until the transaction ends."""
        pass

    @abstractmethod
    async def get_many_for_update(self, job_ids: List[UUID]) -> List[Job]:
        """Lock several job rows, always in ascending id order."""
        pass

    @abstractmethod
    async def find_by_contractor_and_date(
        self,
        contractor_id: UUID,
        scheduled_date: date,
        exclude_job_id: Optional[UUID] = None,
    ) -> List[Job]:
        """Find the contractor's non-cancelled jobs booked on a date."""
        pass

    @abstractmethod
    async def update(self, job: Job) -> Job:
        """Update job."""
        pass


class AlternativeSuggestionRepositoryInterface(ABC):
    """Alternative suggestion repository interface."""

    @abstractmethod
    async def create_many(
        self, suggestions: List[AlternativeSuggestion]
    ) -> List[AlternativeSuggestion]:
        """Insert a batch of pending suggestions."""
        pass

    @abstractmethod
    async def get_by_id(self, suggestion_id: UUID) -> Optional[AlternativeSuggestion]:
        """Get suggestion by ID."""
        pass

    @abstractmethod
    async def list_by_job(self, job_id: UUID) -> List[AlternativeSuggestion]:
        """List every suggestion made for a job, oldest first."""
        pass

    @abstractmethod
    async def transition_if_pending(
        self,
        suggestion_id: UUID,
        status: AlternativeSuggestionStatus,
        responded_at: datetime,
    ) -> bool:
        """Move a pending suggestion to ``status``.

        Returns False when the row was no longer pending.
        """
        pass

    @abstractmethod
    async def decline_pending_for_job(
        self, job_id: UUID, exclude_suggestion_id: UUID, responded_at: datetime
    ) -> List[UUID]:
        """Decline every other pending suggestion of a job. Returns their ids."""
        pass

    @abstractmethod
    async def count_accepted_for_job(self, job_id: UUID) -> int:
        """Count accepted suggestions for a job."""
        pass


class RouteOptimizationRepositoryInterface(ABC):
    """Route optimization repository interface."""

    @abstractmethod
    async def create(self, optimization: RouteOptimization) -> RouteOptimization:
        """Persist an optimization together with its suggestions."""
        pass

    @abstractmethod
    async def get_by_id(self, optimization_id: UUID) -> Optional[RouteOptimization]:
        """Get optimization by ID, suggestions included."""
        pass

    @abstractmethod
    async def find_active_by_contractor(
        self, contractor_id: UUID
    ) -> List[RouteOptimization]:
        """Find a contractor's undecided optimizations, newest first."""
        pass

    @abstractmethod
    async def transition_status(
        self,
        optimization_id: UUID,
        from_statuses: List[RouteOptimizationStatus],
        to_status: RouteOptimizationStatus,
    ) -> bool:
        """Compare-and-set the optimization status.

        Returns False when the row was not in one of ``from_statuses``.
        """
        pass

    @abstractmethod
    async def get_suggestion_by_id(
        self, suggestion_id: UUID
    ) -> Optional[RouteOptimizationSuggestion]:
        """Get a single optimization line item."""
        pass

    @abstractmethod
    async def auto_approve_suggestions(self, optimization_id: UUID) -> int:
        """Approve pending line items that never needed the customer."""
        pass

    @abstractmethod
    async def record_customer_answer(
        self, suggestion_id: UUID, status: CustomerApprovalStatus
    ) -> bool:
        """Store a customer's answer while the parent awaits customers.

        Returns False when the parent is no longer awaiting customers.
        """
        pass

    @abstractmethod
    async def find_job_ids_in_active_optimizations(
        self, job_ids: List[UUID], exclude_optimization_id: Optional[UUID] = None
    ) -> List[UUID]:
        """Return which of ``job_ids`` belong to another undecided optimization."""
        pass

    @abstractmethod
    async def find_route_change_requests_for_client(
        self, client_id: UUID
    ) -> List[RouteOptimizationSuggestion]:
        """Flagged line items under optimizations awaiting the client's answer."""
        pass
