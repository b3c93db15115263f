"""
Read-side queries over the suggestion ledger.
"""

from typing import List
from uuid import UUID

from reschedule_service.application.interfaces.repositories import (
    AlternativeSuggestionRepositoryInterface,
    JobRepositoryInterface,
    RouteOptimizationRepositoryInterface,
)
from reschedule_service.domain.entities.alternative_suggestion import (
    AlternativeSuggestion,
)
from reschedule_service.domain.entities.route_optimization import (
    RouteOptimization,
    RouteOptimizationSuggestion,
)
from reschedule_service.domain.exceptions.authorization_error import (
    PermissionDeniedError,
)
from reschedule_service.domain.exceptions.not_found_error import (
    JobNotFoundError,
    OptimizationNotFoundError,
)
from reschedule_service.domain.value_objects.actor import Actor


class ScheduleQueryService:
    """Lookups for contractors, customers and the optimizer."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        suggestion_repo: AlternativeSuggestionRepositoryInterface,
        optimization_repo: RouteOptimizationRepositoryInterface,
    ):
        self.job_repo = job_repo
        self.suggestion_repo = suggestion_repo
        self.optimization_repo = optimization_repo

    async def list_alternatives(
        self, actor: Actor, job_id: UUID
    ) -> List[AlternativeSuggestion]:
        """Suggestions of a job, visible to both parties of the job."""
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise JobNotFoundError(job_id)
        if not (
            actor.is_system
            or actor.is_contractor_for(job.contractor_id)
            or actor.is_customer_for(job.client_id, job.customer_user_id)
        ):
            raise PermissionDeniedError(actor.id, "view alternative times")
        return await self.suggestion_repo.list_by_job(job_id)

    async def get_optimization(
        self, actor: Actor, optimization_id: UUID
    ) -> RouteOptimization:
        optimization = await self.optimization_repo.get_by_id(optimization_id)
        if not optimization:
            raise OptimizationNotFoundError(optimization_id)
        if not (actor.is_system or actor.is_contractor_for(optimization.contractor_id)):
            raise PermissionDeniedError(actor.id, "view route optimization")
        return optimization

    async def list_active_optimizations(
        self, actor: Actor, contractor_id: UUID
    ) -> List[RouteOptimization]:
        if not (actor.is_system or actor.is_contractor_for(contractor_id)):
            raise PermissionDeniedError(actor.id, "view route optimizations")
        return await self.optimization_repo.find_active_by_contractor(contractor_id)

    async def list_route_change_requests(
        self, actor: Actor, client_id: UUID
    ) -> List[RouteOptimizationSuggestion]:
        """Flagged line items still waiting for the client's answer."""
        if not (actor.is_system or actor.is_customer_for(client_id)):
            raise PermissionDeniedError(actor.id, "view route change requests")
        return await self.optimization_repo.find_route_change_requests_for_client(
            client_id
        )
