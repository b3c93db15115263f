"""Shared plumbing of the route optimization use cases."""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from reschedule_service.application.interfaces.notifier import Notification
from reschedule_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    RouteOptimizationRepositoryInterface,
)
from reschedule_service.application.services.authorization import ensure_contractor
from reschedule_service.application.services.keyed_lock import KeyedLock
from reschedule_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.job import Job
from reschedule_service.domain.entities.route_optimization import RouteOptimization
from reschedule_service.domain.exceptions.conflict_error import (
    InvalidTransitionError,
    OptimizationExclusivityError,
)
from reschedule_service.domain.exceptions.not_found_error import (
    JobNotFoundError,
    OptimizationNotFoundError,
)
from reschedule_service.domain.value_objects.actor import Actor
from reschedule_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = get_logger(__name__)


@dataclass
class OptimizationResult:
    """Optimization and jobs as stored after an operation."""

    optimization: RouteOptimization
    changed: bool
    jobs: List[Job] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)


class OptimizationUseCase:
    """Base for operations on one route optimization."""

    def __init__(
        self,
        optimization_repo: RouteOptimizationRepositoryInterface,
        job_repo: JobRepositoryInterface,
        transaction_service: TransactionService,
        dispatcher: NotificationDispatcher,
        locks: KeyedLock,
    ):
        self.optimization_repo = optimization_repo
        self.job_repo = job_repo
        self.transaction_service = transaction_service
        self.dispatcher = dispatcher
        self.locks = locks

    async def _load(self, optimization_id: UUID) -> RouteOptimization:
        optimization = await self.optimization_repo.get_by_id(optimization_id)
        if not optimization:
            raise OptimizationNotFoundError(optimization_id)
        return optimization

    async def _load_owned(
        self, actor: Actor, optimization_id: UUID, action: str
    ) -> RouteOptimization:
        optimization = await self._load(optimization_id)
        ensure_contractor(actor, optimization.contractor_id, action)
        return optimization

    async def _lock_jobs(self, job_ids: List[UUID]) -> List[Job]:
        """Lock the referenced jobs and check nobody else may move them."""
        jobs = await self.job_repo.get_many_for_update(job_ids)
        found = {job.id for job in jobs}
        for job_id in job_ids:
            if job_id not in found:
                raise JobNotFoundError(job_id)

        for job in jobs:
            if job.status.is_final():
                raise InvalidTransitionError(
                    "job", job.status.value, "move by route optimization"
                )

        locked = [job.id for job in jobs if job.route_optimization_locked]
        if locked:
            raise OptimizationExclusivityError(
                locked, "customer opted out of route optimization"
            )
        return jobs

    async def _check_not_claimed(self, job_ids: List[UUID], optimization_id=None) -> None:
        claimed = await self.optimization_repo.find_job_ids_in_active_optimizations(
            job_ids, exclude_optimization_id=optimization_id
        )
        if claimed:
            raise OptimizationExclusivityError(
                claimed, "already part of another open route optimization"
            )
