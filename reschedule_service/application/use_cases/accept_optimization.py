"""Accept route optimization use case."""

from uuid import UUID

from reschedule_service.application.use_cases.optimization_base import (
    OptimizationResult,
    OptimizationUseCase,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.value_objects.actor import Actor
from reschedule_service.domain.value_objects.optimization_status import (
    RouteOptimizationStatus,
)
from reschedule_service.infrastructure.monitoring.metrics import record_transition

logger = get_logger(__name__)


class AcceptOptimizationUseCase(OptimizationUseCase):
    """Use case for applying every line item of an optimization at once."""

    async def execute(self, actor: Actor, optimization_id: UUID) -> OptimizationResult:
        """
        Move every referenced job into its suggested slot, keeping the prior
        schedule in the job's original_* fields, then mark the optimization
        applied. Either all jobs move or none do.
        """
        snapshot = await self._load_owned(
            actor, optimization_id, "accept route optimization"
        )
        keys = [f"optimization:{optimization_id}"]
        keys.extend(f"job:{job_id}" for job_id in snapshot.job_ids)

        async def operation() -> OptimizationResult:
            optimization = await self._load(optimization_id)
            if optimization.is_final:
                jobs = [
                    job
                    for job in [
                        await self.job_repo.get_by_id(job_id)
                        for job_id in optimization.job_ids
                    ]
                    if job is not None
                ]
                return OptimizationResult(
                    optimization=optimization, changed=False, jobs=jobs
                )

            optimization.transition_to(RouteOptimizationStatus.APPLIED)
            swapped = await self.optimization_repo.transition_status(
                optimization_id,
                RouteOptimizationStatus.active_statuses(),
                RouteOptimizationStatus.APPLIED,
            )
            if not swapped:
                return OptimizationResult(
                    optimization=await self._load(optimization_id), changed=False
                )

            jobs = await self._lock_jobs(optimization.job_ids)
            await self._check_not_claimed(optimization.job_ids, optimization_id)
            jobs_by_id = {job.id: job for job in jobs}

            moved = []
            for suggestion in optimization.suggestions:
                job = jobs_by_id[suggestion.job_id]
                job.apply_route_suggestion(
                    suggestion.suggested_date,
                    suggestion.suggested_time_slot,
                    suggestion.current_time_slot,
                )
                moved.append(await self.job_repo.update(job))
                suggestion.auto_approve()

            await self.optimization_repo.auto_approve_suggestions(optimization_id)
            return OptimizationResult(optimization=optimization, changed=True, jobs=moved)

        async with self.locks.hold_many(keys):
            try:
                result = await self.transaction_service.execute_in_transaction(
                    operation, name="accept_optimization"
                )
            except Exception:
                record_transition("route_optimization", "accept", "failed")
                raise

        if not result.changed:
            record_transition("route_optimization", "accept", "noop")
            logger.debug(
                "Optimization already decided",
                optimization_id=str(optimization_id),
                status=result.optimization.status.value,
            )
            return result

        record_transition("route_optimization", "accept", "applied")
        logger.info(
            "Route optimization applied",
            optimization_id=str(optimization_id),
            jobs_moved=len(result.jobs),
            time_saved_minutes=result.optimization.time_saved_minutes,
        )
        return result
