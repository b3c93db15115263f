"""Decline route optimization use case."""

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


class DeclineOptimizationUseCase(OptimizationUseCase):
    """Use case for the contractor rejecting an optimization. No job moves."""

    async def execute(self, actor: Actor, optimization_id: UUID) -> OptimizationResult:
        await self._load_owned(actor, optimization_id, "decline route optimization")

        async def operation() -> OptimizationResult:
            optimization = await self._load(optimization_id)
            if optimization.is_final:
                return OptimizationResult(optimization=optimization, changed=False)

            optimization.transition_to(RouteOptimizationStatus.DECLINED)
            swapped = await self.optimization_repo.transition_status(
                optimization_id,
                RouteOptimizationStatus.active_statuses(),
                RouteOptimizationStatus.DECLINED,
            )
            if not swapped:
                return OptimizationResult(
                    optimization=await self._load(optimization_id), changed=False
                )
            return OptimizationResult(optimization=optimization, changed=True)

        async with self.locks.hold(f"optimization:{optimization_id}"):
            result = await self.transaction_service.execute_in_transaction(
                operation, name="decline_optimization"
            )

        if not result.changed:
            record_transition("route_optimization", "decline", "noop")
            logger.debug(
                "Optimization already decided",
                optimization_id=str(optimization_id),
                status=result.optimization.status.value,
            )
            return result

        record_transition("route_optimization", "decline", "applied")
        logger.info("Route optimization declined", optimization_id=str(optimization_id))
        return result
