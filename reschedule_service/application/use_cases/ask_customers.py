"""Ask customers use case: put an optimization on hold for customer answers."""

from uuid import UUID

from reschedule_service.application.services import notification_messages
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


class AskCustomersUseCase(OptimizationUseCase):
    """Use case for requesting consent on the flagged line items."""

    async def execute(self, actor: Actor, optimization_id: UUID) -> OptimizationResult:
        """
        Move the optimization to awaiting_customer and message the customer of
        every line item that requires approval. Line items without the flag
        are left alone. Asking twice sends nothing the second time.
        """
        await self._load_owned(actor, optimization_id, "ask customers about route optimization")

        async def operation() -> OptimizationResult:
            optimization = await self._load(optimization_id)
            if optimization.status != RouteOptimizationStatus.PENDING_APPROVAL:
                # already awaiting customers, or decided
                return OptimizationResult(optimization=optimization, changed=False)

            optimization.transition_to(RouteOptimizationStatus.AWAITING_CUSTOMER)
            swapped = await self.optimization_repo.transition_status(
                optimization_id,
                [RouteOptimizationStatus.PENDING_APPROVAL],
                RouteOptimizationStatus.AWAITING_CUSTOMER,
            )
            if not swapped:
                return OptimizationResult(
                    optimization=await self._load(optimization_id), changed=False
                )

            notifications = []
            for suggestion in optimization.suggestions_requiring_approval():
                job = await self.job_repo.get_by_id(suggestion.job_id)
                if job is None or job.customer_recipient_id is None:
                    logger.warning(
                        "No customer user to ask about route change",
                        optimization_id=str(optimization_id),
                        job_id=str(suggestion.job_id),
                    )
                    continue
                notifications.append(
                    notification_messages.route_change_requested(
                        job.customer_recipient_id, suggestion
                    )
                )

            return OptimizationResult(
                optimization=optimization, changed=True, notifications=notifications
            )

        async with self.locks.hold(f"optimization:{optimization_id}"):
            result = await self.transaction_service.execute_in_transaction(
                operation, name="ask_customers"
            )

        if not result.changed:
            record_transition("route_optimization", "ask_customers", "noop")
            logger.debug(
                "Optimization not awaiting approval",
                optimization_id=str(optimization_id),
                status=result.optimization.status.value,
            )
            return result

        record_transition("route_optimization", "ask_customers", "applied")
        logger.info(
            "Customers asked about route optimization",
            optimization_id=str(optimization_id),
            notified=len(result.notifications),
        )
        self.dispatcher.dispatch(result.notifications)
        return result
