"""Respond to a route change request use case."""

from dataclasses import dataclass
from uuid import UUID

from reschedule_service.application.services import notification_messages
from reschedule_service.application.services.authorization import ensure_customer
from reschedule_service.application.use_cases.optimization_base import (
    OptimizationUseCase,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.route_optimization import (
    RouteOptimization,
    RouteOptimizationSuggestion,
)
from reschedule_service.domain.exceptions.conflict_error import InvalidTransitionError
from reschedule_service.domain.exceptions.not_found_error import (
    JobNotFoundError,
    SuggestionNotFoundError,
)
from reschedule_service.domain.exceptions.validation_error import ValidationError
from reschedule_service.domain.value_objects.actor import Actor
from reschedule_service.domain.value_objects.optimization_status import (
    RouteOptimizationStatus,
)
from reschedule_service.domain.value_objects.suggestion_status import (
    CustomerApprovalStatus,
)
from reschedule_service.infrastructure.monitoring.metrics import record_transition

logger = get_logger(__name__)


@dataclass
class SuggestionResponseResult:
    """Line item and its parent after a customer answer."""

    suggestion: RouteOptimizationSuggestion
    optimization: RouteOptimization
    changed: bool


class RespondOptimizationSuggestionUseCase(OptimizationUseCase):
    """
    Use case for a customer approving or declining one line item.

    Only the line item changes. The job and the parent optimization wait for
    the contractor's decision. While the parent awaits customers the answer
    may be changed; once the parent is decided the call is a no-op.
    """

    async def execute(
        self, actor: Actor, suggestion_id: UUID, approved: bool
    ) -> SuggestionResponseResult:
        suggestion = await self.optimization_repo.get_suggestion_by_id(suggestion_id)
        if not suggestion:
            raise SuggestionNotFoundError(suggestion_id)

        job = await self.job_repo.get_by_id(suggestion.job_id)
        if not job:
            raise JobNotFoundError(suggestion.job_id)
        ensure_customer(actor, job, "respond to route change request")

        if not suggestion.requires_customer_approval:
            raise ValidationError("This route change does not need customer approval")

        status = CustomerApprovalStatus.from_answer(approved)
        optimization_id = suggestion.route_optimization_id

        def find_line(optimization: RouteOptimization) -> RouteOptimizationSuggestion:
            for line in optimization.suggestions:
                if line.id == suggestion_id:
                    return line
            raise SuggestionNotFoundError(suggestion_id)

        async def operation() -> SuggestionResponseResult:
            optimization = await self._load(optimization_id)
            line = find_line(optimization)

            if optimization.is_final:
                return SuggestionResponseResult(line, optimization, changed=False)
            if optimization.status == RouteOptimizationStatus.PENDING_APPROVAL:
                raise InvalidTransitionError(
                    "route change request", optimization.status.value, "answer"
                )
            if line.customer_approval_status == status:
                return SuggestionResponseResult(line, optimization, changed=False)

            stored = await self.optimization_repo.record_customer_answer(
                suggestion_id, status
            )
            if not stored:
                optimization = await self._load(optimization_id)
                return SuggestionResponseResult(
                    find_line(optimization), optimization, changed=False
                )

            line.record_customer_answer(approved)
            return SuggestionResponseResult(line, optimization, changed=True)

        async with self.locks.hold(f"optimization:{optimization_id}"):
            result = await self.transaction_service.execute_in_transaction(
                operation, name="respond_route_change"
            )

        if not result.changed:
            record_transition("route_optimization_suggestion", "respond", "noop")
            logger.debug(
                "Route change answer not recorded",
                suggestion_id=str(suggestion_id),
                optimization_status=result.optimization.status.value,
                customer_approval_status=result.suggestion.customer_approval_status.value,
            )
            return result

        record_transition("route_optimization_suggestion", "respond", "applied")
        logger.info(
            "Route change answered",
            suggestion_id=str(suggestion_id),
            optimization_id=str(optimization_id),
            customer_approval_status=status.value,
        )

        self.dispatcher.dispatch(
            [
                notification_messages.route_change_answered(
                    result.optimization.contractor_id,
                    result.suggestion,
                    approved,
                    job_title=job.title,
                )
            ]
        )
        return result
