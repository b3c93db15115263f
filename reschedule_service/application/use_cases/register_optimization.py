"""Register route optimization use case: ingest point for the external optimizer."""

from dataclasses import dataclass
from datetime import date
from typing import List, Sequence, Union
from uuid import UUID

from reschedule_service.application.services import notification_messages
from reschedule_service.application.services.authorization import ensure_system
from reschedule_service.application.use_cases.optimization_base import OptimizationUseCase
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.route_optimization import (
    MAX_LEVEL,
    MIN_LEVEL,
    RouteOptimization,
    RouteOptimizationSuggestion,
)
from reschedule_service.domain.exceptions.validation_error import (
    InvalidTimeSlotError,
    RequiredFieldError,
    ValidationError,
)
from reschedule_service.domain.value_objects.actor import Actor
from reschedule_service.domain.value_objects.time_slot import RouteTimeSlot
from reschedule_service.infrastructure.monitoring.metrics import record_transition

logger = get_logger(__name__)


@dataclass(frozen=True)
class SuggestionDraft:
    """One proposed job move as produced by the optimizer."""

    job_id: UUID
    current_date: date
    current_time_slot: Union[str, RouteTimeSlot]
    suggested_date: date
    suggested_time_slot: Union[str, RouteTimeSlot]
    requires_customer_approval: bool = False


def parse_route_slot(value: Union[str, RouteTimeSlot]) -> RouteTimeSlot:
    try:
        return RouteTimeSlot(value)
    except ValueError:
        raise InvalidTimeSlotError(str(value), [slot.value for slot in RouteTimeSlot])


class RegisterOptimizationUseCase(OptimizationUseCase):
    """Use case for recording a new optimization awaiting the contractor."""

    async def execute(
        self,
        actor: Actor,
        contractor_id: UUID,
        optimization_date: date,
        level: int,
        time_saved_minutes: int,
        drafts: Sequence[SuggestionDraft],
    ) -> RouteOptimization:
        ensure_system(actor, "register route optimization")

        if not drafts:
            raise RequiredFieldError("suggestions")
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            raise ValidationError(
                f"Optimization level must be between {MIN_LEVEL} and {MAX_LEVEL}"
            )
        if time_saved_minutes is None or time_saved_minutes < 0:
            raise ValidationError("Time saved must be zero or more minutes")

        job_ids = [draft.job_id for draft in drafts]
        if len(set(job_ids)) != len(job_ids):
            raise ValidationError("A job may appear only once per optimization")

        optimization = RouteOptimization(
            contractor_id=contractor_id,
            optimization_date=optimization_date,
            level=level,
            time_saved_minutes=time_saved_minutes,
        )
        optimization.suggestions = [
            RouteOptimizationSuggestion(
                route_optimization_id=optimization.id,
                job_id=draft.job_id,
                current_date=draft.current_date,
                current_time_slot=parse_route_slot(draft.current_time_slot),
                suggested_date=draft.suggested_date,
                suggested_time_slot=parse_route_slot(draft.suggested_time_slot),
                requires_customer_approval=draft.requires_customer_approval,
            )
            for draft in drafts
        ]

        async def operation() -> RouteOptimization:
            jobs = await self._lock_jobs(job_ids)
            foreign = [job.id for job in jobs if job.contractor_id != contractor_id]
            if foreign:
                raise ValidationError(
                    "Jobs do not belong to the contractor: "
                    + ", ".join(str(job_id) for job_id in foreign)
                )
            await self._check_not_claimed(job_ids)
            return await self.optimization_repo.create(optimization)

        async with self.locks.hold_many(f"job:{job_id}" for job_id in job_ids):
            created = await self.transaction_service.execute_in_transaction(
                operation, name="register_optimization"
            )

        record_transition("route_optimization", "register", "applied")
        logger.info(
            "Route optimization registered",
            optimization_id=str(created.id),
            contractor_id=str(contractor_id),
            optimization_date=optimization_date.isoformat(),
            suggestions=len(created.suggestions),
            time_saved_minutes=time_saved_minutes,
        )

        self.dispatcher.dispatch([notification_messages.optimization_available(created)])
        return created
