"""Reschedule job use case: the contractor's direct edit of a job's time."""

from dataclasses import dataclass
from datetime import date, time
from typing import Union
from uuid import UUID

from reschedule_service.application.interfaces.repositories import (
    JobRepositoryInterface,
)
from reschedule_service.application.services.authorization import ensure_contractor
from reschedule_service.application.services.keyed_lock import KeyedLock
from reschedule_service.application.services.schedule_planner import (
    AutoShiftPlanner,
    ShiftResult,
    SlotIndex,
    format_clock,
    parse_clock,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.job import Job
from reschedule_service.domain.exceptions.conflict_error import InvalidTransitionError
from reschedule_service.domain.exceptions.not_found_error import JobNotFoundError
from reschedule_service.domain.exceptions.validation_error import ValidationError
from reschedule_service.domain.value_objects.actor import Actor
from reschedule_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from reschedule_service.infrastructure.monitoring.metrics import (
    record_shift_evaluation,
    record_transition,
)

logger = get_logger(__name__)


@dataclass
class RescheduleResult:
    """Job as stored after the edit, with the planner's verdict."""

    job: Job
    shift: ShiftResult


class RescheduleJobUseCase:
    """Use case for moving a job to a new date and time."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        transaction_service: TransactionService,
        locks: KeyedLock,
        planner: AutoShiftPlanner,
    ):
        self.job_repo = job_repo
        self.transaction_service = transaction_service
        self.locks = locks
        self.planner = planner

    async def execute(
        self,
        actor: Actor,
        job_id: UUID,
        scheduled_date: date,
        scheduled_time: Union[str, time],
        allow_overrun: bool = True,
    ) -> RescheduleResult:
        """Move a job, auto-shifting it past conflicting bookings."""
        desired_start = parse_clock(scheduled_time)

        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise JobNotFoundError(job_id)
        ensure_contractor(actor, job.contractor_id, "reschedule job")

        keys = [f"job:{job_id}", f"day:{job.contractor_id}:{scheduled_date.isoformat()}"]

        async def operation() -> RescheduleResult:
            current = await self.job_repo.get_for_update(job_id)
            if not current:
                raise JobNotFoundError(job_id)
            if not current.can_be_rescheduled():
                raise InvalidTransitionError("job", current.status.value, "reschedule")

            same_day = await self.job_repo.find_by_contractor_and_date(
                current.contractor_id, scheduled_date, exclude_job_id=job_id
            )
            shift = self.planner.plan(
                desired_start, current.duration_minutes, SlotIndex.from_jobs(same_day)
            )
            record_shift_evaluation(shift.shifted, shift.exceeds_working_hours)

            if shift.exceeds_working_hours and not allow_overrun:
                raise ValidationError(
                    f"No free slot on {scheduled_date.isoformat()} before end of day; "
                    f"earliest start would be {shift.new_start}"
                )

            current.reschedule(scheduled_date, shift.new_start_time)
            updated = await self.job_repo.update(current)
            return RescheduleResult(job=updated, shift=shift)

        async with self.locks.hold_many(keys):
            try:
                result = await self.transaction_service.execute_in_transaction(
                    operation, name="reschedule_job"
                )
            except Exception:
                record_transition("job", "reschedule", "failed")
                raise

        record_transition("job", "reschedule", "applied")
        logger.info(
            "Job rescheduled",
            job_id=str(job_id),
            scheduled_date=scheduled_date.isoformat(),
            requested_time=format_clock(desired_start),
            new_time=result.shift.new_start,
            shifted=result.shift.shifted,
            exceeds_working_hours=result.shift.exceeds_working_hours,
        )
        return result
