"""Schedule endpoints: conflict checks and direct edits."""

from uuid import UUID

from fastapi import APIRouter

from reschedule_service.api.dependencies import ActorDep, RescheduleJobUseCaseDep
from reschedule_service.api.schemas.schedule import (
    JobResponse,
    PlanShiftRequest,
    RescheduleRequest,
    RescheduleResponse,
    ShiftResultResponse,
)
from reschedule_service.application.services.schedule_planner import (
    BookedSlot,
    plan_shift,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.config.settings import settings
from reschedule_service.infrastructure.monitoring.metrics import (
    record_shift_evaluation,
)

logger = get_logger(__name__)
router = APIRouter(tags=["schedule"])


@router.post("/schedule/plan-shift", response_model=ShiftResultResponse)
async def plan_shift_endpoint(request: PlanShiftRequest) -> ShiftResultResponse:
    """Check a desired start against booked slots without writing anything."""
    slots = [
        BookedSlot.from_start(slot.start, slot.duration_minutes)
        for slot in request.existing_slots
    ]
    result = plan_shift(
        request.desired_start,
        request.duration_minutes,
        slots,
        end_of_day_minutes=request.end_of_day_minutes
        or settings.SCHEDULE_END_OF_DAY_MINUTES,
        rounding_minutes=settings.SCHEDULE_ROUNDING_MINUTES,
    )
    record_shift_evaluation(result.shifted, result.exceeds_working_hours)
    return ShiftResultResponse.from_result(result)


@router.put("/jobs/{job_id}/schedule", response_model=RescheduleResponse)
async def reschedule_job(
    job_id: UUID,
    request: RescheduleRequest,
    actor: ActorDep,
    use_case: RescheduleJobUseCaseDep,
) -> RescheduleResponse:
    """Move a job, auto-shifting it past the contractor's other bookings."""
    result = await use_case.execute(
        actor,
        job_id,
        request.scheduled_date,
        request.scheduled_time,
        allow_overrun=request.allow_overrun,
    )
    return RescheduleResponse(
        job=JobResponse.from_entity(result.job),
        shift=ShiftResultResponse.from_result(result.shift),
    )
