"""Alternative-time endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from reschedule_service.api.dependencies import (
    ActorDep,
    ProposeAlternativesUseCaseDep,
    RespondAlternativeUseCaseDep,
    ScheduleQueryServiceDep,
)
from reschedule_service.api.schemas.alternatives import (
    AlternativeResponseResponse,
    AlternativeSuggestionResponse,
    ProposalResponse,
    ProposeAlternativesRequest,
    RespondAlternativeRequest,
)
from reschedule_service.api.schemas.schedule import JobResponse
from reschedule_service.application.use_cases.propose_alternatives import (
    AlternativeOption,
)

router = APIRouter(tags=["alternatives"])


@router.post(
    "/jobs/{job_id}/alternatives",
    response_model=ProposalResponse,
    status_code=status.HTTP_201_CREATED,
)
async def propose_alternatives(
    job_id: UUID,
    request: ProposeAlternativesRequest,
    actor: ActorDep,
    use_case: ProposeAlternativesUseCaseDep,
) -> ProposalResponse:
    """Offer the customer up to three new times for a job."""
    result = await use_case.execute(
        actor,
        job_id,
        [
            AlternativeOption(option.suggested_date, option.suggested_time_slot)
            for option in request.options
        ],
    )
    return ProposalResponse(
        job=JobResponse.from_entity(result.job),
        suggestions=[
            AlternativeSuggestionResponse.from_entity(s) for s in result.suggestions
        ],
    )


@router.get(
    "/jobs/{job_id}/alternatives",
    response_model=List[AlternativeSuggestionResponse],
)
async def list_alternatives(
    job_id: UUID, actor: ActorDep, queries: ScheduleQueryServiceDep
) -> List[AlternativeSuggestionResponse]:
    suggestions = await queries.list_alternatives(actor, job_id)
    return [AlternativeSuggestionResponse.from_entity(s) for s in suggestions]


@router.post(
    "/alternatives/{suggestion_id}/respond",
    response_model=AlternativeResponseResponse,
)
async def respond_alternative(
    suggestion_id: UUID,
    request: RespondAlternativeRequest,
    actor: ActorDep,
    use_case: RespondAlternativeUseCaseDep,
) -> AlternativeResponseResponse:
    """Accept or decline a proposed time. Answering twice returns the stored answer."""
    result = await use_case.execute(actor, suggestion_id, request.accept)
    return AlternativeResponseResponse(
        changed=result.changed,
        job=JobResponse.from_entity(result.job),
        suggestion=AlternativeSuggestionResponse.from_entity(result.suggestion),
        declined_suggestion_ids=result.declined_suggestion_ids,
        job_suggestions=[
            AlternativeSuggestionResponse.from_entity(s) for s in result.job_suggestions
        ],
    )
