"""Route optimization endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from reschedule_service.api.dependencies import (
    AcceptOptimizationUseCaseDep,
    ActorDep,
    AskCustomersUseCaseDep,
    DeclineOptimizationUseCaseDep,
    RegisterOptimizationUseCaseDep,
    RespondOptimizationSuggestionUseCaseDep,
    ScheduleQueryServiceDep,
)
from reschedule_service.api.schemas.optimizations import (
    OptimizationResultResponse,
    RegisterOptimizationRequest,
    RespondSuggestionRequest,
    RouteOptimizationResponse,
    RouteOptimizationSuggestionResponse,
    SuggestionResponseResponse,
)
from reschedule_service.api.schemas.schedule import JobResponse
from reschedule_service.application.use_cases.optimization_base import (
    OptimizationResult,
)
from reschedule_service.application.use_cases.register_optimization import (
    SuggestionDraft,
)

router = APIRouter(tags=["optimizations"])


def _result_response(result: OptimizationResult) -> OptimizationResultResponse:
    return OptimizationResultResponse(
        changed=result.changed,
        optimization=RouteOptimizationResponse.from_entity(result.optimization),
        jobs=[JobResponse.from_entity(job) for job in result.jobs],
    )


@router.post(
    "/optimizations",
    response_model=RouteOptimizationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_optimization(
    request: RegisterOptimizationRequest,
    actor: ActorDep,
    use_case: RegisterOptimizationUseCaseDep,
) -> RouteOptimizationResponse:
    """Record optimizer output for a contractor-day."""
    optimization = await use_case.execute(
        actor,
        request.contractor_id,
        request.optimization_date,
        request.level,
        request.time_saved_minutes,
        [
            SuggestionDraft(
                job_id=s.job_id,
                current_date=s.current_date,
                current_time_slot=s.current_time_slot,
                suggested_date=s.suggested_date,
                suggested_time_slot=s.suggested_time_slot,
                requires_customer_approval=s.requires_customer_approval,
            )
            for s in request.suggestions
        ],
    )
    return RouteOptimizationResponse.from_entity(optimization)


@router.get("/optimizations/{optimization_id}", response_model=RouteOptimizationResponse)
async def get_optimization(
    optimization_id: UUID, actor: ActorDep, queries: ScheduleQueryServiceDep
) -> RouteOptimizationResponse:
    optimization = await queries.get_optimization(actor, optimization_id)
    return RouteOptimizationResponse.from_entity(optimization)


@router.get(
    "/contractors/{contractor_id}/optimizations",
    response_model=List[RouteOptimizationResponse],
)
async def list_active_optimizations(
    contractor_id: UUID, actor: ActorDep, queries: ScheduleQueryServiceDep
) -> List[RouteOptimizationResponse]:
    """Optimizations still waiting for the contractor, newest first."""
    optimizations = await queries.list_active_optimizations(actor, contractor_id)
    return [RouteOptimizationResponse.from_entity(o) for o in optimizations]


@router.post(
    "/optimizations/{optimization_id}/decline",
    response_model=OptimizationResultResponse,
)
async def decline_optimization(
    optimization_id: UUID, actor: ActorDep, use_case: DeclineOptimizationUseCaseDep
) -> OptimizationResultResponse:
    return _result_response(await use_case.execute(actor, optimization_id))


@router.post(
    "/optimizations/{optimization_id}/ask-customers",
    response_model=OptimizationResultResponse,
)
async def ask_customers(
    optimization_id: UUID, actor: ActorDep, use_case: AskCustomersUseCaseDep
) -> OptimizationResultResponse:
    return _result_response(await use_case.execute(actor, optimization_id))


@router.post(
    "/optimizations/{optimization_id}/accept",
    response_model=OptimizationResultResponse,
)
async def accept_optimization(
    optimization_id: UUID, actor: ActorDep, use_case: AcceptOptimizationUseCaseDep
) -> OptimizationResultResponse:
    """Apply every suggested move. Either all jobs move or none do."""
    return _result_response(await use_case.execute(actor, optimization_id))


@router.post(
    "/optimization-suggestions/{suggestion_id}/respond",
    response_model=SuggestionResponseResponse,
)
async def respond_optimization_suggestion(
    suggestion_id: UUID,
    request: RespondSuggestionRequest,
    actor: ActorDep,
    use_case: RespondOptimizationSuggestionUseCaseDep,
) -> SuggestionResponseResponse:
    result = await use_case.execute(actor, suggestion_id, request.approved)
    return SuggestionResponseResponse(
        changed=result.changed,
        suggestion=RouteOptimizationSuggestionResponse.from_entity(result.suggestion),
        optimization_status=result.optimization.status.value,
    )


@router.get(
    "/clients/{client_id}/route-change-requests",
    response_model=List[RouteOptimizationSuggestionResponse],
)
async def list_route_change_requests(
    client_id: UUID, actor: ActorDep, queries: ScheduleQueryServiceDep
) -> List[RouteOptimizationSuggestionResponse]:
    """Route changes waiting for this client's answer."""
    suggestions = await queries.list_route_change_requests(actor, client_id)
    return [RouteOptimizationSuggestionResponse.from_entity(s) for s in suggestions]
