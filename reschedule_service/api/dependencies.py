"""
FastAPI dependency injection container.
"""

from functools import lru_cache
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from reschedule_service.application.services.keyed_lock import KeyedLock
from reschedule_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from reschedule_service.application.services.schedule_planner import AutoShiftPlanner
from reschedule_service.application.services.schedule_queries import (
    ScheduleQueryService,
)
from reschedule_service.application.use_cases.accept_optimization import (
    AcceptOptimizationUseCase,
)
from reschedule_service.application.use_cases.ask_customers import AskCustomersUseCase
from reschedule_service.application.use_cases.decline_optimization import (
    DeclineOptimizationUseCase,
)
from reschedule_service.application.use_cases.propose_alternatives import (
    ProposeAlternativesUseCase,
)
from reschedule_service.application.use_cases.register_optimization import (
    RegisterOptimizationUseCase,
)
from reschedule_service.application.use_cases.reschedule_job import (
    RescheduleJobUseCase,
)
from reschedule_service.application.use_cases.respond_alternative import (
    RespondAlternativeUseCase,
)
from reschedule_service.application.use_cases.respond_optimization_suggestion import (
    RespondOptimizationSuggestionUseCase,
)
from reschedule_service.config.database import get_db_session
from reschedule_service.config.logging import get_logger
from reschedule_service.config.settings import settings
from reschedule_service.domain.value_objects.actor import Actor, ActorRole
from reschedule_service.infrastructure.database.repositories.alternative_suggestion_repository import (
    AlternativeSuggestionRepository,
)
from reschedule_service.infrastructure.database.repositories.job_repository import (
    JobRepository,
)
from reschedule_service.infrastructure.database.repositories.route_optimization_repository import (
    RouteOptimizationRepository,
)
from reschedule_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from reschedule_service.infrastructure.notifiers.factory import NotifierFactory

logger = get_logger(__name__)


# Database Dependencies
async def get_job_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    """Get job repository instance."""
    return JobRepository(db)


async def get_alternative_suggestion_repository(
    db: AsyncSession = Depends(get_db_session),
) -> AlternativeSuggestionRepository:
    """Get alternative suggestion repository instance."""
    return AlternativeSuggestionRepository(db)


async def get_route_optimization_repository(
    db: AsyncSession = Depends(get_db_session),
) -> RouteOptimizationRepository:
    """Get route optimization repository instance."""
    return RouteOptimizationRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)


# Process-wide services
@lru_cache
def get_keyed_lock() -> KeyedLock:
    """Per-job and per-day locks shared by every request of this worker."""
    return KeyedLock()


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Get the notification dispatcher for the configured channel."""
    notifier = NotifierFactory(settings).create_notifier()
    logger.info("Notification channel selected", channel=notifier.channel)
    return NotificationDispatcher(notifier, settings.NOTIFICATION_TIMEOUT_SECONDS)


def get_planner() -> AutoShiftPlanner:
    return AutoShiftPlanner(
        end_of_day_minutes=settings.SCHEDULE_END_OF_DAY_MINUTES,
        rounding_minutes=settings.SCHEDULE_ROUNDING_MINUTES,
    )


# Caller
async def get_actor(
    x_actor_id: Annotated[Optional[str], Header()] = None,
    x_actor_role: Annotated[Optional[str], Header()] = None,
) -> Actor:
    """Build the explicit caller from the identity headers set by the gateway."""
    if not x_actor_id or not x_actor_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-Id and X-Actor-Role headers are required",
        )
    try:
        return Actor(id=UUID(x_actor_id), role=ActorRole(x_actor_role.lower()))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid actor headers",
        )


# Type aliases for cleaner dependency injection
JobRepositoryDep = Annotated[JobRepository, Depends(get_job_repository)]
AlternativeSuggestionRepositoryDep = Annotated[
    AlternativeSuggestionRepository, Depends(get_alternative_suggestion_repository)
]
RouteOptimizationRepositoryDep = Annotated[
    RouteOptimizationRepository, Depends(get_route_optimization_repository)
]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
KeyedLockDep = Annotated[KeyedLock, Depends(get_keyed_lock)]
NotificationDispatcherDep = Annotated[
    NotificationDispatcher, Depends(get_notification_dispatcher)
]
PlannerDep = Annotated[AutoShiftPlanner, Depends(get_planner)]
ActorDep = Annotated[Actor, Depends(get_actor)]


# Use case Dependencies
async def get_reschedule_job_use_case(
    job_repo: JobRepositoryDep,
    transaction_service: TransactionServiceDep,
    locks: KeyedLockDep,
    planner: PlannerDep,
) -> RescheduleJobUseCase:
    return RescheduleJobUseCase(job_repo, transaction_service, locks, planner)


async def get_propose_alternatives_use_case(
    job_repo: JobRepositoryDep,
    suggestion_repo: AlternativeSuggestionRepositoryDep,
    transaction_service: TransactionServiceDep,
    dispatcher: NotificationDispatcherDep,
    locks: KeyedLockDep,
) -> ProposeAlternativesUseCase:
    return ProposeAlternativesUseCase(
        job_repo,
        suggestion_repo,
        transaction_service,
        dispatcher,
        locks,
        max_suggestions=settings.MAX_ALTERNATIVE_SUGGESTIONS,
    )


async def get_respond_alternative_use_case(
    job_repo: JobRepositoryDep,
    suggestion_repo: AlternativeSuggestionRepositoryDep,
    transaction_service: TransactionServiceDep,
    dispatcher: NotificationDispatcherDep,
    locks: KeyedLockDep,
) -> RespondAlternativeUseCase:
    return RespondAlternativeUseCase(
        job_repo, suggestion_repo, transaction_service, dispatcher, locks
    )


def _optimization_use_case(use_case_class):
    async def factory(
        optimization_repo: RouteOptimizationRepositoryDep,
        job_repo: JobRepositoryDep,
        transaction_service: TransactionServiceDep,
        dispatcher: NotificationDispatcherDep,
        locks: KeyedLockDep,
    ):
        return use_case_class(
            optimization_repo, job_repo, transaction_service, dispatcher, locks
        )

    return factory


get_register_optimization_use_case = _optimization_use_case(RegisterOptimizationUseCase)
get_decline_optimization_use_case = _optimization_use_case(DeclineOptimizationUseCase)
get_ask_customers_use_case = _optimization_use_case(AskCustomersUseCase)
get_accept_optimization_use_case = _optimization_use_case(AcceptOptimizationUseCase)
get_respond_optimization_suggestion_use_case = _optimization_use_case(
    RespondOptimizationSuggestionUseCase
)


async def get_schedule_query_service(
    job_repo: JobRepositoryDep,
    suggestion_repo: AlternativeSuggestionRepositoryDep,
    optimization_repo: RouteOptimizationRepositoryDep,
) -> ScheduleQueryService:
    return ScheduleQueryService(job_repo, suggestion_repo, optimization_repo)


RescheduleJobUseCaseDep = Annotated[
    RescheduleJobUseCase, Depends(get_reschedule_job_use_case)
]
ProposeAlternativesUseCaseDep = Annotated[
    ProposeAlternativesUseCase, Depends(get_propose_alternatives_use_case)
]
RespondAlternativeUseCaseDep = Annotated[
    RespondAlternativeUseCase, Depends(get_respond_alternative_use_case)
]
RegisterOptimizationUseCaseDep = Annotated[
    RegisterOptimizationUseCase, Depends(get_register_optimization_use_case)
]
DeclineOptimizationUseCaseDep = Annotated[
    DeclineOptimizationUseCase, Depends(get_decline_optimization_use_case)
]
AskCustomersUseCaseDep = Annotated[
    AskCustomersUseCase, Depends(get_ask_customers_use_case)
]
AcceptOptimizationUseCaseDep = Annotated[
    AcceptOptimizationUseCase, Depends(get_accept_optimization_use_case)
]
RespondOptimizationSuggestionUseCaseDep = Annotated[
    RespondOptimizationSuggestionUseCase,
    Depends(get_respond_optimization_suggestion_use_case),
]
ScheduleQueryServiceDep = Annotated[
    ScheduleQueryService, Depends(get_schedule_query_service)
]
