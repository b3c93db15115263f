"""Respond to an alternative time use case."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from reschedule_service.application.interfaces.repositories import (
    AlternativeSuggestionRepositoryInterface,
    JobRepositoryInterface,
)
from reschedule_service.application.services import notification_messages
from reschedule_service.application.services.authorization import ensure_customer
from reschedule_service.application.services.keyed_lock import KeyedLock
from reschedule_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.alternative_suggestion import (
    AlternativeSuggestion,
)
from reschedule_service.domain.entities.job import Job
from reschedule_service.domain.exceptions.conflict_error import InvalidTransitionError
from reschedule_service.domain.exceptions.not_found_error import (
    JobNotFoundError,
    SuggestionNotFoundError,
)
from reschedule_service.domain.exceptions.store_error import StoreError
from reschedule_service.domain.value_objects.actor import Actor
from reschedule_service.domain.value_objects.suggestion_status import (
    AlternativeSuggestionStatus,
)
from reschedule_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from reschedule_service.infrastructure.monitoring.metrics import record_transition

logger = get_logger(__name__)


@dataclass
class AlternativeResponseResult:
    """Final state of every row the response touched."""

    job: Job
    suggestion: AlternativeSuggestion
    changed: bool
    declined_suggestion_ids: List[UUID] = field(default_factory=list)
    job_suggestions: List[AlternativeSuggestion] = field(default_factory=list)


class AcceptAlternativeCommand:
    """
    Accepts one suggestion as a single unit of work.

    Claims the suggestion, books the job into its slot and declines every
    sibling still pending. Must run inside the caller's transaction with the
    job row locked.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        suggestion_repo: AlternativeSuggestionRepositoryInterface,
    ):
        self.job_repo = job_repo
        self.suggestion_repo = suggestion_repo

    async def run(
        self, job: Job, suggestion: AlternativeSuggestion, now: datetime
    ) -> Optional[List[UUID]]:
        """Returns the declined sibling ids, or None when the claim was lost."""
        claimed = await self.suggestion_repo.transition_if_pending(
            suggestion.id, AlternativeSuggestionStatus.ACCEPTED, now
        )
        if not claimed:
            return None
        suggestion.accept(now)

        job.apply_alternative(suggestion.suggested_date, suggestion.suggested_time_slot)
        await self.job_repo.update(job)

        declined_ids = await self.suggestion_repo.decline_pending_for_job(
            job.id, suggestion.id, now
        )

        accepted = await self.suggestion_repo.count_accepted_for_job(job.id)
        if accepted != 1:
            raise StoreError(
                "accept_alternative",
                f"job {job.id} would hold {accepted} accepted suggestions",
            )
        return declined_ids


class RespondAlternativeUseCase:
    """Use case for a customer accepting or declining a proposed time."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        suggestion_repo: AlternativeSuggestionRepositoryInterface,
        transaction_service: TransactionService,
        dispatcher: NotificationDispatcher,
        locks: KeyedLock,
    ):
        self.job_repo = job_repo
        self.suggestion_repo = suggestion_repo
        self.transaction_service = transaction_service
        self.dispatcher = dispatcher
        self.locks = locks
        self.accept_command = AcceptAlternativeCommand(job_repo, suggestion_repo)

    async def execute(
        self, actor: Actor, suggestion_id: UUID, accept: bool
    ) -> AlternativeResponseResult:
        """Resolve a suggestion. Answering a resolved one returns it unchanged."""
        suggestion = await self.suggestion_repo.get_by_id(suggestion_id)
        if not suggestion:
            raise SuggestionNotFoundError(suggestion_id)

        job = await self.job_repo.get_by_id(suggestion.job_id)
        if not job:
            raise JobNotFoundError(suggestion.job_id)
        ensure_customer(actor, job, "respond to alternative time")

        transition = "accept" if accept else "decline"

        async def operation() -> AlternativeResponseResult:
            current_job = await self.job_repo.get_for_update(job.id)
            if not current_job:
                raise JobNotFoundError(job.id)
            current = await self.suggestion_repo.get_by_id(suggestion_id)
            if not current:
                raise SuggestionNotFoundError(suggestion_id)

            if not current.is_pending:
                return AlternativeResponseResult(
                    job=current_job, suggestion=current, changed=False
                )

            now = datetime.now(timezone.utc)
            declined_ids: List[UUID] = []

            if accept:
                if not current_job.can_be_rescheduled():
                    raise InvalidTransitionError(
                        "job", current_job.status.value, "accept an alternative for"
                    )
                outcome = await self.accept_command.run(current_job, current, now)
                if outcome is None:
                    current = await self.suggestion_repo.get_by_id(suggestion_id)
                    return AlternativeResponseResult(
                        job=current_job, suggestion=current, changed=False
                    )
                declined_ids = outcome
            else:
                declined = await self.suggestion_repo.transition_if_pending(
                    suggestion_id, AlternativeSuggestionStatus.DECLINED, now
                )
                if not declined:
                    current = await self.suggestion_repo.get_by_id(suggestion_id)
                    return AlternativeResponseResult(
                        job=current_job, suggestion=current, changed=False
                    )
                current.decline(now)

            siblings = await self.suggestion_repo.list_by_job(current_job.id)
            return AlternativeResponseResult(
                job=current_job,
                suggestion=current,
                changed=True,
                declined_suggestion_ids=declined_ids,
                job_suggestions=siblings,
            )

        async with self.locks.hold(f"job:{job.id}"):
            try:
                result = await self.transaction_service.execute_in_transaction(
                    operation, name=f"{transition}_alternative"
                )
            except Exception:
                record_transition("alternative_suggestion", transition, "failed")
                raise

        if not result.changed:
            record_transition("alternative_suggestion", transition, "noop")
            logger.debug(
                "Suggestion already resolved",
                suggestion_id=str(suggestion_id),
                status=result.suggestion.status.value,
            )
            return result

        record_transition("alternative_suggestion", transition, "applied")
        logger.info(
            "Alternative time answered",
            suggestion_id=str(suggestion_id),
            job_id=str(result.job.id),
            status=result.suggestion.status.value,
            declined_siblings=len(result.declined_suggestion_ids),
        )

        self.dispatcher.dispatch(
            [
                notification_messages.alternative_answered(
                    result.job.contractor_id, result.suggestion, accept
                )
            ]
        )
        return result
