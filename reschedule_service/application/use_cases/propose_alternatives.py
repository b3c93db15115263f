"""Propose alternative times use case."""

from dataclasses import dataclass
from datetime import date
from typing import List, Sequence, Union
from uuid import UUID

from reschedule_service.application.interfaces.repositories import (
    AlternativeSuggestionRepositoryInterface,
    JobRepositoryInterface,
)
from reschedule_service.application.services import notification_messages
from reschedule_service.application.services.authorization import ensure_contractor
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
from reschedule_service.domain.exceptions.not_found_error import JobNotFoundError
from reschedule_service.domain.exceptions.validation_error import (
    InvalidTimeSlotError,
    RequiredFieldError,
    ValidationError,
)
from reschedule_service.domain.value_objects.actor import Actor
from reschedule_service.domain.value_objects.time_slot import AlternativeTimeSlot
from reschedule_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from reschedule_service.infrastructure.monitoring.metrics import record_transition

logger = get_logger(__name__)


@dataclass(frozen=True)
class AlternativeOption:
    """One proposed (date, slot) pair."""

    suggested_date: date
    suggested_time_slot: Union[str, AlternativeTimeSlot]


@dataclass
class ProposalResult:
    """Job and the suggestions created for it."""

    job: Job
    suggestions: List[AlternativeSuggestion]


def parse_alternative_slot(value: Union[str, AlternativeTimeSlot]) -> AlternativeTimeSlot:
    try:
        return AlternativeTimeSlot(value)
    except ValueError:
        raise InvalidTimeSlotError(str(value), [slot.value for slot in AlternativeTimeSlot])


class ProposeAlternativesUseCase:
    """Use case for offering a customer new times for a job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        suggestion_repo: AlternativeSuggestionRepositoryInterface,
        transaction_service: TransactionService,
        dispatcher: NotificationDispatcher,
        locks: KeyedLock,
        max_suggestions: int = 3,
    ):
        self.job_repo = job_repo
        self.suggestion_repo = suggestion_repo
        self.transaction_service = transaction_service
        self.dispatcher = dispatcher
        self.locks = locks
        self.max_suggestions = max_suggestions

    async def execute(
        self, actor: Actor, job_id: UUID, options: Sequence[AlternativeOption]
    ) -> ProposalResult:
        """Create pending suggestions and put the job on hold for the customer."""
        if not options:
            raise RequiredFieldError("options")
        if len(options) > self.max_suggestions:
            raise ValidationError(
                f"At most {self.max_suggestions} alternative times may be proposed at once"
            )
        for option in options:
            if not option.suggested_date:
                raise RequiredFieldError("suggested_date")
        slots = [parse_alternative_slot(option.suggested_time_slot) for option in options]

        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise JobNotFoundError(job_id)
        ensure_contractor(actor, job.contractor_id, "propose alternative times")

        async def operation() -> ProposalResult:
            current = await self.job_repo.get_for_update(job_id)
            if not current:
                raise JobNotFoundError(job_id)
            if current.status.is_final():
                raise InvalidTransitionError(
                    "job", current.status.value, "propose alternatives for"
                )

            suggestions = await self.suggestion_repo.create_many(
                [
                    AlternativeSuggestion(
                        job_id=current.id,
                        contractor_id=current.contractor_id,
                        suggested_date=option.suggested_date,
                        suggested_time_slot=slot,
                    )
                    for option, slot in zip(options, slots)
                ]
            )

            if current.mark_pending_confirmation():
                current = await self.job_repo.update(current)

            return ProposalResult(job=current, suggestions=suggestions)

        async with self.locks.hold(f"job:{job_id}"):
            result = await self.transaction_service.execute_in_transaction(
                operation, name="propose_alternatives"
            )

        record_transition("alternative_suggestion", "propose", "applied")
        logger.info(
            "Alternative times proposed",
            job_id=str(job_id),
            suggestion_ids=[str(s.id) for s in result.suggestions],
            job_status=result.job.status.value,
        )

        recipient = result.job.customer_recipient_id
        if recipient:
            self.dispatcher.dispatch(
                [notification_messages.alternatives_proposed(recipient, len(result.suggestions))]
            )
        else:
            logger.debug("Job has no customer user to notify", job_id=str(job_id))

        return result
