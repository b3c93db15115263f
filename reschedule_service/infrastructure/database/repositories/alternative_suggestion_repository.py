"""
Alternative suggestion repository implementation.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reschedule_service.application.interfaces.repositories import (
    AlternativeSuggestionRepositoryInterface,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.alternative_suggestion import (
    AlternativeSuggestion,
)
from reschedule_service.domain.value_objects.suggestion_status import (
    AlternativeSuggestionStatus,
)
from reschedule_service.domain.value_objects.time_slot import AlternativeTimeSlot
from reschedule_service.infrastructure.database.models.alternative_suggestion import (
    AlternativeSuggestionModel,
)

logger = get_logger(__name__)

PENDING = AlternativeSuggestionStatus.PENDING.value


class AlternativeSuggestionRepository(AlternativeSuggestionRepositoryInterface):
    """Alternative suggestion repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_many(
        self, suggestions: List[AlternativeSuggestion]
    ) -> List[AlternativeSuggestion]:
        """Insert a batch of pending suggestions."""
        models = [
            AlternativeSuggestionModel(
                id=suggestion.id,
                job_id=suggestion.job_id,
                contractor_id=suggestion.contractor_id,
                suggested_date=suggestion.suggested_date,
                suggested_time_slot=suggestion.suggested_time_slot.value,
                status=suggestion.status.value,
                responded_at=suggestion.responded_at,
                created_at=suggestion.created_at,
            )
            for suggestion in suggestions
        ]

        self.db.add_all(models)
        await self.db.flush()

        logger.debug(
            "Alternative suggestions created",
            suggestion_ids=[str(model.id) for model in models],
        )
        return [self._model_to_entity(model) for model in models]

    async def get_by_id(self, suggestion_id: UUID) -> Optional[AlternativeSuggestion]:
        """Get suggestion by ID."""
        stmt = (
            select(AlternativeSuggestionModel)
            .where(AlternativeSuggestionModel.id == suggestion_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def list_by_job(self, job_id: UUID) -> List[AlternativeSuggestion]:
        """List every suggestion made for a job, oldest first."""
        stmt = (
            select(AlternativeSuggestionModel)
            .where(AlternativeSuggestionModel.job_id == job_id)
            .order_by(
                AlternativeSuggestionModel.created_at,
                AlternativeSuggestionModel.suggested_date,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def transition_if_pending(
        self,
        suggestion_id: UUID,
        status: AlternativeSuggestionStatus,
        responded_at: datetime,
    ) -> bool:
        """Compare-and-set a pending suggestion to a terminal status."""
        stmt = (
            update(AlternativeSuggestionModel)
            .where(
                AlternativeSuggestionModel.id == suggestion_id,
                AlternativeSuggestionModel.status == PENDING,
            )
            .values(status=status.value, responded_at=responded_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def decline_pending_for_job(
        self, job_id: UUID, exclude_suggestion_id: UUID, responded_at: datetime
    ) -> List[UUID]:
        """Decline every other pending suggestion of a job."""
        stmt = (
            update(AlternativeSuggestionModel)
            .where(
                AlternativeSuggestionModel.job_id == job_id,
                AlternativeSuggestionModel.id != exclude_suggestion_id,
                AlternativeSuggestionModel.status == PENDING,
            )
            .values(
                status=AlternativeSuggestionStatus.DECLINED.value,
                responded_at=responded_at,
            )
            .returning(AlternativeSuggestionModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        declined_ids = [row[0] for row in result.fetchall()]

        if declined_ids:
            logger.debug(
                "Sibling suggestions declined",
                job_id=str(job_id),
                suggestion_ids=[str(suggestion_id) for suggestion_id in declined_ids],
            )
        return declined_ids

    async def count_accepted_for_job(self, job_id: UUID) -> int:
        stmt = select(func.count(AlternativeSuggestionModel.id)).where(
            AlternativeSuggestionModel.job_id == job_id,
            AlternativeSuggestionModel.status
            == AlternativeSuggestionStatus.ACCEPTED.value,
        )
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    def _model_to_entity(self, model: AlternativeSuggestionModel) -> AlternativeSuggestion:
        """Convert SQLAlchemy model to domain entity."""
        return AlternativeSuggestion(
            id=model.id,
            job_id=model.job_id,
            contractor_id=model.contractor_id,
            suggested_date=model.suggested_date,
            suggested_time_slot=AlternativeTimeSlot(model.suggested_time_slot),
            status=AlternativeSuggestionStatus(model.status),
            responded_at=model.responded_at,
            created_at=model.created_at,
        )
