"""Job repository implementation."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reschedule_service.application.interfaces.repositories import (
    JobRepositoryInterface,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.job import Job
from reschedule_service.domain.exceptions.not_found_error import JobNotFoundError
from reschedule_service.domain.value_objects.job_status import JobStatus
from reschedule_service.infrastructure.database.models.job import JobModel

logger = get_logger(__name__)


class JobRepository(JobRepositoryInterface):
    """Job repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        stmt = (
            select(JobModel)
            .where(JobModel.id == job_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def get_for_update(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID, holding the row lock until commit or rollback."""
        stmt = (
            select(JobModel)
            .where(JobModel.id == job_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def get_many_for_update(self, job_ids: List[UUID]) -> List[Job]:
        """Lock several jobs in id order so concurrent batches cannot deadlock."""
        if not job_ids:
            return []

        stmt = (
            select(JobModel)
            .where(JobModel.id.in_(job_ids))
            .order_by(JobModel.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def find_by_contractor_and_date(
        self,
        contractor_id: UUID,
        scheduled_date: date,
        exclude_job_id: Optional[UUID] = None,
    ) -> List[Job]:
        """Find the contractor's non-cancelled jobs booked on a date."""
        stmt = (
            select(JobModel)
            .where(
                JobModel.contractor_id == contractor_id,
                JobModel.scheduled_date == scheduled_date,
                JobModel.status != JobStatus.CANCELLED.value,
            )
            .order_by(JobModel.scheduled_time)
            .execution_options(populate_existing=True)
        )
        if exclude_job_id is not None:
            stmt = stmt.where(JobModel.id != exclude_job_id)

        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def create(self, job: Job) -> Job:
        """Create a new job."""
        job_model = JobModel(id=job.id, created_at=job.created_at)
        self._apply_entity(job_model, job)

        self.db.add(job_model)
        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()
        await self.db.refresh(job_model)

        return self._model_to_entity(job_model)

    async def update(self, job: Job) -> Job:
        """Update an existing job."""
        stmt = select(JobModel).where(JobModel.id == job.id)
        result = await self.db.execute(stmt)
        job_model = result.scalar_one_or_none()

        if not job_model:
            raise JobNotFoundError(job.id)

        self._apply_entity(job_model, job)

        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()
        await self.db.refresh(job_model)

        return self._model_to_entity(job_model)

    def _apply_entity(self, model: JobModel, job: Job) -> None:
        model.contractor_id = job.contractor_id
        model.client_id = job.client_id
        model.customer_user_id = job.customer_user_id
        model.title = job.title
        model.scheduled_date = job.scheduled_date
        model.scheduled_time = job.scheduled_time
        model.time_slot = job.time_slot
        model.duration_minutes = job.duration_minutes
        model.status = job.status.value
        model.original_scheduled_date = job.original_scheduled_date
        model.original_scheduled_time = job.original_scheduled_time
        model.original_time_slot = job.original_time_slot
        model.route_optimization_locked = job.route_optimization_locked
        model.updated_at = job.updated_at

    def _model_to_entity(self, model: JobModel) -> Job:
        """Convert SQLAlchemy model to domain entity."""
        return Job(
            id=model.id,
            contractor_id=model.contractor_id,
            client_id=model.client_id,
            customer_user_id=model.customer_user_id,
            title=model.title,
            scheduled_date=model.scheduled_date,
            scheduled_time=model.scheduled_time,
            time_slot=model.time_slot,
            duration_minutes=model.duration_minutes,
            status=JobStatus(model.status),
            original_scheduled_date=model.original_scheduled_date,
            original_scheduled_time=model.original_scheduled_time,
            original_time_slot=model.original_time_slot,
            route_optimization_locked=bool(model.route_optimization_locked),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
