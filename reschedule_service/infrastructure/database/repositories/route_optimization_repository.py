"""
Route optimization repository implementation.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from reschedule_service.application.interfaces.repositories import (
    RouteOptimizationRepositoryInterface,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.route_optimization import (
    RouteOptimization,
    RouteOptimizationSuggestion,
)
from reschedule_service.domain.value_objects.optimization_status import (
    RouteOptimizationStatus,
)
from reschedule_service.domain.value_objects.suggestion_status import (
    CustomerApprovalStatus,
)
from reschedule_service.domain.value_objects.time_slot import RouteTimeSlot
from reschedule_service.infrastructure.database.models.base import utcnow
from reschedule_service.infrastructure.database.models.job import JobModel
from reschedule_service.infrastructure.database.models.route_optimization import (
    RouteOptimizationModel,
    RouteOptimizationSuggestionModel,
)

logger = get_logger(__name__)

ACTIVE_STATUSES = [status.value for status in RouteOptimizationStatus.active_statuses()]


class RouteOptimizationRepository(RouteOptimizationRepositoryInterface):
    """Route optimization repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, optimization: RouteOptimization) -> RouteOptimization:
        """Persist an optimization together with its suggestions."""
        model = RouteOptimizationModel(
            id=optimization.id,
            contractor_id=optimization.contractor_id,
            optimization_date=optimization.optimization_date,
            level=optimization.level,
            time_saved_minutes=optimization.time_saved_minutes,
            status=optimization.status.value,
            created_at=optimization.created_at,
            updated_at=optimization.updated_at,
        )
        model.suggestions = [
            RouteOptimizationSuggestionModel(
                id=suggestion.id,
                job_id=suggestion.job_id,
                current_date_val=suggestion.current_date,
                current_time_slot=suggestion.current_time_slot.value,
                suggested_date=suggestion.suggested_date,
                suggested_time_slot=suggestion.suggested_time_slot.value,
                requires_customer_approval=suggestion.requires_customer_approval,
                customer_approval_status=suggestion.customer_approval_status.value,
            )
            for suggestion in optimization.suggestions
        ]

        self.db.add(model)
        await self.db.flush()

        logger.debug(
            "Route optimization created",
            optimization_id=str(model.id),
            suggestions=len(model.suggestions),
        )
        return self._model_to_entity(model)

    async def get_by_id(self, optimization_id: UUID) -> Optional[RouteOptimization]:
        """Get optimization by ID, suggestions included."""
        stmt = (
            select(RouteOptimizationModel)
            .where(RouteOptimizationModel.id == optimization_id)
            .options(selectinload(RouteOptimizationModel.suggestions))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def find_active_by_contractor(
        self, contractor_id: UUID
    ) -> List[RouteOptimization]:
        """Find a contractor's undecided optimizations, newest first."""
        stmt = (
            select(RouteOptimizationModel)
            .where(
                RouteOptimizationModel.contractor_id == contractor_id,
                RouteOptimizationModel.status.in_(ACTIVE_STATUSES),
            )
            .options(selectinload(RouteOptimizationModel.suggestions))
            .order_by(RouteOptimizationModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def transition_status(
        self,
        optimization_id: UUID,
        from_statuses: List[RouteOptimizationStatus],
        to_status: RouteOptimizationStatus,
    ) -> bool:
        """Compare-and-set the optimization status."""
        stmt = (
            update(RouteOptimizationModel)
            .where(
                RouteOptimizationModel.id == optimization_id,
                RouteOptimizationModel.status.in_(
                    [status.value for status in from_statuses]
                ),
            )
            .values(status=to_status.value, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def get_suggestion_by_id(
        self, suggestion_id: UUID
    ) -> Optional[RouteOptimizationSuggestion]:
        stmt = (
            select(RouteOptimizationSuggestionModel)
            .where(RouteOptimizationSuggestionModel.id == suggestion_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._suggestion_to_entity(model) if model else None

    async def auto_approve_suggestions(self, optimization_id: UUID) -> int:
        """Approve pending line items that never needed the customer."""
        stmt = (
            update(RouteOptimizationSuggestionModel)
            .where(
                RouteOptimizationSuggestionModel.route_optimization_id
                == optimization_id,
                RouteOptimizationSuggestionModel.requires_customer_approval.is_(False),
                RouteOptimizationSuggestionModel.customer_approval_status
                == CustomerApprovalStatus.PENDING.value,
            )
            .values(customer_approval_status=CustomerApprovalStatus.APPROVED.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def record_customer_answer(
        self, suggestion_id: UUID, status: CustomerApprovalStatus
    ) -> bool:
        """Store a customer's answer only while the parent awaits customers."""
        awaiting_parents = select(RouteOptimizationModel.id).where(
            RouteOptimizationModel.status
            == RouteOptimizationStatus.AWAITING_CUSTOMER.value
        )
        stmt = (
            update(RouteOptimizationSuggestionModel)
            .where(
                RouteOptimizationSuggestionModel.id == suggestion_id,
                RouteOptimizationSuggestionModel.requires_customer_approval.is_(True),
                RouteOptimizationSuggestionModel.route_optimization_id.in_(
                    awaiting_parents
                ),
            )
            .values(customer_approval_status=status.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def find_job_ids_in_active_optimizations(
        self, job_ids: List[UUID], exclude_optimization_id: Optional[UUID] = None
    ) -> List[UUID]:
        """Return which of ``job_ids`` belong to another undecided optimization."""
        if not job_ids:
            return []

        conditions = [
            RouteOptimizationSuggestionModel.job_id.in_(job_ids),
            RouteOptimizationModel.status.in_(ACTIVE_STATUSES),
        ]
        if exclude_optimization_id is not None:
            conditions.append(RouteOptimizationModel.id != exclude_optimization_id)

        stmt = (
            select(RouteOptimizationSuggestionModel.job_id)
            .join(
                RouteOptimizationModel,
                RouteOptimizationSuggestionModel.route_optimization_id
                == RouteOptimizationModel.id,
            )
            .where(and_(*conditions))
            .distinct()
        )
        result = await self.db.execute(stmt)
        return [row[0] for row in result.fetchall()]

    async def find_route_change_requests_for_client(
        self, client_id: UUID
    ) -> List[RouteOptimizationSuggestion]:
        """Flagged line items under optimizations awaiting the client's answer."""
        stmt = (
            select(RouteOptimizationSuggestionModel)
            .join(
                RouteOptimizationModel,
                RouteOptimizationSuggestionModel.route_optimization_id
                == RouteOptimizationModel.id,
            )
            .join(JobModel, RouteOptimizationSuggestionModel.job_id == JobModel.id)
            .where(
                JobModel.client_id == client_id,
                RouteOptimizationSuggestionModel.requires_customer_approval.is_(True),
                RouteOptimizationSuggestionModel.customer_approval_status
                == CustomerApprovalStatus.PENDING.value,
                RouteOptimizationModel.status
                == RouteOptimizationStatus.AWAITING_CUSTOMER.value,
            )
            .order_by(RouteOptimizationSuggestionModel.suggested_date)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return [self._suggestion_to_entity(model) for model in result.scalars().all()]

    def _suggestion_to_entity(
        self, model: RouteOptimizationSuggestionModel
    ) -> RouteOptimizationSuggestion:
        return RouteOptimizationSuggestion(
            id=model.id,
            route_optimization_id=model.route_optimization_id,
            job_id=model.job_id,
            current_date=model.current_date_val,
            current_time_slot=RouteTimeSlot(model.current_time_slot),
            suggested_date=model.suggested_date,
            suggested_time_slot=RouteTimeSlot(model.suggested_time_slot),
            requires_customer_approval=bool(model.requires_customer_approval),
            customer_approval_status=CustomerApprovalStatus(
                model.customer_approval_status
            ),
        )

    def _model_to_entity(self, model: RouteOptimizationModel) -> RouteOptimization:
        """Convert SQLAlchemy model to domain entity."""
        return RouteOptimization(
            id=model.id,
            contractor_id=model.contractor_id,
            optimization_date=model.optimization_date,
            level=model.level,
            time_saved_minutes=model.time_saved_minutes,
            status=RouteOptimizationStatus(model.status),
            suggestions=[self._suggestion_to_entity(s) for s in model.suggestions],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
