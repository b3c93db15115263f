"""
Ownership checks for the explicit caller of each operation.
"""

from uuid import UUID

from reschedule_service.domain.entities.job import Job
from reschedule_service.domain.exceptions.authorization_error import (
    PermissionDeniedError,
)
from reschedule_service.domain.value_objects.actor import Actor


def ensure_contractor(actor: Actor, contractor_id: UUID, action: str) -> None:
    """Only the owning contractor may drive contractor-side transitions."""
    if not actor.is_contractor_for(contractor_id):
        raise PermissionDeniedError(actor.id, action)


def ensure_customer(actor: Actor, job: Job, action: str) -> None:
    """Only the job's client (or its portal user) may answer for it."""
    if not actor.is_customer_for(job.client_id, job.customer_user_id):
        raise PermissionDeniedError(actor.id, action)


def ensure_system(actor: Actor, action: str) -> None:
    if not actor.is_system:
        raise PermissionDeniedError(actor.id, action)
