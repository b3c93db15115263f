"""
State-conflict domain exceptions.

Re-invoking a transition on a row that is already terminal is not an error
and never raises one of these.
"""

from typing import List
from uuid import UUID


class ConflictError(Exception):
    """Base exception for state conflicts."""

    pass


class InvalidTransitionError(ConflictError):
    """Raised when a live row is asked for a transition it does not allow."""

    def __init__(self, entity: str, current_status: str, requested: str):
        self.entity = entity
        self.current_status = current_status
        self.requested = requested
        super().__init__(
            f"Cannot {requested} {entity} while it is '{current_status}'"
        )


class OptimizationExclusivityError(ConflictError):
    """Raised when jobs are locked or already claimed by another active optimization."""

    def __init__(self, job_ids: List[UUID], reason: str):
        self.job_ids = job_ids
        self.reason = reason
        joined = ", ".join(str(job_id) for job_id in job_ids)
        super().__init__(f"Jobs [{joined}] cannot be optimized: {reason}")
