"""
Lookup-related domain exceptions.
"""

from uuid import UUID


class NotFoundError(Exception):
    """Base exception for unknown ids."""

    def __init__(self, entity: str, entity_id: UUID):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class JobNotFoundError(NotFoundError):
    """Raised when a job id is unknown."""

    def __init__(self, job_id: UUID):
        super().__init__("Job", job_id)


class SuggestionNotFoundError(NotFoundError):
    """Raised when a suggestion id is unknown."""

    def __init__(self, suggestion_id: UUID):
        super().__init__("Suggestion", suggestion_id)


class OptimizationNotFoundError(NotFoundError):
    """Raised when a route optimization id is unknown."""

    def __init__(self, optimization_id: UUID):
        super().__init__("Route optimization", optimization_id)
