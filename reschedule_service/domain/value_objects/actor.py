"""
Actor value object.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID


class ActorRole(str, Enum):
    """Who is driving an operation."""

    CONTRACTOR = "contractor"
    CUSTOMER = "customer"
    SYSTEM = "system"


@dataclass(frozen=True)
class Actor:
    """The caller of a negotiation operation."""

    id: UUID
    role: ActorRole

    def __post_init__(self):
        """Validate actor fields."""
        if not self.id:
            raise ValueError("Actor id is required")
        if not isinstance(self.role, ActorRole):
            raise ValueError("Actor role must be an ActorRole")

    @property
    def is_contractor(self) -> bool:
        return self.role == ActorRole.CONTRACTOR

    @property
    def is_customer(self) -> bool:
        return self.role == ActorRole.CUSTOMER

    @property
    def is_system(self) -> bool:
        return self.role == ActorRole.SYSTEM

    def is_contractor_for(self, contractor_id: UUID) -> bool:
        """Check if actor is the given contractor."""
        return self.is_contractor and self.id == contractor_id

    def is_customer_for(
        self, client_id: UUID, customer_user_id: Optional[UUID] = None
    ) -> bool:
        """Check if actor is the customer behind a job."""
        return self.is_customer and self.id in {client_id, customer_user_id}
