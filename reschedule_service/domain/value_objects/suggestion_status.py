"""
Suggestion status value objects.
"""

from enum import Enum


class AlternativeSuggestionStatus(str, Enum):
    """Alternative-time suggestion status enumeration."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    def is_final(self) -> bool:
        """Check if status is terminal."""
        return self in [self.ACCEPTED, self.DECLINED]


class CustomerApprovalStatus(str, Enum):
    """Customer answer on a route optimization line item."""

    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"

    @classmethod
    def from_answer(cls, approved: bool) -> "CustomerApprovalStatus":
        """Map a yes/no answer to a status."""
        return cls.APPROVED if approved else cls.DECLINED
