"""
Notifier interface for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class NotificationType(str, Enum):
    """Kinds of messages the negotiation flows send."""

    SCHEDULE_CHANGE = "schedule_change"
    ALTERNATIVE_RESPONSE = "alternative_response"
    ROUTE_OPTIMIZATION = "route_optimization"
    ROUTE_CHANGE_REQUEST = "route_change_request"
    ROUTE_CHANGE_RESPONSE = "route_change_response"


@dataclass(frozen=True)
class Notification:
    """A message addressed to one user."""

    user_id: UUID
    title: str
    message: str
    notification_type: NotificationType


class NotifierInterface(ABC):
    """Interface for notification delivery channels."""

    channel: str = "unknown"

    @abstractmethod
    async def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: NotificationType,
    ) -> None:
        """Deliver a message to a user. Raises NotificationError on failure."""
        pass
