"""
Notifications written to the application log only.
"""

from uuid import UUID

from reschedule_service.application.interfaces.notifier import (
    NotificationType,
    NotifierInterface,
)
from reschedule_service.config.logging import get_logger

logger = get_logger(__name__)


class LogNotifier(NotifierInterface):
    """Used in development and tests."""

    channel = "log"

    async def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: NotificationType,
    ) -> None:
        logger.info(
            "Notification",
            user_id=str(user_id),
            title=title,
            message=message,
            notification_type=notification_type.value,
        )
