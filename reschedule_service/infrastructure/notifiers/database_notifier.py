"""
In-app notifications stored in the notifications table.
"""

from typing import Callable
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reschedule_service.application.interfaces.notifier import (
    NotificationType,
    NotifierInterface,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.exceptions.notification_error import NotificationError
from reschedule_service.infrastructure.database.models.notification import (
    NotificationModel,
)

logger = get_logger(__name__)


class DatabaseNotifier(NotifierInterface):
    """Writes each message in its own session, outside the caller's transaction."""

    channel = "database"

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: NotificationType,
    ) -> None:
        try:
            async with self.session_factory() as session:
                session.add(
                    NotificationModel(
                        user_id=user_id,
                        title=title,
                        message=message,
                        type=notification_type.value,
                    )
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise NotificationError(self.channel, str(e)) from e

        logger.debug(
            "Notification stored",
            user_id=str(user_id),
            notification_type=notification_type.value,
        )
