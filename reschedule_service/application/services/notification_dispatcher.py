"""
Best-effort notification dispatch.

Messages are sent only after the transaction that produced them committed.
Each delivery runs as its own task with a bounded timeout; failures are
logged and counted, never raised to the caller.
"""

import asyncio
from typing import List, Optional, Set

from reschedule_service.application.interfaces.notifier import (
    Notification,
    NotifierInterface,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.infrastructure.monitoring.metrics import record_notification

logger = get_logger(__name__)


class NotificationDispatcher:
    """Fire-and-forget front for a notifier."""

    def __init__(self, notifier: NotifierInterface, timeout_seconds: float = 5.0):
        self.notifier = notifier
        self.timeout_seconds = timeout_seconds
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(self, notifications: List[Notification]) -> None:
        """Schedule delivery of each notification and return immediately."""
        for notification in notifications:
            task = asyncio.create_task(self._deliver(notification))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _deliver(self, notification: Notification) -> None:
        channel = getattr(self.notifier, "channel", "unknown")
        try:
            await asyncio.wait_for(
                self.notifier.notify(
                    notification.user_id,
                    notification.title,
                    notification.message,
                    notification.notification_type,
                ),
                timeout=self.timeout_seconds,
            )
            record_notification(channel, "delivered")
            logger.debug(
                "Notification delivered",
                user_id=str(notification.user_id),
                notification_type=notification.notification_type.value,
                channel=channel,
            )
        except asyncio.TimeoutError:
            record_notification(channel, "timeout")
            logger.warning(
                "Notification timed out",
                user_id=str(notification.user_id),
                notification_type=notification.notification_type.value,
                channel=channel,
                timeout_seconds=self.timeout_seconds,
            )
        except Exception as e:
            record_notification(channel, "failed")
            logger.warning(
                "Notification failed",
                user_id=str(notification.user_id),
                notification_type=notification.notification_type.value,
                channel=channel,
                error=str(e),
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait for in-flight deliveries, e.g. on shutdown."""
        if not self._tasks:
            return
        await asyncio.wait(set(self._tasks), timeout=timeout)
