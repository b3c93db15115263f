"""
Notifications forwarded to an HTTP endpoint.
"""

from typing import Optional
from uuid import UUID

import httpx

from reschedule_service.application.interfaces.notifier import (
    NotificationType,
    NotifierInterface,
)
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.exceptions.notification_error import NotificationError
from reschedule_service.infrastructure.external.http_client import HTTPClient

logger = get_logger(__name__)


class WebhookNotifier(NotifierInterface):
    """POSTs each message as JSON to a configured URL."""

    channel = "webhook"

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not url:
            raise ValueError("Webhook notifier needs a URL")
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: NotificationType,
    ) -> None:
        payload = {
            "user_id": str(user_id),
            "title": title,
            "message": message,
            "type": notification_type.value,
        }
        try:
            async with HTTPClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, data=payload)
        except httpx.HTTPError as e:
            raise NotificationError(self.channel, str(e)) from e

        if response.status_code >= 400:
            raise NotificationError(
                self.channel, f"endpoint answered {response.status_code}"
            )
