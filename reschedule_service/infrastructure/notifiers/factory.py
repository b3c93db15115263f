"""
Notifier factory for creating the configured delivery channel.
"""

from typing import Callable, Dict

from reschedule_service.application.interfaces.notifier import NotifierInterface
from reschedule_service.config.settings import Settings
from reschedule_service.infrastructure.notifiers.database_notifier import (
    DatabaseNotifier,
)
from reschedule_service.infrastructure.notifiers.log_notifier import LogNotifier
from reschedule_service.infrastructure.notifiers.webhook_notifier import (
    WebhookNotifier,
)


class NotifierFactory:
    """Factory for creating notifier instances."""

    def __init__(self, settings: Settings, session_factory=None):
        self.settings = settings
        self.session_factory = session_factory
        self._builders: Dict[str, Callable[[], NotifierInterface]] = {
            "database": self._database,
            "webhook": self._webhook,
            "log": LogNotifier,
        }

    def _database(self) -> NotifierInterface:
        if self.session_factory is None:
            from reschedule_service.config.database import async_session_factory

            return DatabaseNotifier(async_session_factory)
        return DatabaseNotifier(self.session_factory)

    def _webhook(self) -> NotifierInterface:
        return WebhookNotifier(
            self.settings.NOTIFICATION_WEBHOOK_URL,
            timeout=self.settings.NOTIFICATION_TIMEOUT_SECONDS,
        )

    def create_notifier(self, channel: str = None) -> NotifierInterface:
        """Create a notifier for ``channel`` (defaults to the configured one)."""
        channel = channel or self.settings.NOTIFICATION_CHANNEL
        builder = self._builders.get(channel)

        if not builder:
            raise ValueError(f"Notification channel '{channel}' not supported")

        return builder()

    def get_available_channels(self) -> list[str]:
        return list(self._builders.keys())

    def register_channel(
        self, channel: str, builder: Callable[[], NotifierInterface]
    ) -> None:
        """Register a new delivery channel."""
        self._builders[channel] = builder
