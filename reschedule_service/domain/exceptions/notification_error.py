"""
Notification-related domain exceptions.
"""


class NotificationError(Exception):
    """Raised by notifier adapters. Logged by the dispatcher, never propagated."""

    def __init__(self, channel: str, message: str):
        self.channel = channel
        self.message = message
        super().__init__(f"Notification via {channel} failed: {message}")
