"""
Notification delivery channels.
"""

from .database_notifier import DatabaseNotifier
from .factory import NotifierFactory
from .log_notifier import LogNotifier
from .webhook_notifier import WebhookNotifier

__all__ = [
    "DatabaseNotifier",
    "LogNotifier",
    "NotifierFactory",
    "WebhookNotifier",
]
