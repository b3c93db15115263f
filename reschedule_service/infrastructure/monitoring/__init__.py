"""
Monitoring package.
"""

from .health_checks import HealthChecker, HealthStatus
from .metrics import (
    get_metrics,
    get_metrics_content_type,
    observe_transaction,
    record_notification,
    record_shift_evaluation,
    record_transition,
)

__all__ = [
    "HealthChecker",
    "HealthStatus",
    "get_metrics",
    "get_metrics_content_type",
    "observe_transaction",
    "record_notification",
    "record_shift_evaluation",
    "record_transition",
]
