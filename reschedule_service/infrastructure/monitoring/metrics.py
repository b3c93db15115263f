"""
Prometheus metrics for schedule negotiation monitoring.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

from reschedule_service.config.logging import get_logger

logger = get_logger(__name__)

registry = CollectorRegistry()
prometheus_multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR")

if prometheus_multiproc_dir and os.path.isdir(prometheus_multiproc_dir):
    try:
        multiprocess.MultiProcessCollector(registry)
    except ValueError as e:
        logger.warning("Failed to initialize multiprocess collector", error=str(e))
        registry = CollectorRegistry()


def get_registry() -> CollectorRegistry:
    """Get the current registry."""
    return registry


SCHEDULE_SHIFT_EVALUATIONS = Counter(
    "schedule_shift_evaluations_total",
    "Conflict checks run against a contractor-day",
    ["shifted", "overrun"],
    registry=registry,
)

NEGOTIATION_TRANSITIONS = Counter(
    "negotiation_transitions_total",
    "Reschedule negotiation transitions by outcome",
    ["entity", "transition", "outcome"],
    registry=registry,
)

NOTIFICATION_DELIVERIES = Counter(
    "notification_deliveries_total",
    "Best-effort notification deliveries",
    ["channel", "outcome"],
    registry=registry,
)

TRANSACTION_DURATION = Histogram(
    "negotiation_transaction_duration_seconds",
    "Time spent inside negotiation transactions",
    ["operation"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=registry,
)


def record_shift_evaluation(shifted: bool, overrun: bool) -> None:
    """Record a planner evaluation."""
    SCHEDULE_SHIFT_EVALUATIONS.labels(
        shifted=str(shifted).lower(), overrun=str(overrun).lower()
    ).inc()


def record_transition(entity: str, transition: str, outcome: str) -> None:
    """Record a negotiation transition (outcome: applied, noop or failed)."""
    NEGOTIATION_TRANSITIONS.labels(
        entity=entity, transition=transition, outcome=outcome
    ).inc()


def record_notification(channel: str, outcome: str) -> None:
    """Record a notification delivery attempt."""
    NOTIFICATION_DELIVERIES.labels(channel=channel, outcome=outcome).inc()


def observe_transaction(operation: str, seconds: float) -> None:
    """Record how long a transaction took."""
    TRANSACTION_DURATION.labels(operation=operation).observe(seconds)


def get_metrics() -> bytes:
    """Render metrics in Prometheus text format."""
    return generate_latest(get_registry())


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
