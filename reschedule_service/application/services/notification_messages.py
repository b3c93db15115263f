"""
Texts of the messages sent by the negotiation flows.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from reschedule_service.application.interfaces.notifier import (
    Notification,
    NotificationType,
)
from reschedule_service.domain.entities.alternative_suggestion import (
    AlternativeSuggestion,
)
from reschedule_service.domain.entities.route_optimization import (
    RouteOptimization,
    RouteOptimizationSuggestion,
)


def _day(value: date) -> str:
    return value.strftime("%A, %d %b")


def alternatives_proposed(user_id: UUID, count: int) -> Notification:
    plural = "s" if count > 1 else ""
    return Notification(
        user_id=user_id,
        title="New Time Options Available",
        message=(
            f"Your contractor has proposed {count} alternative time slot{plural} "
            "for your job. Please review and choose one."
        ),
        notification_type=NotificationType.SCHEDULE_CHANGE,
    )


def alternative_answered(
    contractor_id: UUID, suggestion: AlternativeSuggestion, accepted: bool
) -> Notification:
    slot = suggestion.suggested_time_slot.display_name
    when = f"{_day(suggestion.suggested_date)}, {slot}"
    if accepted:
        title = "Alternative Time Accepted"
        message = f"Your customer accepted the proposed time {when}. The job is confirmed."
    else:
        title = "Alternative Time Declined"
        message = f"Your customer declined the proposed time {when}."
    return Notification(
        user_id=contractor_id,
        title=title,
        message=message,
        notification_type=NotificationType.ALTERNATIVE_RESPONSE,
    )


def optimization_available(optimization: RouteOptimization) -> Notification:
    return Notification(
        user_id=optimization.contractor_id,
        title="Route Optimization Available",
        message=(
            f"A route optimization could save you {optimization.time_saved_minutes} "
            f"minutes on {_day(optimization.optimization_date)}. "
            "Review the suggested changes."
        ),
        notification_type=NotificationType.ROUTE_OPTIMIZATION,
    )


def route_change_requested(
    user_id: UUID, suggestion: RouteOptimizationSuggestion
) -> Notification:
    return Notification(
        user_id=user_id,
        title="Schedule Change Request",
        message=(
            "Your contractor has requested to move your booking from "
            f"{suggestion.current_time_slot.display_name} to "
            f"{suggestion.suggested_time_slot.display_name} on "
            f"{_day(suggestion.suggested_date)}. Please review in your portal."
        ),
        notification_type=NotificationType.ROUTE_CHANGE_REQUEST,
    )


def route_change_answered(
    contractor_id: UUID,
    suggestion: RouteOptimizationSuggestion,
    approved: bool,
    job_title: Optional[str] = None,
) -> Notification:
    verdict = "approved" if approved else "declined"
    subject = f"'{job_title}'" if job_title else "a job"
    return Notification(
        user_id=contractor_id,
        title=f"Schedule Change {verdict.capitalize()}",
        message=(
            f"Your customer {verdict} moving {subject} to "
            f"{suggestion.suggested_time_slot.display_name} on "
            f"{_day(suggestion.suggested_date)}."
        ),
        notification_type=NotificationType.ROUTE_CHANGE_RESPONSE,
    )
