"""
Unit tests for NotificationDispatcher and the message builders.
"""

from datetime import date
from uuid import uuid4

import pytest

from reschedule_service.application.interfaces.notifier import (
    Notification,
    NotificationType,
)
from reschedule_service.application.services import notification_messages
from reschedule_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from reschedule_service.domain.entities.route_optimization import (
    RouteOptimization,
    RouteOptimizationSuggestion,
)


def _notification(user_id=None) -> Notification:
    return Notification(
        user_id=user_id or uuid4(),
        title="New Time Options Available",
        message="Your contractor has proposed 2 alternative time slots.",
        notification_type=NotificationType.SCHEDULE_CHANGE,
    )


class TestNotificationDispatcher:
    """Test best-effort delivery."""

    @pytest.mark.asyncio
    async def test_delivers_each_notification(self, dispatcher, notifier):
        first, second = _notification(), _notification()

        dispatcher.dispatch([first, second])
        await dispatcher.drain()

        assert notifier.sent == [first, second]
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_failure_is_swallowed(self, notifier_factory):
        notifier = notifier_factory(fail=True)
        dispatcher = NotificationDispatcher(notifier, timeout_seconds=1.0)

        dispatcher.dispatch([_notification()])
        await dispatcher.drain()

        assert notifier.sent == []
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_timeout_is_swallowed(self, notifier_factory):
        notifier = notifier_factory(delay=0.5)
        dispatcher = NotificationDispatcher(notifier, timeout_seconds=0.01)

        dispatcher.dispatch([_notification()])
        await dispatcher.drain(timeout=1.0)

        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_dispatch_returns_before_delivery(self, notifier_factory):
        notifier = notifier_factory(delay=0.05)
        dispatcher = NotificationDispatcher(notifier, timeout_seconds=1.0)

        dispatcher.dispatch([_notification()])

        assert dispatcher.pending == 1
        assert notifier.sent == []
        await dispatcher.drain()
        assert len(notifier.sent) == 1

    @pytest.mark.asyncio
    async def test_drain_without_work(self, dispatcher):
        await dispatcher.drain()

        assert dispatcher.pending == 0


class TestNotificationMessages:
    """Test message texts."""

    def test_alternatives_proposed_pluralizes(self):
        user_id = uuid4()

        single = notification_messages.alternatives_proposed(user_id, 1)
        several = notification_messages.alternatives_proposed(user_id, 3)

        assert "1 alternative time slot " in single.message
        assert "3 alternative time slots" in several.message
        assert several.notification_type == NotificationType.SCHEDULE_CHANGE

    def test_optimization_available(self):
        optimization = RouteOptimization(
            contractor_id=uuid4(),
            optimization_date=date(2025, 3, 10),
            level=1,
            time_saved_minutes=35,
        )

        notification = notification_messages.optimization_available(optimization)

        assert notification.user_id == optimization.contractor_id
        assert notification.message == (
            "A route optimization could save you 35 minutes on Monday, 10 Mar. "
            "Review the suggested changes."
        )

    def test_route_change_requested(self):
        suggestion = RouteOptimizationSuggestion(
            route_optimization_id=uuid4(),
            job_id=uuid4(),
            current_date=date(2025, 3, 10),
            current_time_slot="morning",
            suggested_date=date(2025, 3, 10),
            suggested_time_slot="afternoon",
            requires_customer_approval=True,
        )
        user_id = uuid4()

        notification = notification_messages.route_change_requested(user_id, suggestion)

        assert notification.user_id == user_id
        assert notification.notification_type == NotificationType.ROUTE_CHANGE_REQUEST
        assert "from Morning (7am–12pm) to Afternoon (12pm–5pm)" in notification.message
