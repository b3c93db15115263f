"""
Unit tests for the logging setup.
"""

from reschedule_service.config.logging import add_service_context
from reschedule_service.config.settings import settings


class TestServiceContext:
    """Test the service context processor."""

    def test_adds_service_and_environment(self):
        event = add_service_context(None, "info", {"event": "Job rescheduled"})

        assert event["service"] == settings.APP_NAME
        assert event["environment"] == settings.ENVIRONMENT
        assert event["event"] == "Job rescheduled"

    def test_keeps_explicit_values(self):
        event = add_service_context(
            None, "info", {"event": "Job rescheduled", "service": "worker"}
        )

        assert event["service"] == "worker"
