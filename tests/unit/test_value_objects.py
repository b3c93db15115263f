"""
Unit tests for value objects.
"""

import dataclasses
from datetime import time
from uuid import uuid4

import pytest

from reschedule_service.domain.value_objects.actor import Actor, ActorRole
from reschedule_service.domain.value_objects.job_status import JobStatus
from reschedule_service.domain.value_objects.optimization_status import (
    RouteOptimizationStatus,
)
from reschedule_service.domain.value_objects.suggestion_status import (
    AlternativeSuggestionStatus,
    CustomerApprovalStatus,
)
from reschedule_service.domain.value_objects.time_slot import (
    AlternativeTimeSlot,
    RouteTimeSlot,
)


class TestJobStatus:
    """Test JobStatus value object."""

    def test_enum_values(self):
        """Test that all expected enum values exist."""
        expected_values = [
            "scheduled",
            "pending_confirmation",
            "in_progress",
            "completed",
            "cancelled",
        ]
        assert [status.value for status in JobStatus] == expected_values

    def test_is_final(self):
        assert JobStatus.COMPLETED.is_final() is True
        assert JobStatus.CANCELLED.is_final() is True

        assert JobStatus.SCHEDULED.is_final() is False
        assert JobStatus.PENDING_CONFIRMATION.is_final() is False
        assert JobStatus.IN_PROGRESS.is_final() is False

    def test_can_be_rescheduled(self):
        assert JobStatus.SCHEDULED.can_be_rescheduled() is True
        assert JobStatus.PENDING_CONFIRMATION.can_be_rescheduled() is True

        assert JobStatus.IN_PROGRESS.can_be_rescheduled() is False
        assert JobStatus.COMPLETED.can_be_rescheduled() is False
        assert JobStatus.CANCELLED.can_be_rescheduled() is False

    def test_occupies_schedule(self):
        """Only cancelled jobs free up the contractor's time."""
        assert JobStatus.CANCELLED.occupies_schedule() is False
        assert JobStatus.COMPLETED.occupies_schedule() is True
        assert JobStatus.SCHEDULED.occupies_schedule() is True


class TestRouteOptimizationStatus:
    """Test RouteOptimizationStatus value object."""

    def test_is_final(self):
        assert RouteOptimizationStatus.APPLIED.is_final() is True
        assert RouteOptimizationStatus.DECLINED.is_final() is True
        assert RouteOptimizationStatus.PENDING_APPROVAL.is_final() is False
        assert RouteOptimizationStatus.AWAITING_CUSTOMER.is_final() is False

    def test_transitions_from_pending_approval(self):
        status = RouteOptimizationStatus.PENDING_APPROVAL
        assert status.can_transition_to(RouteOptimizationStatus.APPLIED)
        assert status.can_transition_to(RouteOptimizationStatus.DECLINED)
        assert status.can_transition_to(RouteOptimizationStatus.AWAITING_CUSTOMER)

    def test_transitions_from_awaiting_customer(self):
        status = RouteOptimizationStatus.AWAITING_CUSTOMER
        assert status.can_transition_to(RouteOptimizationStatus.APPLIED)
        assert status.can_transition_to(RouteOptimizationStatus.DECLINED)
        assert not status.can_transition_to(RouteOptimizationStatus.PENDING_APPROVAL)
        assert not status.can_transition_to(RouteOptimizationStatus.AWAITING_CUSTOMER)

    def test_terminal_statuses_have_no_exits(self):
        for status in (RouteOptimizationStatus.APPLIED, RouteOptimizationStatus.DECLINED):
            assert status.allowed_transitions() == frozenset()

    def test_active_statuses(self):
        assert RouteOptimizationStatus.active_statuses() == [
            RouteOptimizationStatus.PENDING_APPROVAL,
            RouteOptimizationStatus.AWAITING_CUSTOMER,
        ]


class TestSuggestionStatuses:
    """Test suggestion status value objects."""

    def test_alternative_status_is_final(self):
        assert AlternativeSuggestionStatus.PENDING.is_final() is False
        assert AlternativeSuggestionStatus.ACCEPTED.is_final() is True
        assert AlternativeSuggestionStatus.DECLINED.is_final() is True

    def test_customer_approval_from_answer(self):
        assert CustomerApprovalStatus.from_answer(True) == CustomerApprovalStatus.APPROVED
        assert CustomerApprovalStatus.from_answer(False) == CustomerApprovalStatus.DECLINED


class TestTimeSlots:
    """Test the two slot domains."""

    def test_alternative_slot_values(self):
        assert [slot.value for slot in AlternativeTimeSlot] == [
            "7am-10am",
            "10am-2pm",
            "2pm-5pm",
        ]

    def test_alternative_slot_start_times(self):
        assert AlternativeTimeSlot.EARLY_MORNING.start_time == time(7, 0)
        assert AlternativeTimeSlot.MIDDAY.start_time == time(10, 0)
        assert AlternativeTimeSlot.AFTERNOON.start_time == time(14, 0)

    def test_alternative_slot_display_name(self):
        assert AlternativeTimeSlot.MIDDAY.display_name == "10:00 AM – 2:00 PM"

    def test_route_slot_values(self):
        assert [slot.value for slot in RouteTimeSlot] == ["morning", "afternoon"]
        assert RouteTimeSlot.MORNING.start_time == time(8, 0)
        assert RouteTimeSlot.AFTERNOON.start_time == time(13, 0)

    def test_slot_domains_do_not_mix(self):
        with pytest.raises(ValueError):
            RouteTimeSlot("7am-10am")
        with pytest.raises(ValueError):
            AlternativeTimeSlot("morning")


class TestActor:
    """Test Actor value object."""

    def test_contractor_ownership(self):
        contractor_id = uuid4()
        actor = Actor(id=contractor_id, role=ActorRole.CONTRACTOR)

        assert actor.is_contractor_for(contractor_id) is True
        assert actor.is_contractor_for(uuid4()) is False
        assert actor.is_customer_for(contractor_id) is False

    def test_customer_matches_client_or_portal_user(self):
        client_id, user_id = uuid4(), uuid4()

        assert Actor(id=client_id, role=ActorRole.CUSTOMER).is_customer_for(client_id, user_id)
        assert Actor(id=user_id, role=ActorRole.CUSTOMER).is_customer_for(client_id, user_id)
        assert not Actor(id=uuid4(), role=ActorRole.CUSTOMER).is_customer_for(
            client_id, user_id
        )

    def test_role_must_be_enum(self):
        with pytest.raises(ValueError, match="Actor role"):
            Actor(id=uuid4(), role="contractor")

    def test_immutability(self):
        actor = Actor(id=uuid4(), role=ActorRole.SYSTEM)

        with pytest.raises(dataclasses.FrozenInstanceError):
            actor.role = ActorRole.CONTRACTOR
