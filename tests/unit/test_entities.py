"""
Unit tests for domain entities.
"""

from datetime import date, datetime, time, timezone
from uuid import uuid4

import pytest

from reschedule_service.domain.entities.alternative_suggestion import (
    AlternativeSuggestion,
)
from reschedule_service.domain.entities.route_optimization import (
    RouteOptimization,
    RouteOptimizationSuggestion,
)
from reschedule_service.domain.exceptions.conflict_error import InvalidTransitionError
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


class TestJob:
    """Test Job entity."""

    def test_rejects_non_positive_duration(self, make_job):
        with pytest.raises(ValueError, match="duration"):
            make_job(duration_minutes=0)

    def test_start_minutes(self, make_job):
        assert make_job(scheduled_time=time(9, 30)).start_minutes == 570
        assert make_job(scheduled_time=None).start_minutes is None

    def test_reschedule_clears_slot(self, make_job):
        job = make_job(time_slot="7am-10am")

        job.reschedule(date(2025, 3, 11), time(13, 5))

        assert job.scheduled_date == date(2025, 3, 11)
        assert job.scheduled_time == time(13, 5)
        assert job.time_slot is None

    def test_reschedule_refused_when_in_progress(self, make_job):
        job = make_job(status=JobStatus.IN_PROGRESS)

        with pytest.raises(ValueError, match="cannot be rescheduled"):
            job.reschedule(date(2025, 3, 11), time(10, 0))

    def test_mark_pending_confirmation_only_from_scheduled(self, make_job):
        job = make_job()
        assert job.mark_pending_confirmation() is True
        assert job.status == JobStatus.PENDING_CONFIRMATION

        assert job.mark_pending_confirmation() is False
        assert make_job(status=JobStatus.IN_PROGRESS).mark_pending_confirmation() is False

    def test_apply_alternative_confirms_job(self, make_job):
        job = make_job(status=JobStatus.PENDING_CONFIRMATION)

        job.apply_alternative(date(2025, 3, 12), AlternativeTimeSlot.AFTERNOON)

        assert job.scheduled_date == date(2025, 3, 12)
        assert job.scheduled_time == time(14, 0)
        assert job.time_slot == "2pm-5pm"
        assert job.status == JobStatus.SCHEDULED

    def test_apply_route_suggestion_keeps_original_schedule(self, make_job):
        job = make_job(scheduled_time=time(9, 0), time_slot=None)

        job.apply_route_suggestion(
            date(2025, 3, 10), RouteTimeSlot.AFTERNOON, RouteTimeSlot.MORNING
        )

        assert job.original_scheduled_date == date(2025, 3, 10)
        assert job.original_scheduled_time == time(9, 0)
        assert job.original_time_slot == "morning"
        assert job.scheduled_time == time(13, 0)
        assert job.time_slot == "afternoon"


class TestAlternativeSuggestion:
    """Test AlternativeSuggestion entity."""

    @pytest.fixture
    def suggestion(self):
        return AlternativeSuggestion(
            job_id=uuid4(),
            contractor_id=uuid4(),
            suggested_date=date(2025, 3, 12),
            suggested_time_slot="10am-2pm",
        )

    def test_defaults(self, suggestion):
        assert suggestion.status == AlternativeSuggestionStatus.PENDING
        assert suggestion.suggested_time_slot == AlternativeTimeSlot.MIDDAY
        assert suggestion.responded_at is None
        assert suggestion.created_at is not None

    def test_rejects_unknown_slot(self):
        with pytest.raises(ValueError):
            AlternativeSuggestion(
                job_id=uuid4(),
                contractor_id=uuid4(),
                suggested_date=date(2025, 3, 12),
                suggested_time_slot="morning",
            )

    def test_accept_sets_response_time(self, suggestion):
        responded = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

        assert suggestion.accept(responded) is True
        assert suggestion.status == AlternativeSuggestionStatus.ACCEPTED
        assert suggestion.responded_at == responded

    def test_terminal_suggestion_is_not_changed_again(self, suggestion):
        suggestion.decline()
        first_response = suggestion.responded_at

        assert suggestion.accept() is False
        assert suggestion.decline() is False
        assert suggestion.status == AlternativeSuggestionStatus.DECLINED
        assert suggestion.responded_at == first_response


class TestRouteOptimization:
    """Test RouteOptimization entity."""

    def _optimization(self, **overrides):
        data = {
            "contractor_id": uuid4(),
            "optimization_date": date(2025, 3, 10),
            "level": 2,
            "time_saved_minutes": 45,
        }
        data.update(overrides)
        optimization = RouteOptimization(**data)
        optimization.suggestions = [
            RouteOptimizationSuggestion(
                route_optimization_id=optimization.id,
                job_id=uuid4(),
                current_date=date(2025, 3, 10),
                current_time_slot="morning",
                suggested_date=date(2025, 3, 10),
                suggested_time_slot="afternoon",
                requires_customer_approval=flag,
            )
            for flag in (True, False)
        ]
        return optimization

    @pytest.mark.parametrize("level", [0, 4])
    def test_level_bounds(self, level):
        with pytest.raises(ValueError, match="level"):
            self._optimization(level=level)

    def test_time_saved_must_not_be_negative(self):
        with pytest.raises(ValueError, match="Time saved"):
            self._optimization(time_saved_minutes=-1)

    def test_suggestions_requiring_approval(self):
        optimization = self._optimization()

        flagged = optimization.suggestions_requiring_approval()

        assert len(flagged) == 1
        assert flagged[0].requires_customer_approval is True
        assert len(optimization.job_ids) == 2

    def test_transition_to_awaiting_then_applied(self):
        optimization = self._optimization()

        assert optimization.transition_to(RouteOptimizationStatus.AWAITING_CUSTOMER)
        assert optimization.transition_to(RouteOptimizationStatus.APPLIED)
        assert optimization.status == RouteOptimizationStatus.APPLIED

    def test_terminal_transition_is_noop(self):
        optimization = self._optimization(status=RouteOptimizationStatus.DECLINED)

        assert optimization.transition_to(RouteOptimizationStatus.APPLIED) is False
        assert optimization.status == RouteOptimizationStatus.DECLINED

    def test_illegal_live_transition_raises(self):
        optimization = self._optimization(status=RouteOptimizationStatus.AWAITING_CUSTOMER)

        with pytest.raises(InvalidTransitionError):
            optimization.transition_to(RouteOptimizationStatus.PENDING_APPROVAL)

    def test_customer_answer_and_auto_approve(self):
        flagged, plain = self._optimization().suggestions

        assert flagged.record_customer_answer(False) is True
        assert flagged.record_customer_answer(False) is False
        assert flagged.customer_approval_status == CustomerApprovalStatus.DECLINED
        assert flagged.auto_approve() is False

        assert plain.auto_approve() is True
        assert plain.customer_approval_status == CustomerApprovalStatus.APPROVED
        assert plain.auto_approve() is False
