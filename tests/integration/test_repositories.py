"""
Integration tests for the SQLAlchemy repositories.
"""

from datetime import date, datetime, time, timezone
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, InvalidRequestError

from reschedule_service.domain.entities.alternative_suggestion import (
    AlternativeSuggestion,
)
from reschedule_service.domain.entities.route_optimization import (
    RouteOptimization,
    RouteOptimizationSuggestion,
)
from reschedule_service.domain.value_objects.job_status import JobStatus
from reschedule_service.domain.value_objects.optimization_status import (
    RouteOptimizationStatus,
)
from reschedule_service.domain.value_objects.suggestion_status import (
    AlternativeSuggestionStatus,
    CustomerApprovalStatus,
)
from reschedule_service.infrastructure.database.models.job import JobModel

DAY = date(2025, 3, 10)


def _suggestion(job, day, slot, status=AlternativeSuggestionStatus.PENDING):
    return AlternativeSuggestion(
        job_id=job.id,
        contractor_id=job.contractor_id,
        suggested_date=day,
        suggested_time_slot=slot,
        status=status,
    )


def _optimization(contractor_id, jobs, flagged_index=0):
    optimization = RouteOptimization(
        contractor_id=contractor_id, optimization_date=DAY, level=1, time_saved_minutes=20
    )
    optimization.suggestions = [
        RouteOptimizationSuggestion(
            route_optimization_id=optimization.id,
            job_id=job.id,
            current_date=DAY,
            current_time_slot="morning",
            suggested_date=DAY,
            suggested_time_slot="afternoon",
            requires_customer_approval=(index == flagged_index),
        )
        for index, job in enumerate(jobs)
    ]
    return optimization


@pytest.mark.integration
class TestJobRepository:
    """Test JobRepository against SQLite."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, repos, make_job):
        job = make_job(time_slot="7am-10am")

        await repos.jobs.create(job)
        loaded = await repos.jobs.get_by_id(job.id)

        assert loaded.id == job.id
        assert loaded.scheduled_time == time(9, 0)
        assert loaded.status == JobStatus.SCHEDULED
        assert loaded.route_optimization_locked is False

    @pytest.mark.asyncio
    async def test_find_by_contractor_and_date(self, repos, make_job, contractor_id):
        kept = make_job(scheduled_time=time(8, 0))
        excluded = make_job(scheduled_time=time(10, 0))
        cancelled = make_job(scheduled_time=time(12, 0), status=JobStatus.CANCELLED)
        other_day = make_job(scheduled_date=date(2025, 3, 11))
        other_contractor = make_job(contractor_id=uuid4())
        for job in (kept, excluded, cancelled, other_day, other_contractor):
            await repos.jobs.create(job)

        found = await repos.jobs.find_by_contractor_and_date(
            contractor_id, date(2025, 3, 10), exclude_job_id=excluded.id
        )

        assert [job.id for job in found] == [kept.id]

    @pytest.mark.asyncio
    async def test_update_persists_schedule(self, repos, make_job):
        job = await repos.jobs.create(make_job())

        job.reschedule(date(2025, 3, 12), time(14, 5))
        await repos.jobs.update(job)
        loaded = await repos.jobs.get_for_update(job.id)

        assert loaded.scheduled_date == date(2025, 3, 12)
        assert loaded.scheduled_time == time(14, 5)

    @pytest.mark.asyncio
    async def test_get_many_for_update_skips_unknown(self, repos, make_job):
        first = await repos.jobs.create(make_job())
        second = await repos.jobs.create(make_job())

        found = await repos.jobs.get_many_for_update([second.id, uuid4(), first.id])

        assert {job.id for job in found} == {first.id, second.id}

    @pytest.mark.asyncio
    async def test_suggestion_collection_is_never_lazy_loaded(
        self, repos, db_session, make_job
    ):
        job = await repos.jobs.create(make_job())

        model = await db_session.get(JobModel, job.id, populate_existing=True)

        with pytest.raises(InvalidRequestError):
            model.alternative_suggestions


@pytest.mark.integration
class TestAlternativeSuggestionRepository:
    """Test AlternativeSuggestionRepository against SQLite."""

    @pytest.mark.asyncio
    async def test_compare_and_set_only_moves_pending_rows(self, repos, make_job):
        job = await repos.jobs.create(make_job())
        [suggestion] = await repos.suggestions.create_many(
            [_suggestion(job, DAY, "7am-10am")]
        )
        now = datetime.now(timezone.utc)

        first = await repos.suggestions.transition_if_pending(
            suggestion.id, AlternativeSuggestionStatus.DECLINED, now
        )
        second = await repos.suggestions.transition_if_pending(
            suggestion.id, AlternativeSuggestionStatus.ACCEPTED, now
        )
        loaded = await repos.suggestions.get_by_id(suggestion.id)

        assert first is True
        assert second is False
        assert loaded.status == AlternativeSuggestionStatus.DECLINED
        assert loaded.responded_at is not None

    @pytest.mark.asyncio
    async def test_decline_pending_siblings(self, repos, make_job):
        job = await repos.jobs.create(make_job())
        chosen, pending, resolved = await repos.suggestions.create_many(
            [
                _suggestion(job, DAY, "7am-10am"),
                _suggestion(job, DAY, "10am-2pm"),
                _suggestion(job, DAY, "2pm-5pm", AlternativeSuggestionStatus.DECLINED),
            ]
        )

        declined = await repos.suggestions.decline_pending_for_job(
            job.id, chosen.id, datetime.now(timezone.utc)
        )

        assert declined == [pending.id]
        statuses = {s.id: s.status for s in await repos.suggestions.list_by_job(job.id)}
        assert statuses[chosen.id] == AlternativeSuggestionStatus.PENDING
        assert statuses[pending.id] == AlternativeSuggestionStatus.DECLINED

    @pytest.mark.asyncio
    async def test_two_accepted_rows_are_rejected(self, repos, make_job):
        """The partial unique index allows at most one accepted row per job."""
        job = await repos.jobs.create(make_job())

        with pytest.raises(IntegrityError):
            await repos.suggestions.create_many(
                [
                    _suggestion(job, DAY, "7am-10am", AlternativeSuggestionStatus.ACCEPTED),
                    _suggestion(job, DAY, "2pm-5pm", AlternativeSuggestionStatus.ACCEPTED),
                ]
            )

    @pytest.mark.asyncio
    async def test_count_accepted(self, repos, make_job):
        job = await repos.jobs.create(make_job())
        await repos.suggestions.create_many(
            [
                _suggestion(job, DAY, "7am-10am", AlternativeSuggestionStatus.ACCEPTED),
                _suggestion(job, DAY, "2pm-5pm", AlternativeSuggestionStatus.DECLINED),
            ]
        )

        assert await repos.suggestions.count_accepted_for_job(job.id) == 1


@pytest.mark.integration
class TestRouteOptimizationRepository:
    """Test RouteOptimizationRepository against SQLite."""

    @pytest.mark.asyncio
    async def test_create_and_load_with_suggestions(self, repos, make_job, contractor_id):
        jobs = [await repos.jobs.create(make_job()) for _ in range(2)]

        created = await repos.optimizations.create(_optimization(contractor_id, jobs))
        loaded = await repos.optimizations.get_by_id(created.id)

        assert loaded.status == RouteOptimizationStatus.PENDING_APPROVAL
        assert sorted(loaded.job_ids) == sorted(job.id for job in jobs)
        assert len(loaded.suggestions_requiring_approval()) == 1

    @pytest.mark.asyncio
    async def test_transition_status_is_compare_and_set(
        self, repos, make_job, contractor_id
    ):
        job = await repos.jobs.create(make_job())
        optimization = await repos.optimizations.create(_optimization(contractor_id, [job]))

        declined = await repos.optimizations.transition_status(
            optimization.id,
            RouteOptimizationStatus.active_statuses(),
            RouteOptimizationStatus.DECLINED,
        )
        applied = await repos.optimizations.transition_status(
            optimization.id,
            RouteOptimizationStatus.active_statuses(),
            RouteOptimizationStatus.APPLIED,
        )

        assert declined is True
        assert applied is False
        loaded = await repos.optimizations.get_by_id(optimization.id)
        assert loaded.status == RouteOptimizationStatus.DECLINED

    @pytest.mark.asyncio
    async def test_transition_status_touches_updated_at(
        self, repos, make_job, contractor_id
    ):
        job = await repos.jobs.create(make_job())
        optimization = await repos.optimizations.create(_optimization(contractor_id, [job]))
        before = await repos.optimizations.get_by_id(optimization.id)

        await repos.optimizations.transition_status(
            optimization.id,
            RouteOptimizationStatus.active_statuses(),
            RouteOptimizationStatus.AWAITING_CUSTOMER,
        )
        after = await repos.optimizations.get_by_id(optimization.id)

        assert after.updated_at > before.updated_at

    @pytest.mark.asyncio
    async def test_customer_answer_needs_awaiting_parent(
        self, repos, make_job, contractor_id
    ):
        job = await repos.jobs.create(make_job())
        optimization = await repos.optimizations.create(_optimization(contractor_id, [job]))
        flagged = optimization.suggestions[0]

        early = await repos.optimizations.record_customer_answer(
            flagged.id, CustomerApprovalStatus.APPROVED
        )
        await repos.optimizations.transition_status(
            optimization.id,
            [RouteOptimizationStatus.PENDING_APPROVAL],
            RouteOptimizationStatus.AWAITING_CUSTOMER,
        )
        stored = await repos.optimizations.record_customer_answer(
            flagged.id, CustomerApprovalStatus.APPROVED
        )

        assert early is False
        assert stored is True
        line = await repos.optimizations.get_suggestion_by_id(flagged.id)
        assert line.customer_approval_status == CustomerApprovalStatus.APPROVED

    @pytest.mark.asyncio
    async def test_auto_approve_leaves_flagged_items(self, repos, make_job, contractor_id):
        jobs = [await repos.jobs.create(make_job()) for _ in range(3)]
        optimization = await repos.optimizations.create(_optimization(contractor_id, jobs))

        approved = await repos.optimizations.auto_approve_suggestions(optimization.id)

        assert approved == 2
        loaded = await repos.optimizations.get_by_id(optimization.id)
        flagged = [s for s in loaded.suggestions if s.requires_customer_approval]
        assert flagged[0].customer_approval_status == CustomerApprovalStatus.PENDING

    @pytest.mark.asyncio
    async def test_active_membership_excludes_decided_and_self(
        self, repos, make_job, contractor_id
    ):
        open_job, closed_job = [await repos.jobs.create(make_job()) for _ in range(2)]
        open_one = await repos.optimizations.create(_optimization(contractor_id, [open_job]))
        closed = await repos.optimizations.create(_optimization(contractor_id, [closed_job]))
        await repos.optimizations.transition_status(
            closed.id,
            RouteOptimizationStatus.active_statuses(),
            RouteOptimizationStatus.APPLIED,
        )

        claimed = await repos.optimizations.find_job_ids_in_active_optimizations(
            [open_job.id, closed_job.id]
        )
        claimed_elsewhere = await repos.optimizations.find_job_ids_in_active_optimizations(
            [open_job.id], exclude_optimization_id=open_one.id
        )

        assert claimed == [open_job.id]
        assert claimed_elsewhere == []

    @pytest.mark.asyncio
    async def test_route_change_requests_for_client(
        self, repos, make_job, contractor_id, client_id
    ):
        jobs = [await repos.jobs.create(make_job()) for _ in range(2)]
        optimization = await repos.optimizations.create(_optimization(contractor_id, jobs))

        before = await repos.optimizations.find_route_change_requests_for_client(client_id)
        await repos.optimizations.transition_status(
            optimization.id,
            [RouteOptimizationStatus.PENDING_APPROVAL],
            RouteOptimizationStatus.AWAITING_CUSTOMER,
        )
        after = await repos.optimizations.find_route_change_requests_for_client(client_id)

        assert before == []
        assert [s.id for s in after] == [optimization.suggestions[0].id]

    @pytest.mark.asyncio
    async def test_find_active_by_contractor(self, repos, make_job, contractor_id):
        job = await repos.jobs.create(make_job())
        optimization = await repos.optimizations.create(_optimization(contractor_id, [job]))

        active = await repos.optimizations.find_active_by_contractor(contractor_id)
        others = await repos.optimizations.find_active_by_contractor(uuid4())

        assert [o.id for o in active] == [optimization.id]
        assert others == []
