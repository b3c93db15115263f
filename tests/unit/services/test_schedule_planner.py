"""
Unit tests for the schedule conflict planner.
"""

import random
from datetime import time

import pytest

from reschedule_service.application.services.schedule_planner import (
    OVERRUN_NOTE,
    AutoShiftPlanner,
    BookedSlot,
    ConflictDetector,
    SlotIndex,
    format_clock,
    minutes_to_time,
    parse_clock,
    plan_shift,
)
from reschedule_service.domain.exceptions.validation_error import (
    InvalidFormatError,
    RequiredFieldError,
    ValidationError,
)
from reschedule_service.domain.value_objects.job_status import JobStatus


class TestClockHelpers:
    """Test clock parsing and formatting."""

    def test_parse_clock(self):
        assert parse_clock("09:05") == 545
        assert parse_clock("9:05") == 545
        assert parse_clock(time(13, 30)) == 810
        assert parse_clock(75) == 75

    @pytest.mark.parametrize(
        "value", ["ab", "10:75", "-1:00", "10:xx", "24:00", "25:00", "10:30:99", "1:2:3"]
    )
    def test_parse_clock_rejects_garbage(self, value):
        with pytest.raises(InvalidFormatError):
            parse_clock(value)

    def test_parse_clock_requires_value(self):
        with pytest.raises(RequiredFieldError):
            parse_clock("")

    def test_format_clock_pads(self):
        assert format_clock(0) == "00:00"
        assert format_clock(605) == "10:05"

    def test_minutes_to_time_stays_on_the_day(self):
        assert minutes_to_time(1439) == time(23, 59)
        with pytest.raises(ValidationError):
            minutes_to_time(1440)


class TestSlotIndex:
    """Test SlotIndex construction from jobs."""

    def test_from_jobs_skips_untimed_cancelled_and_excluded(self, make_job):
        kept = make_job(scheduled_time=time(13, 0), duration_minutes=90)
        untimed = make_job(scheduled_time=None)
        cancelled = make_job(scheduled_time=time(8, 0), status=JobStatus.CANCELLED)
        excluded = make_job(scheduled_time=time(7, 0))
        earlier = make_job(scheduled_time=time(10, 0))

        index = SlotIndex.from_jobs(
            [kept, untimed, cancelled, excluded, earlier], exclude_job_id=excluded.id
        )

        assert [(slot.start, slot.end) for slot in index] == [(600, 660), (780, 870)]
        assert index.slots[1].job_id == kept.id

    def test_booked_slot_defaults_to_one_hour(self):
        slot = BookedSlot.from_start("09:30")

        assert (slot.start, slot.end) == (570, 630)


class TestConflictDetector:
    """Test half-open overlap detection."""

    @pytest.fixture
    def detector(self):
        return ConflictDetector(SlotIndex([BookedSlot(600, 660)]))

    def test_touching_intervals_do_not_conflict(self, detector):
        assert detector.has_conflict(540, 60) is False
        assert detector.has_conflict(660, 30) is False

    def test_overlap_is_reported(self, detector):
        assert detector.has_conflict(630, 60) is True
        assert detector.conflicts(590, 15) == [BookedSlot(600, 660)]


class TestPlanShift:
    """Test the auto-shift planner."""

    def test_conflict_pushes_past_existing_job(self):
        """Existing 09:30-10:30, desired 09:00 for an hour."""
        result = plan_shift("09:00", 60, [BookedSlot.from_start("09:30", 60)])

        assert result.shifted is True
        assert result.new_start == "10:30"
        assert result.note == "Scheduling conflict detected, job auto-shifted to 10:30."
        assert result.exceeds_working_hours is False

    def test_no_overlap_keeps_desired_start(self):
        """Existing 10:00-11:00, desired 09:00 for thirty minutes."""
        result = plan_shift("09:00", 30, [BookedSlot.from_start("10:00", 60)])

        assert result.shifted is False
        assert result.new_start == "09:00"
        assert result.note == ""

    def test_shift_rounds_up_to_five_minutes(self):
        result = plan_shift("09:30", 30, [BookedSlot.from_start("09:00", 67)])

        assert result.new_start == "10:10"

    def test_shift_skips_back_to_back_jobs(self):
        slots = [BookedSlot.from_start("09:00", 60), BookedSlot.from_start("10:00", 60)]

        result = plan_shift("09:30", 60, slots)

        assert result.new_start == "11:00"

    def test_shift_uses_first_gap_that_fits(self):
        slots = [BookedSlot.from_start("09:00", 60), BookedSlot.from_start("11:00", 60)]

        result = plan_shift("09:15", 60, slots)

        assert result.new_start == "10:00"

    def test_gap_too_small_is_skipped(self):
        slots = [BookedSlot.from_start("09:00", 60), BookedSlot.from_start("10:30", 60)]

        result = plan_shift("09:15", 60, slots)

        assert result.new_start == "11:30"

    def test_overrun_past_end_of_day_is_flagged(self):
        result = plan_shift("20:30", 60, [BookedSlot.from_start("20:00", 60)])

        assert result.shifted is True
        assert result.new_start == "21:00"
        assert result.exceeds_working_hours is True
        assert result.note == OVERRUN_NOTE

    def test_custom_end_of_day(self):
        result = plan_shift(
            "16:30", 60, [BookedSlot.from_start("16:00", 60)], end_of_day_minutes=17 * 60
        )

        assert result.exceeds_working_hours is True

    def test_missing_duration_is_rejected(self):
        with pytest.raises(RequiredFieldError):
            plan_shift("09:00", None, [])

    @pytest.mark.parametrize("duration", [0, -15])
    def test_non_positive_duration_is_rejected(self, duration):
        with pytest.raises(InvalidFormatError):
            plan_shift("09:00", duration, [])

    def test_rounding_must_be_positive(self):
        with pytest.raises(ValueError):
            AutoShiftPlanner(rounding_minutes=0)

    def test_to_dict(self):
        result = plan_shift("09:00", 30, [])

        assert result.to_dict() == {
            "shifted": False,
            "new_start": "09:00",
            "note": "",
            "exceeds_working_hours": False,
        }


class TestPlannerProperties:
    """Seeded random checks of the planner's guarantees."""

    ITERATIONS = 300

    def _random_day(self, rng: random.Random):
        slots = []
        for _ in range(rng.randint(0, 8)):
            start = rng.randrange(6 * 60, 20 * 60)
            slots.append(BookedSlot(start, start + rng.randint(5, 180)))
        return SlotIndex(slots)

    @pytest.mark.parametrize("seed", [7, 42, 1234])
    def test_result_never_overlaps_and_replanning_is_stable(self, seed):
        rng = random.Random(seed)
        planner = AutoShiftPlanner()

        for _ in range(self.ITERATIONS):
            index = self._random_day(rng)
            desired = rng.randrange(0, 22 * 60)
            duration = rng.randint(1, 240)

            result = planner.plan(desired, duration, index)

            # never earlier than requested
            assert result.new_start_minutes >= desired
            # never overlaps a booked slot
            assert not ConflictDetector(index).has_conflict(
                result.new_start_minutes, duration
            )
            # planning again from the result changes nothing
            again = planner.plan(result.new_start_minutes, duration, index)
            assert again.shifted is False
            assert again.new_start_minutes == result.new_start_minutes

    @pytest.mark.parametrize("seed", [3, 99])
    def test_shifted_starts_land_on_rounding_boundary(self, seed):
        rng = random.Random(seed)
        planner = AutoShiftPlanner(rounding_minutes=15)

        for _ in range(self.ITERATIONS):
            index = self._random_day(rng)
            result = planner.plan(rng.randrange(6 * 60, 20 * 60), rng.randint(1, 120), index)

            if result.shifted:
                assert result.new_start_minutes % 15 == 0
