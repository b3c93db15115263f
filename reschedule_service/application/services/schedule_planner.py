"""
Schedule conflict detection and auto-shift planning for one contractor-day.

All times are minutes after midnight. Intervals are half-open:
[start, start + duration).
"""

from dataclasses import dataclass
from datetime import time
from typing import Iterable, List, Optional, Union
from uuid import UUID

from reschedule_service.config.logging import get_logger
from reschedule_service.domain.entities.job import Job
from reschedule_service.domain.exceptions.validation_error import (
    InvalidFormatError,
    RequiredFieldError,
    ValidationError,
)

logger = get_logger(__name__)

DEFAULT_END_OF_DAY_MINUTES = 1260
DEFAULT_DURATION_MINUTES = 60
DEFAULT_ROUNDING_MINUTES = 5
MINUTES_PER_DAY = 24 * 60

OVERRUN_NOTE = "Job shifted but may extend past working hours."


def parse_clock(value: Union[str, time, int]) -> int:
    """Convert "HH:MM", a time or a minute count to minutes after midnight."""
    if isinstance(value, bool):
        raise InvalidFormatError("time", "HH:MM")
    if isinstance(value, int):
        if value < 0:
            raise InvalidFormatError("time", "non-negative minutes")
        return value
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not value:
        raise RequiredFieldError("time")

    parts = str(value).strip().split(":")
    if len(parts) > 2:
        raise InvalidFormatError("time", "HH:MM")
    try:
        hours = int(parts[0])
        minutes = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        raise InvalidFormatError("time", "HH:MM")

    if not 0 <= hours < 24 or not 0 <= minutes < 60:
        raise InvalidFormatError("time", "HH:MM")
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    """Format minutes after midnight as "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_to_time(minutes: int) -> time:
    """Convert minutes after midnight to a wall-clock time."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValidationError(
            f"Start {format_clock(minutes)} does not fall on the scheduled day"
        )
    return time(minutes // 60, minutes % 60)


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval overlap test."""
    return start_a < end_b and end_a > start_b


@dataclass(frozen=True)
class BookedSlot:
    """A committed interval on a contractor's day."""

    start: int
    end: int
    job_id: Optional[UUID] = None

    @classmethod
    def from_start(
        cls,
        start: Union[str, time, int],
        duration_minutes: Optional[int] = None,
        job_id: Optional[UUID] = None,
    ) -> "BookedSlot":
        """Build a slot from its start; duration falls back to one hour."""
        start_minutes = parse_clock(start)
        duration = duration_minutes or DEFAULT_DURATION_MINUTES
        return cls(start=start_minutes, end=start_minutes + duration, job_id=job_id)


class SlotIndex:
    """Booked intervals of one contractor-day, sorted by start."""

    def __init__(self, slots: Iterable[BookedSlot] = ()):
        self._slots: List[BookedSlot] = sorted(slots, key=lambda s: (s.start, s.end))

    @classmethod
    def from_jobs(
        cls,
        jobs: Iterable[Job],
        exclude_job_id: Optional[UUID] = None,
        default_duration: int = DEFAULT_DURATION_MINUTES,
    ) -> "SlotIndex":
        """Index the jobs that hold a wall-clock time and still occupy the day."""
        slots = []
        for job in jobs:
            if exclude_job_id is not None and job.id == exclude_job_id:
                continue
            if job.scheduled_time is None or not job.status.occupies_schedule():
                continue
            slots.append(
                BookedSlot.from_start(
                    job.scheduled_time,
                    job.duration_minutes or default_duration,
                    job_id=job.id,
                )
            )
        return cls(slots)

    @property
    def slots(self) -> List[BookedSlot]:
        return list(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self):
        return iter(self._slots)


class ConflictDetector:
    """Reports which booked slots a desired interval would overlap."""

    def __init__(self, index: SlotIndex):
        self.index = index

    def conflicts(self, start: int, duration: int) -> List[BookedSlot]:
        end = start + duration
        return [
            slot
            for slot in self.index
            if intervals_overlap(start, end, slot.start, slot.end)
        ]

    def has_conflict(self, start: int, duration: int) -> bool:
        return bool(self.conflicts(start, duration))


@dataclass(frozen=True)
class ShiftResult:
    """Outcome of a planning run."""

    shifted: bool
    new_start_minutes: int
    note: str = ""
    exceeds_working_hours: bool = False

    @property
    def new_start(self) -> str:
        return format_clock(self.new_start_minutes)

    @property
    def new_start_time(self) -> time:
        return minutes_to_time(self.new_start_minutes)

    def to_dict(self) -> dict:
        return {
            "shifted": self.shifted,
            "new_start": self.new_start,
            "note": self.note,
            "exceeds_working_hours": self.exceeds_working_hours,
        }


class AutoShiftPlanner:
    """Finds the earliest non-overlapping start at or after the desired one."""

    def __init__(
        self,
        end_of_day_minutes: int = DEFAULT_END_OF_DAY_MINUTES,
        rounding_minutes: int = DEFAULT_ROUNDING_MINUTES,
    ):
        if rounding_minutes <= 0:
            raise ValueError("Rounding must be a positive number of minutes")
        self.end_of_day_minutes = end_of_day_minutes
        self.rounding_minutes = rounding_minutes

    def _round_up(self, minutes: int) -> int:
        step = self.rounding_minutes
        return -(-minutes // step) * step

    def plan(self, desired_start: int, duration: int, index: SlotIndex) -> ShiftResult:
        """
        Plan a start for an interval of ``duration`` minutes.

        Every time the candidate is pushed past a booked slot it lands on the
        next rounding boundary, so the returned start never overlaps a slot
        and planning again from it reports no shift.
        """
        if duration is None:
            raise RequiredFieldError("duration_minutes")
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise InvalidFormatError("duration_minutes", "positive integer")
        if desired_start < 0:
            raise InvalidFormatError("desired_start", "non-negative minutes")

        if not ConflictDetector(index).has_conflict(desired_start, duration):
            return ShiftResult(shifted=False, new_start_minutes=desired_start)

        candidate = desired_start
        for slot in index:
            if candidate + duration <= slot.start:
                break
            if candidate < slot.end:
                candidate = self._round_up(slot.end)

        if candidate + duration > self.end_of_day_minutes:
            logger.debug(
                "Shift runs past end of day",
                desired_start=desired_start,
                new_start=candidate,
                end_of_day=self.end_of_day_minutes,
            )
            return ShiftResult(
                shifted=True,
                new_start_minutes=candidate,
                note=OVERRUN_NOTE,
                exceeds_working_hours=True,
            )

        return ShiftResult(
            shifted=True,
            new_start_minutes=candidate,
            note=(
                "Scheduling conflict detected, job auto-shifted to "
                f"{format_clock(candidate)}."
            ),
        )


def plan_shift(
    desired_start: Union[str, time, int],
    duration_minutes: Optional[int],
    existing_slots: Iterable[BookedSlot],
    end_of_day_minutes: int = DEFAULT_END_OF_DAY_MINUTES,
    rounding_minutes: int = DEFAULT_ROUNDING_MINUTES,
) -> ShiftResult:
    """Pure entry point: plan against an ad hoc set of booked slots."""
    planner = AutoShiftPlanner(end_of_day_minutes, rounding_minutes)
    return planner.plan(parse_clock(desired_start), duration_minutes, SlotIndex(existing_slots))
