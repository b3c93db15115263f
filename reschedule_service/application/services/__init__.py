"""
Application services package.
"""

from .keyed_lock import KeyedLock
from .notification_dispatcher import NotificationDispatcher
from .schedule_planner import (
    AutoShiftPlanner,
    BookedSlot,
    ConflictDetector,
    ShiftResult,
    SlotIndex,
    plan_shift,
)
from .schedule_queries import ScheduleQueryService

__all__ = [
    "AutoShiftPlanner",
    "BookedSlot",
    "ConflictDetector",
    "KeyedLock",
    "NotificationDispatcher",
    "ScheduleQueryService",
    "ShiftResult",
    "SlotIndex",
    "plan_shift",
]
