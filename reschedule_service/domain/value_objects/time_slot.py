"""
Time slot value objects.

Alternative-time proposals and route optimizations use two distinct slot
domains; they are kept as separate enumerations so one can never be stored
where the other is expected.
"""

from datetime import time
from enum import Enum


class AlternativeTimeSlot(str, Enum):
    """Three-window slot offered in alternative-time proposals."""

    EARLY_MORNING = "7am-10am"
    MIDDAY = "10am-2pm"
    AFTERNOON = "2pm-5pm"

    @property
    def display_name(self) -> str:
        """Get human-readable label."""
        return {
            self.EARLY_MORNING: "7:00 AM – 10:00 AM",
            self.MIDDAY: "10:00 AM – 2:00 PM",
            self.AFTERNOON: "2:00 PM – 5:00 PM",
        }[self]

    @property
    def start_time(self) -> time:
        """Wall-clock time a job is booked at when this slot is accepted."""
        return {
            self.EARLY_MORNING: time(7, 0),
            self.MIDDAY: time(10, 0),
            self.AFTERNOON: time(14, 0),
        }[self]


class RouteTimeSlot(str, Enum):
    """Half-day slot used by route optimization suggestions."""

    MORNING = "morning"
    AFTERNOON = "afternoon"

    @property
    def display_name(self) -> str:
        """Get human-readable label."""
        return {
            self.MORNING: "Morning (7am–12pm)",
            self.AFTERNOON: "Afternoon (12pm–5pm)",
        }[self]

    @property
    def start_time(self) -> time:
        """Wall-clock time a job is booked at when moved into this slot."""
        return {self.MORNING: time(8, 0), self.AFTERNOON: time(13, 0)}[self]
