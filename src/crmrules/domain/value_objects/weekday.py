"""Weekday numbering used by office calendars."""

from datetime import date
from enum import IntEnum


class Weekday(IntEnum):
    """Day of week, 0=Sunday..6=Saturday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Weekday of a calendar date (date.weekday() counts from Monday)."""
        return cls((day.weekday() + 1) % 7)
