"""Dated views of an office calendar."""

from dataclasses import dataclass
from datetime import date

from crmrules.domain.value_objects.time_window import TimeWindow
from crmrules.domain.value_objects.weekday import Weekday


@dataclass(frozen=True)
class CalendarDay:
    """One day of an office's business calendar."""

    date: date
    weekday: Weekday
    is_business_day: bool
    is_holiday: bool
    holiday_name: str | None = None
    business_hours: TimeWindow | None = None


@dataclass(frozen=True)
class HolidayOccurrence:
    """A holiday pinned to a concrete date (recurring holidays expanded per year)."""

    holiday_id: str
    name: str
    date: date
    is_recurring: bool
