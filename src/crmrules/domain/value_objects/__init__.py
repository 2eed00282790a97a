"""Domain value objects."""

from crmrules.domain.value_objects.calendar_day import CalendarDay, HolidayOccurrence
from crmrules.domain.value_objects.deadline_adjustment import DeadlineAdjustment
from crmrules.domain.value_objects.risk_level import RiskLevel
from crmrules.domain.value_objects.time_window import TimeWindow, parse_hhmm
from crmrules.domain.value_objects.weekday import Weekday

__all__ = [
    "CalendarDay",
    "DeadlineAdjustment",
    "HolidayOccurrence",
    "RiskLevel",
    "TimeWindow",
    "Weekday",
    "parse_hhmm",
]
