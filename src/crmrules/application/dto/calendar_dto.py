"""Business calendar DTO."""

from dataclasses import dataclass

from crmrules.domain.value_objects import CalendarDay, HolidayOccurrence


@dataclass
class BusinessCalendarOutput:
    """Calendar of one office over a date range."""

    office_id: str
    timezone: str
    days: list[CalendarDay]
    holidays: list[HolidayOccurrence]
    business_day_count: int
    working_hours: float
