"""Business-day arithmetic over office calendars.

Every decision about a date is made in the office's local time. Aware
datetimes are converted into the office zone; naive ones are read as office
wall-clock time. Returned datetimes are aware, in the office zone, and keep
the wall-clock time of day of their input.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from crmrules.domain.entities import BusinessDay, Holiday, OfficeCalendarProfile
from crmrules.domain.exceptions import ConfigurationError, ValidationError
from crmrules.domain.value_objects import (
    CalendarDay,
    DeadlineAdjustment,
    HolidayOccurrence,
    TimeWindow,
    Weekday,
)

logger = logging.getLogger(__name__)

# Longest run of non-business days tolerated before the calendar is considered broken.
MAX_GAP_DAYS = 366


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


class BusinessDeadlineCalculator:
    """Deadline and business-day calculations for a snapshot of offices."""

    def __init__(self, offices: Iterable[OfficeCalendarProfile]) -> None:
        self._offices = {o.id: o for o in offices}

    def get_office(self, office_id: str) -> OfficeCalendarProfile:
        """Office by id; unknown ids are a configuration error."""
        office = self._offices.get(office_id)
        if office is None:
            raise ConfigurationError(f"Unknown office: {office_id}")
        return office

    @staticmethod
    def zone(office: OfficeCalendarProfile) -> ZoneInfo:
        try:
            return ZoneInfo(office.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(
                f"Office {office.id} has invalid timezone {office.timezone!r}"
            ) from e

    def to_local(self, moment: datetime, office: OfficeCalendarProfile) -> datetime:
        """Moment expressed in the office's timezone."""
        zone = self.zone(office)
        if moment.tzinfo is None:
            return moment.replace(tzinfo=zone)
        return moment.astimezone(zone)

    def _local_date(self, day: date, office: OfficeCalendarProfile) -> date:
        if isinstance(day, datetime):
            return self.to_local(day, office).date()
        return day

    def _at(self, day: date, local: datetime) -> datetime:
        """Same wall-clock time as local, on another day."""
        return datetime.combine(day, local.time(), tzinfo=local.tzinfo)

    def _entry(self, day: date, office: OfficeCalendarProfile) -> BusinessDay:
        weekday = Weekday.of(day)
        entry = office.business_hours.get(weekday)
        if entry is None:
            raise ConfigurationError(
                f"Office {office.id} has no business hours for {weekday.name.title()}"
            )
        return entry

    # --- Day classification ---

    def find_holiday(self, day: date, office: OfficeCalendarProfile) -> Holiday | None:
        day = self._local_date(day, office)
        return next((h for h in office.holidays if h.matches(day)), None)

    def is_holiday(self, day: date, office: OfficeCalendarProfile) -> bool:
        """True if any of the office's holidays falls on day."""
        return self.find_holiday(day, office) is not None

    def is_business_day(self, day: date, office: OfficeCalendarProfile) -> bool:
        """Working weekday per the weekly template and not a holiday."""
        day = self._local_date(day, office)
        return self._entry(day, office).is_working_day and not self.is_holiday(day, office)

    def get_business_hours_for_date(
        self, day: date, office: OfficeCalendarProfile
    ) -> TimeWindow | None:
        """Configured window for day, or None when it is not a business day."""
        day = self._local_date(day, office)
        if not self.is_business_day(day, office):
            return None
        return self._entry(day, office).window

    # --- Walking the calendar ---

    def _walk(self, local: datetime, count: int, step: int, office: OfficeCalendarProfile) -> datetime:
        if not office.working_weekdays:
            raise ConfigurationError(f"Office {office.id} has no working days")
        day = local.date()
        # Each business day consumes at least one calendar day.
        limit = date.max if step > 0 else date.min
        if count > abs((limit - day).days):
            raise ValidationError(
                f"Deadline beyond supported calendar range: {count} business days from {day}"
            )
        counted = 0
        gap = 0
        while counted < count:
            try:
                day += timedelta(days=step)
            except OverflowError as e:
                raise ValidationError(
                    f"Deadline beyond supported calendar range: {count} business days from "
                    f"{local.date()}"
                ) from e
            if self.is_business_day(day, office):
                counted += 1
                gap = 0
                continue
            gap += 1
            if gap > MAX_GAP_DAYS:
                raise ConfigurationError(
                    f"Office {office.id} has no business day within {MAX_GAP_DAYS} days of {day}"
                )
        return self._at(day, local)

    def add_business_days(
        self, start: datetime, business_day_count: int, office_id: str
    ) -> datetime:
        """Advance by whole business days, keeping the time of day."""
        if business_day_count < 0:
            raise ValidationError("business_day_count cannot be negative")
        office = self.get_office(office_id)
        local = self.to_local(start, office)
        if business_day_count == 0:
            return local
        return self._walk(local, business_day_count, 1, office)

    def subtract_business_days(
        self, start: datetime, business_day_count: int, office_id: str
    ) -> datetime:
        """Move back by whole business days, keeping the time of day."""
        if business_day_count < 0:
            raise ValidationError("business_day_count cannot be negative")
        office = self.get_office(office_id)
        local = self.to_local(start, office)
        if business_day_count == 0:
            return local
        return self._walk(local, business_day_count, -1, office)

    def get_next_business_day(self, moment: datetime, office_id: str) -> datetime:
        """First business day strictly after moment's date."""
        return self.add_business_days(moment, 1, office_id)

    def get_previous_business_day(self, moment: datetime, office_id: str) -> datetime:
        """Last business day strictly before moment's date."""
        return self.subtract_business_days(moment, 1, office_id)

    # --- Escalation ---

    def adjust_deadline_for_business_rules(
        self, candidate: datetime, office_id: str
    ) -> DeadlineAdjustment:
        """Move a deadline off a weekend or holiday, within max_extension_days."""
        office = self.get_office(office_id)
        local = self.to_local(candidate, office)
        day = local.date()
        if self.is_business_day(day, office):
            return DeadlineAdjustment(
                original_deadline=local, adjusted_deadline=local, was_adjusted=False
            )

        rules = office.escalation_rules
        is_weekend = not self._entry(day, office).is_working_day
        is_holiday = self.is_holiday(day, office)
        if (is_weekend and not rules.extend_deadlines_on_weekends) or (
            is_holiday and not rules.extend_deadlines_on_holidays
        ):
            logger.debug("Office %s opts out of extending deadline on %s", office.id, day)
            return DeadlineAdjustment(
                original_deadline=local, adjusted_deadline=local, was_adjusted=False
            )

        cause = " and ".join(
            c for c, applies in (("weekend", is_weekend), ("holiday", is_holiday)) if applies
        )
        if (date.max - day).days < rules.max_extension_days:
            raise ValidationError(f"Deadline beyond supported calendar range: {day}")
        for offset in range(1, rules.max_extension_days + 1):
            next_day = day + timedelta(days=offset)
            if self.is_business_day(next_day, office):
                return DeadlineAdjustment(
                    original_deadline=local,
                    adjusted_deadline=self._at(next_day, local),
                    was_adjusted=True,
                    reason=f"Extended due to {cause}",
                    extension_days=offset,
                )

        cap = rules.max_extension_days
        logger.warning(
            "Office %s: no business day within %s of %s; deadline capped",
            office.id,
            _plural(cap, "day"),
            day,
        )
        if cap == 0:
            reason = f"Not extended due to {cause}: maximum extension is 0 days"
        else:
            reason = f"Extended due to {cause}, capped at {_plural(cap, 'day')}"
        return DeadlineAdjustment(
            original_deadline=local,
            adjusted_deadline=self._at(day + timedelta(days=cap), local),
            was_adjusted=cap > 0,
            reason=reason,
            extension_days=cap,
            cap_exceeded=True,
        )

    def find_fallback_office(
        self, office_id: str, day: date
    ) -> OfficeCalendarProfile | None:
        """First fallback office, in configured order, open on day."""
        office = self.get_office(office_id)
        for fallback_id in office.escalation_rules.fallback_offices:
            fallback = self._offices.get(fallback_id)
            if fallback is None:
                logger.warning("Office %s lists unknown fallback office %s", office.id, fallback_id)
                continue
            if self.is_business_day(day, fallback):
                return fallback
        return None

    # --- Ranges ---

    def _date_range(self, start: date, end: date, office: OfficeCalendarProfile) -> list[date]:
        first = self._local_date(start, office)
        last = self._local_date(end, office)
        return [first + timedelta(days=i) for i in range((last - first).days + 1)]

    def calculate_business_days(self, start: date, end: date, office_id: str) -> int:
        """Business days between start and end, both inclusive."""
        office = self.get_office(office_id)
        return sum(1 for d in self._date_range(start, end, office) if self.is_business_day(d, office))

    def calculate_working_hours(self, start: date, end: date, office_id: str) -> float:
        """Working hours (lunch breaks excluded) over business days in range."""
        office = self.get_office(office_id)
        return sum(
            self._entry(d, office).working_hours
            for d in self._date_range(start, end, office)
            if self.is_business_day(d, office)
        )

    def is_within_business_hours(self, moment: datetime, office_id: str) -> bool:
        """True if moment falls inside the office's working window (lunch excluded)."""
        office = self.get_office(office_id)
        local = self.to_local(moment, office)
        if not self.is_business_day(local.date(), office):
            return False
        entry = self._entry(local.date(), office)
        now = local.time()
        if entry.lunch_break and entry.lunch_break.contains(now):
            return False
        return entry.window.contains(now)

    def get_upcoming_holidays(
        self, office_id: str, start: date, end: date
    ) -> list[HolidayOccurrence]:
        """Holiday occurrences within [start, end], recurring ones expanded per year."""
        office = self.get_office(office_id)
        first = self._local_date(start, office)
        last = self._local_date(end, office)
        occurrences: list[HolidayOccurrence] = []
        for holiday in office.holidays:
            if holiday.is_recurring:
                candidates = []
                for year in range(first.year, last.year + 1):
                    try:
                        candidates.append(holiday.date.replace(year=year))
                    except ValueError:
                        # Feb 29 in a non-leap year
                        continue
            else:
                candidates = [holiday.date]
            occurrences.extend(
                HolidayOccurrence(
                    holiday_id=holiday.id,
                    name=holiday.name,
                    date=d,
                    is_recurring=holiday.is_recurring,
                )
                for d in candidates
                if first <= d <= last
            )
        occurrences.sort(key=lambda o: (o.date, o.name))
        return occurrences

    def generate_business_calendar(
        self, office_id: str, start: date, end: date
    ) -> list[CalendarDay]:
        """Day-by-day view of the office calendar over [start, end]."""
        office = self.get_office(office_id)
        calendar = []
        for day in self._date_range(start, end, office):
            holiday = self.find_holiday(day, office)
            calendar.append(
                CalendarDay(
                    date=day,
                    weekday=Weekday.of(day),
                    is_business_day=self.is_business_day(day, office),
                    is_holiday=holiday is not None,
                    holiday_name=holiday.name if holiday else None,
                    business_hours=self.get_business_hours_for_date(day, office),
                )
            )
        return calendar
