"""Office calendar profile - weekly template, holidays and escalation rules."""

from dataclasses import dataclass, field
from datetime import date

from crmrules.domain.exceptions import ValidationError
from crmrules.domain.value_objects import TimeWindow, Weekday


@dataclass(frozen=True)
class BusinessDay:
    """Weekly template entry for one weekday."""

    weekday: Weekday
    is_working_day: bool
    window: TimeWindow
    lunch_break: TimeWindow | None = None

    def __post_init__(self) -> None:
        if self.lunch_break and not (
            self.window.start <= self.lunch_break.start
            and self.lunch_break.end <= self.window.end
        ):
            raise ValidationError(f"Lunch break outside business hours on {self.weekday.name}")

    @property
    def working_hours(self) -> float:
        """Hours worked on this day, lunch break excluded."""
        if not self.is_working_day:
            return 0.0
        hours = self.window.hours
        if self.lunch_break:
            hours -= self.lunch_break.hours
        return hours


@dataclass(frozen=True)
class Holiday:
    """Office holiday; recurring holidays repeat on the same month/day every year."""

    id: str
    name: str
    date: date
    is_recurring: bool = False

    def matches(self, day: date) -> bool:
        if self.is_recurring:
            return (self.date.month, self.date.day) == (day.month, day.day)
        return self.date == day


@dataclass(frozen=True)
class EscalationRules:
    """How deadlines landing on non-business days are extended."""

    extend_deadlines_on_weekends: bool = True
    extend_deadlines_on_holidays: bool = True
    max_extension_days: int = 3
    fallback_offices: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.max_extension_days < 0:
            raise ValidationError("max_extension_days cannot be negative")


@dataclass
class OfficeCalendarProfile:
    """One business location and its calendar."""

    id: str
    name: str
    timezone: str
    business_hours: dict[Weekday, BusinessDay]
    holidays: tuple[Holiday, ...] = ()
    escalation_rules: EscalationRules = field(default_factory=EscalationRules)

    def __post_init__(self) -> None:
        if not self.timezone:
            raise ValidationError(f"Office {self.id} has no timezone")
        self.business_hours = {Weekday(k): v for k, v in self.business_hours.items()}
        self.holidays = tuple(self.holidays)

    @property
    def working_weekdays(self) -> list[Weekday]:
        return sorted(wd for wd, bd in self.business_hours.items() if bd.is_working_day)
