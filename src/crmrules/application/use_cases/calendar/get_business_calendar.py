"""Get business calendar use case."""

from datetime import date

from crmrules.application.dto.calendar_dto import BusinessCalendarOutput
from crmrules.domain.exceptions import ConfigurationError, ValidationError
from crmrules.domain.services import BusinessDeadlineCalculator

MAX_RANGE_DAYS = 366


class GetBusinessCalendarUseCase:
    """Day-by-day business calendar of an office."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, office_id: str, start: date, end: date) -> BusinessCalendarOutput:
        """Build calendar for [start, end]. Range is limited to a year."""
        if end < start:
            raise ValidationError("end must not be before start")
        if (end - start).days >= MAX_RANGE_DAYS:
            raise ValidationError(f"Range cannot exceed {MAX_RANGE_DAYS} days")

        async with self._uow_factory() as uow:
            office = await uow.offices.get_by_id(office_id)
        if not office:
            raise ConfigurationError(f"Unknown office: {office_id}")

        calculator = BusinessDeadlineCalculator([office])
        days = calculator.generate_business_calendar(office_id, start, end)
        return BusinessCalendarOutput(
            office_id=office.id,
            timezone=office.timezone,
            days=days,
            holidays=calculator.get_upcoming_holidays(office_id, start, end),
            business_day_count=sum(1 for d in days if d.is_business_day),
            working_hours=calculator.calculate_working_hours(start, end, office_id),
        )
