"""Compute deadline use case."""

import logging
import math

from crmrules.application.dto.deadline_dto import (
    DeadlineComputationRequest,
    DeadlineComputationResult,
)
from crmrules.domain.exceptions import ValidationError
from crmrules.domain.services import BusinessDeadlineCalculator

logger = logging.getLogger(__name__)


class ComputeDeadlineUseCase:
    """Turn a business-hour duration into an office deadline.

    The duration is rounded up to whole business days of
    ``hours_per_business_day`` hours, walked forward on the office calendar,
    then adjusted by the office's escalation rules.
    """

    def __init__(self, unit_of_work_factory: type, hours_per_business_day: float = 8) -> None:
        if hours_per_business_day <= 0:
            raise ValueError("hours_per_business_day must be positive")
        self._uow_factory = unit_of_work_factory
        self._hours_per_day = hours_per_business_day

    async def execute(self, request: DeadlineComputationRequest) -> DeadlineComputationResult:
        if not math.isfinite(request.required_business_hours):
            raise ValidationError("required_business_hours must be a finite number")
        if request.required_business_hours < 0:
            raise ValidationError("required_business_hours cannot be negative")

        async with self._uow_factory() as uow:
            offices = await uow.offices.list_all()

        calculator = BusinessDeadlineCalculator(offices)
        business_days = math.ceil(request.required_business_hours / self._hours_per_day)
        candidate = calculator.add_business_days(
            request.submitted_at, business_days, request.office_id
        )
        adjustment = calculator.adjust_deadline_for_business_rules(candidate, request.office_id)

        fallback_id = None
        if adjustment.cap_exceeded:
            fallback = calculator.find_fallback_office(
                request.office_id, adjustment.adjusted_deadline
            )
            fallback_id = fallback.id if fallback else None
            logger.warning(
                "Deadline for office %s capped at %s; fallback office: %s",
                request.office_id,
                adjustment.adjusted_deadline.isoformat(),
                fallback_id,
            )

        return DeadlineComputationResult(
            office_id=request.office_id,
            business_days=business_days,
            original_deadline=adjustment.original_deadline,
            adjusted_deadline=adjustment.adjusted_deadline,
            was_adjusted=adjustment.was_adjusted,
            reason=adjustment.reason,
            extension_days=adjustment.extension_days,
            cap_exceeded=adjustment.cap_exceeded,
            fallback_office_id=fallback_id,
        )
