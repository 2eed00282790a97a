"""Deadline computation DTOs."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DeadlineComputationRequest:
    """Input for computing a deadline at an office."""

    submitted_at: datetime
    required_business_hours: float
    office_id: str


@dataclass(frozen=True)
class DeadlineComputationResult:
    """Computed deadline and the escalation applied to it."""

    office_id: str
    business_days: int
    original_deadline: datetime
    adjusted_deadline: datetime
    was_adjusted: bool
    reason: str | None
    extension_days: int
    cap_exceeded: bool = False
    fallback_office_id: str | None = None
