"""Outcome of adjusting a deadline to an office's business rules."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DeadlineAdjustment:
    """Candidate deadline and where the escalation rules moved it."""

    original_deadline: datetime
    adjusted_deadline: datetime
    was_adjusted: bool
    reason: str | None = None
    extension_days: int = 0
    cap_exceeded: bool = False
