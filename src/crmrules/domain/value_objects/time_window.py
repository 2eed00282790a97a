"""Wall-clock time window within a day."""

import re
from dataclasses import dataclass
from datetime import time

from crmrules.domain.exceptions import ValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_hhmm(value: str) -> time:
    """Parse "HH:MM" into a time."""
    match = _HHMM.match(value or "")
    if not match:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


@dataclass(frozen=True)
class TimeWindow:
    """Start/end wall-clock times ("HH:MM"), start before end."""

    start_time: str
    end_time: str

    def __post_init__(self) -> None:
        if parse_hhmm(self.start_time) >= parse_hhmm(self.end_time):
            raise ValidationError(
                f"Window start {self.start_time} must be before end {self.end_time}"
            )

    @property
    def start(self) -> time:
        return parse_hhmm(self.start_time)

    @property
    def end(self) -> time:
        return parse_hhmm(self.end_time)

    @property
    def hours(self) -> float:
        """Length of the window in hours."""
        minutes = (self.end.hour * 60 + self.end.minute) - (
            self.start.hour * 60 + self.start.minute
        )
        return minutes / 60

    def contains(self, moment: time) -> bool:
        """True if moment is in [start, end)."""
        return self.start <= moment < self.end
