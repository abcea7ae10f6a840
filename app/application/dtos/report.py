"""DTOs for report use cases."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DateRange:
    """Resolved reporting window (UTC, inclusive start, exclusive end)."""

    period: str
    start: datetime
    end: datetime

    def as_params(self) -> dict[str, str]:
        return {
            "period": self.period,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }

