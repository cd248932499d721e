from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..core.enums import PayPeriodType


@dataclass(frozen=True)
class PayPeriod:
    """Half-open reporting window ``[start_date, end_date)``.

    ``end_date`` is the start of the next period of the same type and
    anchor, so periods tile the timeline without gaps or overlaps.
    """

    start_date: datetime
    end_date: datetime
    period_type: PayPeriodType

    def contains(self, instant: datetime) -> bool:
        return self.start_date <= instant < self.end_date

    @property
    def duration_days(self) -> int:
        return (self.end_date.date() - self.start_date.date()).days

    def days(self) -> list[date]:
        first = self.start_date.date()
        return [first + timedelta(days=i) for i in range(self.duration_days)]

    @property
    def label(self) -> str:
        last = self.end_date.date() - timedelta(days=1)
        return f"{self.start_date:%b} {self.start_date.day} - {last:%b} {last.day}"
