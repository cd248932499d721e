from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import CalendarSettings
from ..core.enums import ShiftStatus
from ..payroll.rates import rate_label


@dataclass(frozen=True)
class ShiftRecord:
    """Domain entity: one shift as handed over by the persistence layer.

    Paid and premium minutes are not stored here; they are always derived by
    a payroll calculator so the record stays the single source of truth.
    """

    scheduled_start: datetime
    scheduled_end: datetime
    actual_start: Optional[datetime] = None
    actual_end: Optional[datetime] = None
    break_minutes: int = 0
    rate_multiplier: float = 1.0
    rate_label: Optional[str] = None
    status: ShiftStatus = ShiftStatus.SCHEDULED
    shift_id: Optional[int] = None
    is_additional_shift: bool = False
    deleted_at: Optional[datetime] = None

    @property
    def has_actual_times(self) -> bool:
        return self.actual_start is not None and self.actual_end is not None

    @property
    def effective_start(self) -> datetime:
        return self.actual_start if self.has_actual_times else self.scheduled_start

    @property
    def effective_end(self) -> datetime:
        return self.actual_end if self.has_actual_times else self.scheduled_end

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_completed(self) -> bool:
        return self.status == ShiftStatus.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self.status == ShiftStatus.CANCELLED

    @property
    def has_premium_pay(self) -> bool:
        return math.isfinite(self.rate_multiplier) and self.rate_multiplier > 1.0

    @property
    def display_rate_label(self) -> str:
        """Caller override, else the table label or the formatted multiplier."""
        return self.rate_label or rate_label(self.rate_multiplier)

    @property
    def instants(self) -> tuple[datetime, ...]:
        values = (self.scheduled_start, self.scheduled_end, self.actual_start, self.actual_end, self.deleted_at)
        return tuple(v for v in values if v is not None)

    def in_calendar(self, calendar: CalendarSettings) -> "ShiftRecord":
        """Copy with naive instants read as wall-clock times in ``calendar``'s zone."""
        if calendar.timezone is None:
            return self
        return replace(
            self,
            scheduled_start=calendar.attach(self.scheduled_start),
            scheduled_end=calendar.attach(self.scheduled_end),
            actual_start=calendar.attach(self.actual_start),
            actual_end=calendar.attach(self.actual_end),
            deleted_at=calendar.attach(self.deleted_at),
        )
