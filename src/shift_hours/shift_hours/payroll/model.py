from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import MINUTES_PER_HOUR


@dataclass(frozen=True)
class RateBucket:
    """Paid minutes sharing one rate multiplier."""

    label: str
    multiplier: float
    minutes: int
    pay_cents: Optional[int] = None

    @property
    def hours(self) -> float:
        return self.minutes / MINUTES_PER_HOUR


@dataclass(frozen=True)
class DailyTotal:
    day: date
    minutes: int

    @property
    def hours(self) -> float:
        return self.minutes / MINUTES_PER_HOUR


@dataclass(frozen=True)
class PeriodSummary:
    total_paid_minutes: int = 0
    regular_minutes: int = 0
    premium_minutes: int = 0
    shift_count: int = 0
    average_shift_minutes: float = 0.0
    estimated_pay_cents: Optional[int] = None
    additional_shift_minutes: int = 0
    rate_breakdown: tuple[RateBucket, ...] = field(default_factory=tuple)

    @property
    def total_hours(self) -> float:
        return self.total_paid_minutes / MINUTES_PER_HOUR

    @property
    def regular_hours(self) -> float:
        return self.regular_minutes / MINUTES_PER_HOUR

    @property
    def premium_hours(self) -> float:
        return self.premium_minutes / MINUTES_PER_HOUR

    @property
    def average_shift_hours(self) -> float:
        return self.average_shift_minutes / MINUTES_PER_HOUR
