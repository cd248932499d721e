from __future__ import annotations

from typing import Iterable, Optional

from ..periods.model import PayPeriod
from ..shifts.model import ShiftRecord
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import DailyTotal, PeriodSummary, RateBucket
from .rates import rate_label


class PeriodAggregator:
    """Reduces a set of shifts into a ``PeriodSummary``.

    ``summarize`` looks at exactly the shifts it is given. The two reporting
    modes filter first: ``summarize_actual`` keeps completed shifts only,
    ``summarize_scheduled`` keeps every active (non-cancelled, non-deleted)
    shift.
    """

    def __init__(self, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or StandardPayrollCalculator()

    @property
    def calculator(self) -> PayrollCalculator:
        return self._calculator

    def summarize(self, shifts: Iterable[ShiftRecord], base_rate_cents: Optional[int] = None) -> PeriodSummary:
        shifts = list(shifts)
        calc = self._calculator

        total = 0
        premium = 0
        additional = 0
        pay = 0
        for s in shifts:
            paid = calc.paid_minutes(s)
            total += paid
            premium += calc.premium_minutes(s)
            if s.is_additional_shift:
                additional += paid
            if base_rate_cents is not None:
                pay += calc.estimated_pay_cents(s, base_rate_cents)

        count = len(shifts)
        return PeriodSummary(
            total_paid_minutes=total,
            regular_minutes=total - premium,
            premium_minutes=premium,
            shift_count=count,
            average_shift_minutes=total / count if count else 0.0,
            estimated_pay_cents=pay if base_rate_cents is not None else None,
            additional_shift_minutes=additional,
            rate_breakdown=self.rate_breakdown(shifts, base_rate_cents),
        )

    def summarize_actual(self, shifts: Iterable[ShiftRecord], base_rate_cents: Optional[int] = None) -> PeriodSummary:
        return self.summarize(
            [s for s in shifts if s.is_completed and not s.is_deleted],
            base_rate_cents,
        )

    def summarize_scheduled(self, shifts: Iterable[ShiftRecord], base_rate_cents: Optional[int] = None) -> PeriodSummary:
        return self.summarize(
            [s for s in shifts if not s.is_cancelled and not s.is_deleted],
            base_rate_cents,
        )

    def rate_breakdown(
        self,
        shifts: Iterable[ShiftRecord],
        base_rate_cents: Optional[int] = None,
    ) -> tuple[RateBucket, ...]:
        minutes_by_rate: dict[float, int] = {}
        pay_by_rate: dict[float, int] = {}
        for s in shifts:
            m = s.rate_multiplier
            minutes_by_rate[m] = minutes_by_rate.get(m, 0) + self._calculator.paid_minutes(s)
            if base_rate_cents is not None:
                pay_by_rate[m] = pay_by_rate.get(m, 0) + self._calculator.estimated_pay_cents(s, base_rate_cents)

        return tuple(
            RateBucket(
                label=rate_label(m),
                multiplier=m,
                minutes=minutes_by_rate[m],
                pay_cents=pay_by_rate.get(m) if base_rate_cents is not None else None,
            )
            for m in sorted(minutes_by_rate)
        )

    @staticmethod
    def compared_to_previous(current: PeriodSummary, previous: PeriodSummary) -> float:
        """Relative change in total hours; 0.0 when the previous total is 0."""
        if previous.total_paid_minutes == 0:
            return 0.0
        return (current.total_hours - previous.total_hours) / previous.total_hours

    def daily_totals(self, shifts: Iterable[ShiftRecord], period: PayPeriod, calendar=None) -> tuple[DailyTotal, ...]:
        """Paid minutes per day of ``period``, keyed by scheduled start day.

        Every day of the period is present, with 0 when nothing was worked.
        """
        days = period.days()
        by_day = {d: 0 for d in days}
        for s in shifts:
            start = calendar.to_local(s.scheduled_start) if calendar else s.scheduled_start
            key = start.date()
            if key in by_day:
                by_day[key] += self._calculator.paid_minutes(s)
        return tuple(DailyTotal(day=d, minutes=by_day[d]) for d in days)
