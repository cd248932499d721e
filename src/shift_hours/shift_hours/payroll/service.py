from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.validators import align_shifts, validate_shifts
from ..core.constants import DEFAULT_RATE_VALID_UPPER_BOUND
from ..core.enums import PayPeriodType
from ..core.exceptions import ValidationError
from ..periods.model import PayPeriod
from ..periods.resolver import PeriodResolver
from ..shifts.model import ShiftRecord
from ..shifts.repository import ShiftRepository
from .aggregator import PeriodAggregator
from .model import DailyTotal, PeriodSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodReport:
    period: PayPeriod
    previous_period: PayPeriod
    actual: PeriodSummary
    scheduled: PeriodSummary
    previous_actual: PeriodSummary
    compared_to_previous: float
    daily_totals: tuple[DailyTotal, ...]


class PayPeriodReportService:
    """Builds pay period reports from a shift repository.

    Records are validated before they reach the engine; a malformed record
    fails the whole report with the first ``ValidationError`` found.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        *,
        resolver: Optional[PeriodResolver] = None,
        aggregator: Optional[PeriodAggregator] = None,
        period_type: PayPeriodType = PayPeriodType.WEEKLY,
        base_rate_cents: Optional[int] = None,
        rate_upper_bound: float = DEFAULT_RATE_VALID_UPPER_BOUND,
    ):
        self._shifts = shifts
        self._resolver = resolver or PeriodResolver()
        self._aggregator = aggregator or PeriodAggregator()
        self._period_type = PayPeriodType(period_type)
        self._base_rate_cents = base_rate_cents
        self._rate_upper_bound = float(rate_upper_bound)

    def _validated(self, shifts: Sequence[ShiftRecord]) -> Sequence[ShiftRecord]:
        errors = validate_shifts(shifts, rate_upper_bound=self._rate_upper_bound)
        if errors:
            index, error = errors[0]
            logger.warning("rejected %d malformed shift(s); first at index %d: %s", len(errors), index, error)
            raise error
        return shifts

    def build_period_report(
        self,
        *,
        instant: datetime,
        period_type: Optional[PayPeriodType] = None,
        reference_date: Optional[date] = None,
        base_rate_cents: Optional[int] = None,
    ) -> PeriodReport:
        period_type = PayPeriodType(period_type or self._period_type)
        base_rate = base_rate_cents if base_rate_cents is not None else self._base_rate_cents
        if base_rate is not None and base_rate < 0:
            raise ValidationError("base rate must not be negative")

        instant = self._resolver.calendar.attach(instant)
        period = self._resolver.period_containing(instant, period_type, reference_date)
        previous = self._resolver.previous(period)

        rows = align_shifts(
            self._shifts.list_between(previous.start_date, period.end_date), self._resolver.calendar, period.start_date
        )
        rows = self._validated(rows)
        current = self._resolver.assign(rows, period, include_cancelled=True)
        before = self._resolver.assign(rows, previous, include_cancelled=True)

        actual = self._aggregator.summarize_actual(current, base_rate)
        previous_actual = self._aggregator.summarize_actual(before, base_rate)

        report = PeriodReport(
            period=period,
            previous_period=previous,
            actual=actual,
            scheduled=self._aggregator.summarize_scheduled(current, base_rate),
            previous_actual=previous_actual,
            compared_to_previous=PeriodAggregator.compared_to_previous(actual, previous_actual),
            daily_totals=self._aggregator.daily_totals(
                [s for s in current if s.is_completed], period, self._resolver.calendar
            ),
        )
        logger.info(
            "%s report %s: %d shift(s), %d paid minutes",
            period_type.value,
            period.label,
            report.scheduled.shift_count,
            report.actual.total_paid_minutes,
        )
        return report

    def build_recent_reports(self, *, instant: datetime, count: int) -> list[PeriodReport]:
        """Reports for the ``count`` most recent periods, newest first."""
        periods = self._resolver.recent_periods(instant, self._period_type, count)
        # every period's start is strictly inside it
        return [self.build_period_report(instant=p.start_date + timedelta(seconds=1)) for p in periods]
