from __future__ import annotations

import logging
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..common.validators import align_shifts
from ..core.constants import MINUTES_PER_HOUR, WEEKLY_TARGET_HOURS
from ..core.enums import PayPeriodType
from ..payroll.aggregator import PeriodAggregator
from ..periods.resolver import PeriodResolver
from ..shifts.model import ShiftRecord
from .forecast import forecast_period, predict_overtime, scheduled_hours, target_hours_for
from .histograms import hours_by_month, hours_by_week_of_month, hours_by_weekday
from .insights import InsightGenerator
from .model import (
    BurnoutRiskAssessment,
    DashboardSnapshot,
    InsightContext,
    MonthlyMetrics,
    OvertimePrediction,
    PeriodForecast,
    ShiftPatterns,
    WeeklyMetrics,
    YearlyMetrics,
)
from .trends import (
    analyze_overtime,
    analyze_shift_preferences,
    assess_burnout_risk,
    consistency_score,
    max_consecutive_work_days,
    overtime_frequency,
    rest_days,
    work_life_balance,
)

logger = logging.getLogger(__name__)


class AnalyticsEngine:
    """Week, month and year rollups over one immutable shift snapshot.

    Each scope is a pure function of the snapshot and ``now``; ``refresh``
    runs the three scopes on parallel workers and joins them before
    generating insights.
    """

    def __init__(
        self,
        resolver: Optional[PeriodResolver] = None,
        aggregator: Optional[PeriodAggregator] = None,
        insights: Optional[InsightGenerator] = None,
        *,
        base_rate_cents: Optional[int] = None,
        weekly_target_hours: float = WEEKLY_TARGET_HOURS,
        forecast_period_type: PayPeriodType = PayPeriodType.WEEKLY,
    ):
        self._resolver = resolver or PeriodResolver()
        self._aggregator = aggregator or PeriodAggregator()
        self._insights = insights or InsightGenerator()
        self._base_rate_cents = base_rate_cents
        self._weekly_target_hours = weekly_target_hours
        self._forecast_period_type = PayPeriodType(forecast_period_type)

    @property
    def calendar(self):
        return self._resolver.calendar

    def _window(self, shifts: Sequence[ShiftRecord], start: datetime, end: datetime) -> list[ShiftRecord]:
        return [
            s
            for s in shifts
            if not s.is_deleted and not s.is_cancelled and start <= s.scheduled_start < end
        ]

    def _overtime_hours(self, shifts: Iterable[ShiftRecord]) -> float:
        calc = self._aggregator.calculator
        return sum(calc.overtime_minutes(s) for s in shifts) / MINUTES_PER_HOUR

    def weekly_metrics(self, shifts: Sequence[ShiftRecord], now: datetime) -> WeeklyMetrics:
        period = self._resolver.period_containing(now, PayPeriodType.WEEKLY)
        previous = self._resolver.previous(period)

        current_shifts = self._resolver.assign(shifts, period)
        summary = self._aggregator.summarize(current_shifts, self._base_rate_cents)
        previous_summary = self._aggregator.summarize(self._resolver.assign(shifts, previous))

        return WeeklyMetrics(
            period_start=period.start_date,
            period_end=period.end_date,
            summary=summary,
            compared_to_previous=PeriodAggregator.compared_to_previous(summary, previous_summary),
            by_day=hours_by_weekday(current_shifts, self.calendar, self._aggregator.calculator),
        )

    def monthly_metrics(self, shifts: Sequence[ShiftRecord], now: datetime) -> MonthlyMetrics:
        period = self._resolver.period_containing(now, PayPeriodType.MONTHLY)
        previous = self._resolver.previous(period)

        current_shifts = self._resolver.assign(shifts, period)
        summary = self._aggregator.summarize(current_shifts, self._base_rate_cents)
        previous_summary = self._aggregator.summarize(self._resolver.assign(shifts, previous))

        return MonthlyMetrics(
            period_start=period.start_date,
            period_end=period.end_date,
            summary=summary,
            overtime_hours=self._overtime_hours(current_shifts),
            compared_to_previous=PeriodAggregator.compared_to_previous(summary, previous_summary),
            by_week=hours_by_week_of_month(
                current_shifts, period.start_date.date(), self.calendar, self._aggregator.calculator
            ),
        )

    def yearly_metrics(self, shifts: Sequence[ShiftRecord], now: datetime) -> YearlyMetrics:
        local = self.calendar.to_local(now)
        year = local.year
        start = self.calendar.at_midnight(local.date().replace(month=1, day=1), like=local)
        end = start.replace(year=year + 1)
        previous_start = start.replace(year=year - 1)

        current_shifts = self._window(shifts, start, end)
        summary = self._aggregator.summarize(current_shifts, self._base_rate_cents)
        previous_summary = self._aggregator.summarize(self._window(shifts, previous_start, start))

        return YearlyMetrics(
            year=year,
            summary=summary,
            overtime_hours=self._overtime_hours(current_shifts),
            compared_to_previous=PeriodAggregator.compared_to_previous(summary, previous_summary),
            by_month=hours_by_month(current_shifts, year, self.calendar, self._aggregator.calculator),
        )

    def burnout_assessment(
        self,
        shifts: Sequence[ShiftRecord],
        weekly: WeeklyMetrics,
    ) -> BurnoutRiskAssessment:
        """Burnout risk for the week of ``weekly``.

        The consecutive-day streak also looks at the week before, so a
        stretch running over the week boundary is not cut in half.
        """
        week_shifts = self._window(shifts, weekly.period_start, weekly.period_end)
        recent = self._window(shifts, weekly.period_start - timedelta(days=7), weekly.period_end)
        return assess_burnout_risk(
            weekly_hours=weekly.total_hours,
            consecutive_work_days=max_consecutive_work_days(recent, self.calendar),
            overtime_frequency=overtime_frequency(week_shifts),
            rest_days_per_week=rest_days(weekly.by_day),
        )

    def shift_patterns(
        self,
        shifts: Sequence[ShiftRecord],
        weekly: WeeklyMetrics,
        monthly: MonthlyMetrics,
    ) -> ShiftPatterns:
        month_shifts = self._window(shifts, monthly.period_start, monthly.period_end)
        return ShiftPatterns(
            overtime=analyze_overtime(month_shifts, self._aggregator.calculator, self.calendar),
            preferences=analyze_shift_preferences(month_shifts, self.calendar),
            balance=work_life_balance(weekly),
            consistency_score=consistency_score(month_shifts),
        )

    def period_forecast(
        self,
        shifts: Sequence[ShiftRecord],
        now: datetime,
        period_type: Optional[PayPeriodType] = None,
    ) -> PeriodForecast:
        """Pace forecast for the period containing ``now`` from completed shifts."""
        period = self._resolver.period_containing(now, period_type or self._forecast_period_type)
        actual = self._aggregator.summarize_actual(self._resolver.assign(shifts, period))
        return forecast_period(
            period, actual, now, target_hours=target_hours_for(period, self._weekly_target_hours)
        )

    def overtime_outlook(self, shifts: Sequence[ShiftRecord], weekly: WeeklyMetrics) -> OvertimePrediction:
        week = self._window(shifts, weekly.period_start, weekly.period_end)
        return predict_overtime(scheduled_hours(week), self._weekly_target_hours)

    def refresh(
        self,
        shifts: Iterable[ShiftRecord],
        now: Optional[datetime] = None,
        *,
        executor: Optional[Executor] = None,
    ) -> DashboardSnapshot:
        shifts = list(shifts)
        if now is None:
            now = self.calendar.now(shifts[0].scheduled_start if shifts else None)
        now = self.calendar.attach(now)
        snapshot = tuple(align_shifts(shifts, self.calendar, now))
        started = time.perf_counter()

        own_executor = executor is None
        pool = executor or ThreadPoolExecutor(max_workers=3, thread_name_prefix="analytics")
        try:
            weekly_f = pool.submit(self.weekly_metrics, snapshot, now)
            monthly_f = pool.submit(self.monthly_metrics, snapshot, now)
            yearly_f = pool.submit(self.yearly_metrics, snapshot, now)
            weekly, monthly, yearly = weekly_f.result(), monthly_f.result(), yearly_f.result()
        finally:
            if own_executor:
                pool.shutdown(wait=True)

        burnout = self.burnout_assessment(snapshot, weekly)
        insights = self._insights.generate(
            InsightContext(weekly=weekly, monthly=monthly, yearly=yearly, burnout=burnout)
        )

        logger.debug(
            "analytics refresh: %d shifts, %d insights in %.1f ms",
            len(snapshot),
            len(insights),
            (time.perf_counter() - started) * 1000,
        )
        return DashboardSnapshot(
            generated_at=now,
            weekly=weekly,
            monthly=monthly,
            yearly=yearly,
            burnout=burnout,
            insights=insights,
            patterns=self.shift_patterns(snapshot, weekly, monthly),
            forecast=self.period_forecast(snapshot, now),
            overtime_outlook=self.overtime_outlook(snapshot, weekly),
        )
