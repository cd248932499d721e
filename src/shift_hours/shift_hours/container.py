from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .analytics.engine import AnalyticsEngine
from .analytics.insights import InsightGenerator
from .core.settings import EngineSettings
from .payroll.aggregator import PeriodAggregator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayPeriodReportService
from .periods.resolver import PeriodResolver
from .shifts.model import ShiftRecord
from .shifts.repository import InMemoryShiftRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    settings: EngineSettings

    shifts_repo: InMemoryShiftRepository

    resolver: PeriodResolver
    aggregator: PeriodAggregator
    analytics_engine: AnalyticsEngine
    payroll_report_service: PayPeriodReportService

    def report_service_for(self, shifts: Iterable[ShiftRecord]) -> PayPeriodReportService:
        """Report service over a one-off batch (e.g. shifts posted in a request)."""
        return PayPeriodReportService(
            InMemoryShiftRepository(shifts, self.resolver.calendar),
            resolver=self.resolver,
            aggregator=self.aggregator,
            period_type=self.settings.period_type,
            base_rate_cents=self.settings.base_rate_cents,
            rate_upper_bound=self.settings.rate_valid_upper_bound,
        )


def build_container(settings: EngineSettings) -> Container:
    calendar = settings.calendar
    shifts_repo = InMemoryShiftRepository(calendar=calendar)

    resolver = PeriodResolver(calendar, reference_date=settings.reference_date)
    aggregator = PeriodAggregator(StandardPayrollCalculator())
    analytics_engine = AnalyticsEngine(
        resolver,
        aggregator,
        InsightGenerator(),
        base_rate_cents=settings.base_rate_cents,
        weekly_target_hours=settings.weekly_target_hours,
        forecast_period_type=settings.period_type,
    )
    payroll_report_service = PayPeriodReportService(
        shifts_repo,
        resolver=resolver,
        aggregator=aggregator,
        period_type=settings.period_type,
        base_rate_cents=settings.base_rate_cents,
        rate_upper_bound=settings.rate_valid_upper_bound,
    )

    logger.debug(
        "container ready: period=%s week_start=%d timezone=%s",
        settings.period_type.value,
        settings.week_start,
        settings.timezone_name or "naive",
    )
    return Container(
        settings=settings,
        shifts_repo=shifts_repo,
        resolver=resolver,
        aggregator=aggregator,
        analytics_engine=analytics_engine,
        payroll_report_service=payroll_report_service,
    )
