"""Forecasting: where a pay period's hours are heading at the current pace."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import elapsed_seconds
from ..common.validators import require_positive
from ..core.constants import (
    APPROACHING_SHARE_OF_WARNING,
    HEAVY_SCHEDULE_SHARE_OF_TARGET,
    MINUTES_PER_HOUR,
    ON_TRACK_SHARE_OF_TARGET,
    OVERTIME_CRITICAL_HOURS,
    OVERTIME_WARNING_HOURS,
    WEEKLY_TARGET_HOURS,
)
from ..core.enums import OvertimeWarningLevel
from ..payroll.model import PeriodSummary
from ..periods.model import PayPeriod
from ..shifts.model import ShiftRecord
from ..timecalc.arithmetic import elapsed_minutes
from .model import HoursProjection, OvertimePrediction, OvertimeThreshold, PeriodForecast

SECONDS_PER_DAY = 24 * 3600


def target_hours_for(period: PayPeriod, weekly_target: float = WEEKLY_TARGET_HOURS) -> float:
    """Weekly target scaled to the period length (80 h for a biweekly period)."""
    return weekly_target * period.duration_days / 7


def threshold_for(
    period: PayPeriod,
    warning_hours: float = OVERTIME_WARNING_HOURS,
    critical_hours: float = OVERTIME_CRITICAL_HOURS,
) -> OvertimeThreshold:
    """Weekly warning and critical hours scaled to the period length."""
    scale = period.duration_days / 7
    return OvertimeThreshold(warning_hours=warning_hours * scale, critical_hours=critical_hours * scale)


def project_period_hours(
    current_hours: float,
    days_passed: int,
    total_days: int,
    target_hours: float = 2 * WEEKLY_TARGET_HOURS,
) -> HoursProjection:
    """Extend the average daily rate so far to the end of the period.

    The period is on track when the projection reaches 90% of the target.
    Without at least one elapsed day there is no rate to extend.
    """
    if days_passed <= 0 or total_days <= 0:
        return HoursProjection(
            projected_total=0.0,
            daily_rate=0.0,
            days_remaining=max(total_days, 0),
            on_track=False,
            target_hours=target_hours,
        )
    daily_rate = current_hours / days_passed
    days_remaining = max(0, total_days - days_passed)
    projected = current_hours + daily_rate * days_remaining
    return HoursProjection(
        projected_total=projected,
        daily_rate=daily_rate,
        days_remaining=days_remaining,
        on_track=projected >= target_hours * ON_TRACK_SHARE_OF_TARGET,
        target_hours=target_hours,
    )


def scheduled_hours(shifts: Iterable[ShiftRecord]) -> float:
    """Scheduled duration of active shifts, breaks included."""
    minutes = sum(
        elapsed_minutes(s.scheduled_start, s.scheduled_end)
        for s in shifts
        if not s.is_cancelled and not s.is_deleted
    )
    return minutes / MINUTES_PER_HOUR


def predict_overtime(scheduled: float, weekly_target: float = WEEKLY_TARGET_HOURS) -> OvertimePrediction:
    require_positive(weekly_target, "weekly_target")
    overtime = max(0.0, scheduled - weekly_target)
    warnings = []
    if scheduled > weekly_target:
        warnings.append(f"You have {overtime:.1f} hours of overtime scheduled this week.")
    if scheduled > weekly_target * HEAVY_SCHEDULE_SHARE_OF_TARGET:
        warnings.append("Consider balancing your workload to avoid burnout.")
    return OvertimePrediction(
        probability=min(1.0, scheduled / weekly_target),
        predicted_hours=overtime,
        scheduled_hours=scheduled,
        warnings=tuple(warnings),
    )


def warning_level(
    current: float,
    projected: float,
    target: float,
    threshold: OvertimeThreshold,
) -> OvertimeWarningLevel:
    if current >= target:
        return OvertimeWarningLevel.EXCEEDED
    if current >= threshold.critical_hours or projected >= target:
        return OvertimeWarningLevel.CRITICAL
    if current >= threshold.warning_hours or projected >= threshold.critical_hours:
        return OvertimeWarningLevel.WARNING
    if threshold.warning_hours > 0 and current >= threshold.warning_hours * APPROACHING_SHARE_OF_WARNING:
        return OvertimeWarningLevel.APPROACHING
    return OvertimeWarningLevel.NONE


def _message(level: OvertimeWarningLevel, current: float, projected: float, target: float) -> str:
    if level == OvertimeWarningLevel.NONE:
        return f"You're on track. Projected: {projected:.1f} hours."
    if level == OvertimeWarningLevel.APPROACHING:
        return f"Approaching target. {target - current:.1f} hours remaining."
    if level == OvertimeWarningLevel.WARNING:
        return f"Warning: Projected to work {projected - target:.1f} hours over target."
    if level == OvertimeWarningLevel.CRITICAL:
        return f"Critical: On pace to exceed target by {projected - target:.1f} hours."
    return f"Target exceeded by {current - target:.1f} hours."


def forecast_period(
    period: PayPeriod,
    summary: PeriodSummary,
    now: datetime,
    *,
    target_hours: Optional[float] = None,
    threshold: Optional[OvertimeThreshold] = None,
) -> PeriodForecast:
    """Pace forecast for ``period`` from the hours in ``summary`` so far.

    Only a period that contains ``now`` is projected; any other period
    reports its current hours as final.
    """
    target = target_hours if target_hours is not None else target_hours_for(period)
    threshold = threshold or threshold_for(period)
    current = summary.total_hours

    if not period.contains(now):
        return PeriodForecast(
            current_hours=current,
            projected_hours=current,
            target_hours=target,
            warning_level=OvertimeWarningLevel.NONE,
            message="Period complete" if now >= period.end_date else "Period not started",
            days_remaining=0,
            average_hours_per_day=0.0,
        )

    days_elapsed = max(1, int(elapsed_seconds(period.start_date, now) // SECONDS_PER_DAY))
    days_remaining = max(0, period.duration_days - days_elapsed)
    average = current / days_elapsed
    projected = current + average * days_remaining
    level = warning_level(current, projected, target, threshold)

    return PeriodForecast(
        current_hours=current,
        projected_hours=projected,
        target_hours=target,
        warning_level=level,
        message=_message(level, current, projected, target),
        days_remaining=days_remaining,
        average_hours_per_day=average,
        recommended_daily_hours=max(0.0, target - current) / days_remaining if days_remaining > 0 else None,
    )
