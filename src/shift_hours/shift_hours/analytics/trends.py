"""Trend scoring: consistency, burnout risk, overtime and timing patterns."""

from __future__ import annotations

from collections import Counter
from datetime import timedelta
from typing import Iterable, Optional, Sequence

import numpy as np

from ..common.datetime_utils import CalendarSettings
from ..core.constants import (
    CONSISTENCY_STDDEV_CEILING_MINUTES,
    CONSISTENCY_VARIANCE_THRESHOLD,
    MINUTES_PER_HOUR,
)
from ..core.enums import BurnoutRiskLevel, InsightPriority, ShiftTimeSlot
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..shifts.model import ShiftRecord
from ..timecalc.arithmetic import elapsed_minutes
from .model import (
    BalanceFactor,
    BurnoutRiskAssessment,
    DayHours,
    OvertimeTrend,
    RiskFactor,
    ShiftPreferences,
    WeeklyMetrics,
    WorkLifeBalanceScore,
)

# Upper bounds of each risk level, checked in order.
BURNOUT_LEVEL_CUTS = (
    (0.25, BurnoutRiskLevel.LOW),
    (0.5, BurnoutRiskLevel.MODERATE),
    (0.75, BurnoutRiskLevel.HIGH),
)


def hours_variance(values: Sequence[float]) -> float:
    """Population variance; 0.0 for no values."""
    if len(values) == 0:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float)))


def is_consistent_schedule(by_day: Sequence[DayHours], threshold: float = CONSISTENCY_VARIANCE_THRESHOLD) -> bool:
    if not by_day:
        return False
    return hours_variance([d.hours for d in by_day]) < threshold


def consistency_score(shifts: Iterable[ShiftRecord]) -> float:
    """0-100 score from the spread of effective shift durations.

    Shifts within an hour of each other score above 50; a standard deviation
    of two hours or more scores 0. No shifts gives the neutral 50.
    """
    durations = [elapsed_minutes(s.effective_start, s.effective_end) for s in shifts]
    if not durations:
        return 50.0
    std = float(np.std(np.asarray(durations, dtype=float)))
    return max(0.0, min(100.0, 100.0 * (1.0 - std / CONSISTENCY_STDDEV_CEILING_MINUTES)))


def worked_days(shifts: Iterable[ShiftRecord], calendar: Optional[CalendarSettings] = None):
    calendar = calendar or CalendarSettings()
    return sorted(
        {calendar.local_date(s.scheduled_start) for s in shifts if not s.is_cancelled and not s.is_deleted}
    )


def max_consecutive_work_days(shifts: Iterable[ShiftRecord], calendar: Optional[CalendarSettings] = None) -> int:
    days = worked_days(shifts, calendar)
    best = 0
    streak = 0
    previous = None
    for day in days:
        streak = streak + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, streak)
        previous = day
    return best


def rest_days(by_day: Sequence[DayHours]) -> int:
    return sum(1 for d in by_day if d.hours == 0)


def overtime_frequency(shifts: Sequence[ShiftRecord]) -> float:
    if not shifts:
        return 0.0
    return sum(1 for s in shifts if s.has_premium_pay) / len(shifts)


def _level_for(score: float) -> BurnoutRiskLevel:
    for upper, level in BURNOUT_LEVEL_CUTS:
        if score < upper:
            return level
    return BurnoutRiskLevel.CRITICAL


def assess_burnout_risk(
    weekly_hours: float,
    consecutive_work_days: int,
    overtime_frequency: float,
    rest_days_per_week: int,
) -> BurnoutRiskAssessment:
    score = 0.0
    factors: list[RiskFactor] = []

    if weekly_hours > 50:
        score += 0.25
        factors.append(RiskFactor("Excessive Hours", InsightPriority.HIGH, "Working over 50 hours per week increases burnout risk."))
    elif weekly_hours > 45:
        score += 0.15
        factors.append(RiskFactor("High Hours", InsightPriority.MEDIUM, "Working 45-50 hours per week may lead to fatigue."))

    if consecutive_work_days >= 7:
        score += 0.3
        factors.append(RiskFactor("No Rest Days", InsightPriority.HIGH, "Working 7+ consecutive days without rest is unsustainable."))
    elif consecutive_work_days >= 5:
        score += 0.15
        factors.append(RiskFactor("Long Stretch", InsightPriority.MEDIUM, "Working 5-6 consecutive days may cause fatigue."))

    if overtime_frequency > 0.5:
        score += 0.2
        factors.append(RiskFactor("Frequent Overtime", InsightPriority.MEDIUM, "Over 50% of shifts include overtime."))

    if rest_days_per_week < 1:
        score += 0.25
        factors.append(RiskFactor("Insufficient Rest", InsightPriority.HIGH, "Less than 1 rest day per week."))
    elif rest_days_per_week < 2:
        score += 0.1
        factors.append(RiskFactor("Limited Rest", InsightPriority.LOW, "Only 1 rest day per week."))

    # increments are decimal fractions; round away float noise before bucketing
    score = min(1.0, round(score, 6))

    recommendations: list[str] = []
    if score >= 0.5:
        recommendations.append("Consider taking a day off soon.")
        recommendations.append("Review your schedule for opportunities to reduce hours.")
    if rest_days_per_week < 2:
        recommendations.append("Try to schedule at least 2 rest days per week.")

    return BurnoutRiskAssessment(
        level=_level_for(score),
        score=score,
        factors=tuple(factors),
        recommendations=tuple(recommendations),
    )


def analyze_overtime(
    shifts: Sequence[ShiftRecord],
    calculator: Optional[PayrollCalculator] = None,
    calendar: Optional[CalendarSettings] = None,
) -> OvertimeTrend:
    calculator = calculator or StandardPayrollCalculator()
    calendar = calendar or CalendarSettings()
    if not shifts:
        return OvertimeTrend()

    premium = [s for s in shifts if s.has_premium_pay]
    overtime_minutes = sum(calculator.overtime_minutes(s) for s in shifts)
    premium_paid = sum(calculator.paid_minutes(s) for s in premium)
    days = Counter(calendar.to_local(s.scheduled_start).weekday() for s in premium)

    return OvertimeTrend(
        frequency=len(premium) / len(shifts),
        average_hours_per_occurrence=premium_paid / len(premium) / MINUTES_PER_HOUR if premium else 0.0,
        total_overtime_hours=overtime_minutes / MINUTES_PER_HOUR,
        most_common_weekday=days.most_common(1)[0][0] if days else None,
    )


def _slot_for(hour: int) -> ShiftTimeSlot:
    if 5 <= hour < 12:
        return ShiftTimeSlot.MORNING
    if 12 <= hour < 17:
        return ShiftTimeSlot.AFTERNOON
    if 17 <= hour < 21:
        return ShiftTimeSlot.EVENING
    return ShiftTimeSlot.NIGHT


def analyze_shift_preferences(
    shifts: Sequence[ShiftRecord],
    calendar: Optional[CalendarSettings] = None,
) -> ShiftPreferences:
    calendar = calendar or CalendarSettings()
    if not shifts:
        return ShiftPreferences()

    counts = Counter(_slot_for(calendar.to_local(s.scheduled_start).hour) for s in shifts)
    order = (ShiftTimeSlot.MORNING, ShiftTimeSlot.AFTERNOON, ShiftTimeSlot.EVENING, ShiftTimeSlot.NIGHT)
    preferred = max(order, key=lambda slot: counts[slot])
    total = len(shifts)
    return ShiftPreferences(
        morning=counts[ShiftTimeSlot.MORNING] / total,
        afternoon=counts[ShiftTimeSlot.AFTERNOON] / total,
        evening=counts[ShiftTimeSlot.EVENING] / total,
        night=counts[ShiftTimeSlot.NIGHT] / total,
        preferred_slot=preferred,
    )


def work_life_balance(weekly: Optional[WeeklyMetrics]) -> WorkLifeBalanceScore:
    if weekly is None:
        return WorkLifeBalanceScore(score=0.5)

    score = 1.0
    factors: list[BalanceFactor] = []
    recommendations: list[str] = []

    hours = weekly.total_hours
    if hours > 50:
        score -= 0.2
        factors.append(BalanceFactor("High Hours", -0.2, "Working over 50 hours per week"))
        recommendations.append("Consider reducing weekly hours for better balance")
    elif hours > 40:
        score -= 0.1
        factors.append(BalanceFactor("Above Average", -0.1, "Working 40-50 hours per week"))
    elif hours < 20:
        factors.append(BalanceFactor("Low Hours", 0.0, "Working under 20 hours per week"))
    else:
        score += 0.1
        factors.append(BalanceFactor("Healthy Hours", 0.1, "Working 20-40 hours per week"))

    if weekly.premium_hours / max(1.0, hours) > 0.3:
        score -= 0.15
        factors.append(BalanceFactor("High Overtime", -0.15, "Over 30% of hours are overtime"))
        recommendations.append("Try to balance overtime with regular shifts")

    days_worked = sum(1 for d in weekly.by_day if d.hours > 0)
    if days_worked >= 6:
        score -= 0.1
        factors.append(BalanceFactor("Few Rest Days", -0.1, "Working 6+ days per week"))
        recommendations.append("Ensure at least 2 rest days per week")
    elif days_worked <= 4:
        score += 0.1
        factors.append(BalanceFactor("Good Rest", 0.1, "3+ rest days per week"))

    return WorkLifeBalanceScore(
        score=max(0.0, min(1.0, round(score, 6))),
        factors=tuple(factors),
        recommendations=tuple(recommendations),
    )
