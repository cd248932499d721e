from datetime import datetime, timedelta

import pytest

from src.shift_hours.shift_hours.analytics.model import DayHours, WeeklyMetrics
from src.shift_hours.shift_hours.analytics.trends import (
    analyze_overtime,
    analyze_shift_preferences,
    assess_burnout_risk,
    consistency_score,
    hours_variance,
    is_consistent_schedule,
    max_consecutive_work_days,
    overtime_frequency,
    rest_days,
    work_life_balance,
)
from src.shift_hours.shift_hours.core.enums import BurnoutRiskLevel, ShiftStatus, ShiftTimeSlot
from src.shift_hours.shift_hours.payroll.model import PeriodSummary
from src.shift_hours.shift_hours.shifts.model import ShiftRecord


def _shift(start: datetime, hours: float = 8, **kwargs):
    return ShiftRecord(scheduled_start=start, scheduled_end=start + timedelta(hours=hours), **kwargs)


def _by_day(*hours):
    return tuple(DayHours(weekday=i, hours=h) for i, h in enumerate(hours))


def _weekly(total_minutes, premium_minutes, by_day):
    return WeeklyMetrics(
        period_start=datetime(2024, 3, 4),
        period_end=datetime(2024, 3, 11),
        summary=PeriodSummary(
            total_paid_minutes=total_minutes,
            regular_minutes=total_minutes - premium_minutes,
            premium_minutes=premium_minutes,
        ),
        compared_to_previous=0.0,
        by_day=by_day,
    )


def test_hours_variance_is_population_variance():
    assert hours_variance([1.0, 2.0, 3.0]) == pytest.approx(2 / 3)
    assert hours_variance([]) == 0.0


def test_consistent_schedule():
    assert is_consistent_schedule(_by_day(6, 6, 6, 6, 6, 6, 6))
    assert not is_consistent_schedule(_by_day(8, 8, 8, 8, 8, 0, 0))
    assert not is_consistent_schedule(())


def test_consistency_score():
    same = [_shift(datetime(2024, 3, d, 9, 0)) for d in (4, 5, 6)]
    spread = [_shift(datetime(2024, 3, 4, 9, 0), hours=1), _shift(datetime(2024, 3, 5, 9, 0), hours=5)]

    assert consistency_score(same) == 100.0
    assert consistency_score(spread) == 0.0
    assert consistency_score([]) == 50.0


def test_max_consecutive_work_days_skips_cancelled():
    shifts = [
        _shift(datetime(2024, 3, 4, 9, 0)),
        _shift(datetime(2024, 3, 5, 9, 0)),
        _shift(datetime(2024, 3, 5, 18, 0), hours=2),
        _shift(datetime(2024, 3, 6, 9, 0)),
        _shift(datetime(2024, 3, 7, 9, 0), status=ShiftStatus.CANCELLED),
        _shift(datetime(2024, 3, 8, 9, 0)),
    ]

    assert max_consecutive_work_days(shifts) == 3
    assert max_consecutive_work_days([]) == 0


def test_rest_days_and_overtime_frequency():
    shifts = [_shift(datetime(2024, 3, 4, 9, 0), rate_multiplier=1.5), _shift(datetime(2024, 3, 5, 9, 0))]

    assert rest_days(_by_day(8, 0, 8, 0, 8, 0, 0)) == 4
    assert overtime_frequency(shifts) == 0.5
    assert overtime_frequency([]) == 0.0


@pytest.mark.parametrize(
    "hours, streak, frequency, rest, score, level",
    [
        (30, 2, 0.0, 3, 0.0, BurnoutRiskLevel.LOW),
        (51, 0, 0.0, 2, 0.25, BurnoutRiskLevel.MODERATE),
        (46, 5, 0.0, 1, 0.4, BurnoutRiskLevel.MODERATE),
        (51, 0, 0.0, 0, 0.5, BurnoutRiskLevel.HIGH),
        (51, 7, 0.6, 2, 0.75, BurnoutRiskLevel.CRITICAL),
        (55, 7, 0.6, 0, 1.0, BurnoutRiskLevel.CRITICAL),
    ],
)
def test_burnout_score_and_level(hours, streak, frequency, rest, score, level):
    assessment = assess_burnout_risk(hours, streak, frequency, rest)

    assert assessment.score == pytest.approx(score)
    assert assessment.level == level
    assert 0.0 <= assessment.score <= 1.0


def test_burnout_factors_and_recommendations():
    assessment = assess_burnout_risk(55, 7, 0.6, 0)

    assert [f.name for f in assessment.factors] == [
        "Excessive Hours",
        "No Rest Days",
        "Frequent Overtime",
        "Insufficient Rest",
    ]
    assert "Consider taking a day off soon." in assessment.recommendations
    assert "Try to schedule at least 2 rest days per week." in assessment.recommendations


def test_analyze_overtime():
    shifts = [
        _shift(datetime(2024, 3, 4, 9, 0), hours=4, rate_multiplier=1.5),
        _shift(datetime(2024, 3, 11, 9, 0), hours=2, rate_multiplier=2.0),
        _shift(datetime(2024, 3, 5, 9, 0)),
    ]

    trend = analyze_overtime(shifts)

    assert trend.frequency == pytest.approx(2 / 3)
    assert trend.average_hours_per_occurrence == 3.0
    assert trend.total_overtime_hours == 6.0
    assert trend.most_common_weekday == 0
    assert analyze_overtime([]).frequency == 0.0


def test_analyze_shift_preferences():
    shifts = [
        _shift(datetime(2024, 3, 4, 6, 0)),
        _shift(datetime(2024, 3, 5, 9, 0)),
        _shift(datetime(2024, 3, 6, 13, 0)),
        _shift(datetime(2024, 3, 7, 23, 0)),
    ]

    preferences = analyze_shift_preferences(shifts)

    assert preferences.morning == 0.5
    assert preferences.afternoon == 0.25
    assert preferences.evening == 0.0
    assert preferences.night == 0.25
    assert preferences.preferred_slot == ShiftTimeSlot.MORNING
    assert analyze_shift_preferences([]).preferred_slot == ShiftTimeSlot.NONE


def test_work_life_balance():
    healthy = work_life_balance(_weekly(30 * 60, 0, _by_day(6, 6, 6, 6, 6, 0, 0)))
    strained = work_life_balance(_weekly(55 * 60, 20 * 60, _by_day(9, 9, 9, 9, 9, 10, 0)))

    assert healthy.score == 1.0
    assert healthy.rating == "Excellent"
    assert strained.score == pytest.approx(0.55)
    assert strained.rating == "Fair"
    assert work_life_balance(None).score == 0.5
