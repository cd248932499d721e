from datetime import datetime

from src.shift_hours.shift_hours.analytics.insights import InsightGenerator
from src.shift_hours.shift_hours.analytics.model import (
    BurnoutRiskAssessment,
    DayHours,
    InsightContext,
    MonthlyMetrics,
    RiskFactor,
    WeeklyMetrics,
)
from src.shift_hours.shift_hours.analytics.rules.overtime_rule import HighOvertimeRule
from src.shift_hours.shift_hours.analytics.rules.trend_rule import ConsistentScheduleRule, HoursIncreasingRule
from src.shift_hours.shift_hours.core.enums import BurnoutRiskLevel, InsightPriority, InsightType
from src.shift_hours.shift_hours.payroll.model import PeriodSummary


def _weekly(total_hours, by_day, compared=0.0, shift_count=5):
    return WeeklyMetrics(
        period_start=datetime(2024, 3, 4),
        period_end=datetime(2024, 3, 11),
        summary=PeriodSummary(total_paid_minutes=int(total_hours * 60), shift_count=shift_count),
        compared_to_previous=compared,
        by_day=tuple(DayHours(weekday=i, hours=h) for i, h in enumerate(by_day)),
    )


def _monthly(total_hours, premium_hours=0.0, overtime_hours=0.0):
    return MonthlyMetrics(
        period_start=datetime(2024, 3, 1),
        period_end=datetime(2024, 4, 1),
        summary=PeriodSummary(
            total_paid_minutes=int(total_hours * 60),
            premium_minutes=int(premium_hours * 60),
        ),
        overtime_hours=overtime_hours,
        compared_to_previous=0.0,
        by_week=(),
    )


def test_empty_context_has_no_insights():
    assert InsightGenerator().generate(InsightContext()) == ()


def test_high_overtime_rule():
    insight = HighOvertimeRule().evaluate(InsightContext(monthly=_monthly(100, overtime_hours=30)))

    assert insight.type == InsightType.WARNING
    assert insight.priority == InsightPriority.HIGH
    assert insight.message == "You've worked 30.0 overtime hours this month, which is 30% of your total hours."
    assert HighOvertimeRule().evaluate(InsightContext(monthly=_monthly(100, overtime_hours=20))) is None


def test_hours_increasing_rule_threshold():
    rule = HoursIncreasingRule()

    assert rule.evaluate(InsightContext(weekly=_weekly(40, [8] * 5 + [0, 0], compared=0.1))) is None
    assert rule.evaluate(InsightContext(weekly=_weekly(40, [8] * 5 + [0, 0], compared=0.25))).message == (
        "Your hours are up 25% compared to last week."
    )


def test_consistent_schedule_needs_shifts():
    rule = ConsistentScheduleRule()

    assert rule.evaluate(InsightContext(weekly=_weekly(0, [0] * 7, shift_count=0))) is None
    assert rule.evaluate(InsightContext(weekly=_weekly(42, [6] * 7, shift_count=7))) is not None


def test_insights_sorted_by_priority_then_registration_order():
    context = InsightContext(
        weekly=_weekly(55, [55 / 7] * 7, compared=0.5, shift_count=7),
        monthly=_monthly(100, premium_hours=10, overtime_hours=30),
        burnout=BurnoutRiskAssessment(
            level=BurnoutRiskLevel.HIGH,
            score=0.6,
            factors=(RiskFactor("Excessive Hours", InsightPriority.HIGH, "Over 50 hours."),),
        ),
    )

    insights = InsightGenerator().generate(context)

    assert [i.title for i in insights] == [
        "High Overtime",
        "High Weekly Hours",
        "Burnout Risk",
        "Hours Increasing",
        "Premium Rate Shifts",
        "Consistent Schedule",
    ]
    assert insights[2].message == "Your burnout risk is high (excessive hours)."


def test_custom_rules():
    generator = InsightGenerator(rules=[HoursIncreasingRule(threshold=0.0)])

    insights = generator.generate(InsightContext(weekly=_weekly(40, [8] * 5 + [0, 0], compared=0.05)))

    assert len(insights) == 1
