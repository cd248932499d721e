from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import BurnoutRiskLevel, InsightPriority, InsightType, OvertimeWarningLevel, ShiftTimeSlot
from ..payroll.model import PeriodSummary

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class DayHours:
    weekday: int  # 0 = Monday
    hours: float

    @property
    def name(self) -> str:
        return WEEKDAY_NAMES[self.weekday]


@dataclass(frozen=True)
class WeekHours:
    week_of_month: int  # 1-based
    hours: float


@dataclass(frozen=True)
class MonthHours:
    month: int  # 1 = January
    hours: float

    @property
    def name(self) -> str:
        return MONTH_NAMES[self.month - 1]


@dataclass(frozen=True)
class WeeklyMetrics:
    period_start: datetime
    period_end: datetime
    summary: PeriodSummary
    compared_to_previous: float
    by_day: tuple[DayHours, ...]

    @property
    def total_hours(self) -> float:
        return self.summary.total_hours

    @property
    def premium_hours(self) -> float:
        return self.summary.premium_hours

    @property
    def shift_count(self) -> int:
        return self.summary.shift_count


@dataclass(frozen=True)
class MonthlyMetrics:
    period_start: datetime
    period_end: datetime
    summary: PeriodSummary
    overtime_hours: float
    compared_to_previous: float
    by_week: tuple[WeekHours, ...]

    @property
    def total_hours(self) -> float:
        return self.summary.total_hours

    @property
    def premium_hours(self) -> float:
        return self.summary.premium_hours


@dataclass(frozen=True)
class YearlyMetrics:
    year: int
    summary: PeriodSummary
    overtime_hours: float
    compared_to_previous: float
    by_month: tuple[MonthHours, ...]

    @property
    def total_hours(self) -> float:
        return self.summary.total_hours


@dataclass(frozen=True)
class RiskFactor:
    name: str
    severity: InsightPriority
    description: str


@dataclass(frozen=True)
class BurnoutRiskAssessment:
    level: BurnoutRiskLevel
    score: float
    factors: tuple[RiskFactor, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class OvertimeTrend:
    frequency: float = 0.0
    average_hours_per_occurrence: float = 0.0
    total_overtime_hours: float = 0.0
    most_common_weekday: Optional[int] = None


@dataclass(frozen=True)
class ShiftPreferences:
    morning: float = 0.0
    afternoon: float = 0.0
    evening: float = 0.0
    night: float = 0.0
    preferred_slot: ShiftTimeSlot = ShiftTimeSlot.NONE


@dataclass(frozen=True)
class BalanceFactor:
    name: str
    impact: float
    description: str


@dataclass(frozen=True)
class WorkLifeBalanceScore:
    score: float
    factors: tuple[BalanceFactor, ...] = ()
    recommendations: tuple[str, ...] = ()

    @property
    def rating(self) -> str:
        if self.score >= 0.8:
            return "Excellent"
        if self.score >= 0.6:
            return "Good"
        if self.score >= 0.4:
            return "Fair"
        return "Needs Attention"


@dataclass(frozen=True)
class Insight:
    type: InsightType
    title: str
    message: str
    priority: InsightPriority
    action_label: Optional[str] = None


@dataclass(frozen=True)
class InsightContext:
    """Everything insight rules may look at; any part can be missing."""

    weekly: Optional[WeeklyMetrics] = None
    monthly: Optional[MonthlyMetrics] = None
    yearly: Optional[YearlyMetrics] = None
    burnout: Optional[BurnoutRiskAssessment] = None


@dataclass(frozen=True)
class ShiftPatterns:
    """Working habits over the month of a dashboard refresh."""

    overtime: OvertimeTrend
    preferences: ShiftPreferences
    balance: WorkLifeBalanceScore
    consistency_score: float


@dataclass(frozen=True)
class HoursProjection:
    projected_total: float
    daily_rate: float
    days_remaining: int
    on_track: bool
    target_hours: float

    @property
    def progress(self) -> float:
        """Projected share of the target, capped at 1.0."""
        if self.target_hours <= 0:
            return 0.0
        return min(1.0, self.projected_total / self.target_hours)


@dataclass(frozen=True)
class OvertimePrediction:
    probability: float
    predicted_hours: float
    scheduled_hours: float
    warnings: tuple[str, ...] = ()

    @property
    def has_overtime(self) -> bool:
        return self.predicted_hours > 0


@dataclass(frozen=True)
class OvertimeThreshold:
    warning_hours: float
    critical_hours: float


@dataclass(frozen=True)
class PeriodForecast:
    """Where a pay period is heading at the current pace."""

    current_hours: float
    projected_hours: float
    target_hours: float
    warning_level: OvertimeWarningLevel
    message: str
    days_remaining: int
    average_hours_per_day: float
    recommended_daily_hours: Optional[float] = None


@dataclass(frozen=True)
class DashboardSnapshot:
    generated_at: datetime
    weekly: WeeklyMetrics
    monthly: MonthlyMetrics
    yearly: YearlyMetrics
    burnout: BurnoutRiskAssessment
    insights: tuple[Insight, ...] = field(default_factory=tuple)
    patterns: Optional[ShiftPatterns] = None
    forecast: Optional[PeriodForecast] = None
    overtime_outlook: Optional[OvertimePrediction] = None
