from __future__ import annotations

from typing import Optional

from ...core.constants import HIGH_WEEKLY_HOURS
from ...core.enums import BurnoutRiskLevel, InsightPriority, InsightType
from ..model import Insight, InsightContext
from .base import InsightRule


class HighWeeklyHoursRule(InsightRule):
    def __init__(self, limit: float = HIGH_WEEKLY_HOURS):
        self._limit = limit

    def evaluate(self, context: InsightContext) -> Optional[Insight]:
        weekly = context.weekly
        if weekly is None or weekly.total_hours <= self._limit:
            return None

        return Insight(
            type=InsightType.WARNING,
            title="High Weekly Hours",
            message=f"You're at {weekly.total_hours:.1f} hours this week. Consider rest.",
            priority=InsightPriority.HIGH,
            action_label="Review Schedule",
        )


class BurnoutRiskRule(InsightRule):
    _LEVELS = (BurnoutRiskLevel.HIGH, BurnoutRiskLevel.CRITICAL)

    def evaluate(self, context: InsightContext) -> Optional[Insight]:
        burnout = context.burnout
        if burnout is None or burnout.level not in self._LEVELS:
            return None

        reasons = ", ".join(f.name.lower() for f in burnout.factors) or "your recent schedule"
        return Insight(
            type=InsightType.WARNING,
            title="Burnout Risk",
            message=f"Your burnout risk is {burnout.level.value} ({reasons}).",
            priority=InsightPriority.HIGH,
            action_label="Plan Rest Days",
        )
