from __future__ import annotations

from typing import Optional

from ...core.constants import HOURS_INCREASE_THRESHOLD
from ...core.enums import InsightPriority, InsightType
from ..model import Insight, InsightContext
from ..trends import is_consistent_schedule
from .base import InsightRule


class HoursIncreasingRule(InsightRule):
    """Week-over-week growth in hours."""

    def __init__(self, threshold: float = HOURS_INCREASE_THRESHOLD):
        self._threshold = threshold

    def evaluate(self, context: InsightContext) -> Optional[Insight]:
        weekly = context.weekly
        if weekly is None or weekly.compared_to_previous <= self._threshold:
            return None

        return Insight(
            type=InsightType.POSITIVE,
            title="Hours Increasing",
            message=f"Your hours are up {int(weekly.compared_to_previous * 100)}% compared to last week.",
            priority=InsightPriority.MEDIUM,
        )


class ConsistentScheduleRule(InsightRule):
    """Low variance of hours across the days of this week."""

    def evaluate(self, context: InsightContext) -> Optional[Insight]:
        weekly = context.weekly
        if weekly is None or weekly.shift_count == 0:
            return None
        if not is_consistent_schedule(weekly.by_day):
            return None

        return Insight(
            type=InsightType.POSITIVE,
            title="Consistent Schedule",
            message="Your shifts are well-distributed throughout the week.",
            priority=InsightPriority.LOW,
        )
