from __future__ import annotations

from typing import Optional

from ...core.constants import HIGH_OVERTIME_SHARE
from ...core.enums import InsightPriority, InsightType
from ..model import Insight, InsightContext
from .base import InsightRule


class HighOvertimeRule(InsightRule):
    """Overtime above a share of this month's hours."""

    def __init__(self, share: float = HIGH_OVERTIME_SHARE):
        self._share = share

    def evaluate(self, context: InsightContext) -> Optional[Insight]:
        monthly = context.monthly
        if monthly is None or monthly.total_hours <= 0:
            return None
        if monthly.overtime_hours <= monthly.total_hours * self._share:
            return None

        percent = int(monthly.overtime_hours / monthly.total_hours * 100)
        return Insight(
            type=InsightType.WARNING,
            title="High Overtime",
            message=(
                f"You've worked {monthly.overtime_hours:.1f} overtime hours this month, "
                f"which is {percent}% of your total hours."
            ),
            priority=InsightPriority.HIGH,
            action_label="View Details",
        )
