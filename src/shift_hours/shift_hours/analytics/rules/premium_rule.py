from __future__ import annotations

from typing import Optional

from ...core.enums import InsightPriority, InsightType
from ..model import Insight, InsightContext
from .base import InsightRule


class PremiumShareRule(InsightRule):
    def evaluate(self, context: InsightContext) -> Optional[Insight]:
        monthly = context.monthly
        if monthly is None or monthly.total_hours <= 0 or monthly.premium_hours <= 0:
            return None

        percent = int(monthly.premium_hours / monthly.total_hours * 100)
        return Insight(
            type=InsightType.INFO,
            title="Premium Rate Shifts",
            message=f"{percent}% of your hours this month are at premium rates.",
            priority=InsightPriority.MEDIUM,
            action_label="View Breakdown",
        )
