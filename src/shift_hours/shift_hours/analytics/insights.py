from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .model import Insight, InsightContext
from .rules.base import InsightRule
from .rules.overtime_rule import HighOvertimeRule
from .rules.premium_rule import PremiumShareRule
from .rules.trend_rule import ConsistentScheduleRule, HoursIncreasingRule
from .rules.workload_rule import BurnoutRiskRule, HighWeeklyHoursRule


def default_rules() -> list[InsightRule]:
    return [
        HighOvertimeRule(),
        HoursIncreasingRule(),
        ConsistentScheduleRule(),
        PremiumShareRule(),
        HighWeeklyHoursRule(),
        BurnoutRiskRule(),
    ]


@dataclass
class InsightGenerator:
    """Runs every rule and orders what fired.

    Order is priority high to low; ties keep rule registration order.
    """

    rules: Sequence[InsightRule] = field(default_factory=default_rules)

    def generate(self, context: InsightContext) -> tuple[Insight, ...]:
        fired = [insight for insight in (rule.evaluate(context) for rule in self.rules) if insight is not None]
        return tuple(sorted(fired, key=lambda i: i.priority, reverse=True))
