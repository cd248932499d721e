from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import Insight, InsightContext


class InsightRule(ABC):
    """Strategy Pattern: one rule inspects one metric and may emit one insight.

    Rules never see each other's output, so evaluation order does not change
    which insights fire.
    """

    @abstractmethod
    def evaluate(self, context: InsightContext) -> Optional[Insight]:
        raise NotImplementedError
