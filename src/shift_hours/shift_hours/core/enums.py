from __future__ import annotations

from enum import Enum, IntEnum


class ShiftStatus(str, Enum):
    """Lifecycle state of a shift record."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PayPeriodType(str, Enum):
    """Frequency of the pay periods shifts are bucketed into."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @property
    def display_name(self) -> str:
        return {
            PayPeriodType.WEEKLY: "Weekly",
            PayPeriodType.BIWEEKLY: "Bi-Weekly",
            PayPeriodType.MONTHLY: "Monthly",
        }[self]


class InsightType(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"
    INFO = "info"


class InsightPriority(IntEnum):
    """Higher value sorts first."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


class BurnoutRiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class ShiftTimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    NONE = "none"


class OvertimeWarningLevel(str, Enum):
    """Pace of a pay period against its hours target, mildest first."""

    NONE = "none"
    APPROACHING = "approaching"
    WARNING = "warning"
    CRITICAL = "critical"
    EXCEEDED = "exceeded"

    @property
    def display_name(self) -> str:
        return {
            OvertimeWarningLevel.NONE: "On Track",
            OvertimeWarningLevel.APPROACHING: "Approaching Limit",
            OvertimeWarningLevel.WARNING: "Warning",
            OvertimeWarningLevel.CRITICAL: "Critical",
            OvertimeWarningLevel.EXCEEDED: "Exceeded",
        }[self]
