from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..common.datetime_utils import CalendarSettings, parse_iso_date
from .constants import DEFAULT_RATE_VALID_UPPER_BOUND, DEFAULT_WEEK_START, WEEKLY_TARGET_HOURS
from .enums import PayPeriodType
from .exceptions import ValidationError


@dataclass(frozen=True)
class EngineSettings:
    """Typed engine configuration built from a settings module or a dict."""

    period_type: PayPeriodType = PayPeriodType.WEEKLY
    reference_date: Optional[date] = None
    base_rate_cents: Optional[int] = None
    rate_valid_upper_bound: float = DEFAULT_RATE_VALID_UPPER_BOUND
    week_start: int = DEFAULT_WEEK_START
    timezone_name: Optional[str] = None
    weekly_target_hours: float = WEEKLY_TARGET_HOURS

    @property
    def calendar(self) -> CalendarSettings:
        tz = None
        if self.timezone_name:
            try:
                tz = ZoneInfo(self.timezone_name)
            except ZoneInfoNotFoundError as exc:
                raise ValidationError(f"Unknown timezone: {self.timezone_name}") from exc
        return CalendarSettings(timezone=tz, week_start=self.week_start)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "EngineSettings":
        try:
            period_type = PayPeriodType(str(raw.get("PERIOD_TYPE") or PayPeriodType.WEEKLY.value).lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown pay period type: {raw.get('PERIOD_TYPE')}") from exc

        reference = raw.get("REFERENCE_DATE")
        if isinstance(reference, str):
            reference = parse_iso_date(reference) if reference.strip() else None

        base_rate = raw.get("BASE_RATE_CENTS")
        if base_rate in ("", None):
            base_rate = None
        else:
            base_rate = int(base_rate)
            if base_rate < 0:
                raise ValidationError("BASE_RATE_CENTS must not be negative")

        upper_bound = float(raw.get("RATE_VALID_UPPER_BOUND") or DEFAULT_RATE_VALID_UPPER_BOUND)
        if upper_bound <= 0:
            raise ValidationError("RATE_VALID_UPPER_BOUND must be positive")

        week_start = int(raw.get("WEEK_START", DEFAULT_WEEK_START) or 0)
        if not 0 <= week_start <= 6:
            raise ValidationError("WEEK_START must be between 0 (Monday) and 6 (Sunday)")

        weekly_target = float(raw.get("WEEKLY_TARGET_HOURS") or WEEKLY_TARGET_HOURS)
        if weekly_target <= 0:
            raise ValidationError("WEEKLY_TARGET_HOURS must be positive")

        return cls(
            period_type=period_type,
            reference_date=reference,
            base_rate_cents=base_rate,
            rate_valid_upper_bound=upper_bound,
            week_start=week_start,
            timezone_name=raw.get("TIMEZONE") or None,
            weekly_target_hours=weekly_target,
        )

    @classmethod
    def from_module(cls, settings: Any) -> "EngineSettings":
        keys = (
            "PERIOD_TYPE",
            "REFERENCE_DATE",
            "BASE_RATE_CENTS",
            "RATE_VALID_UPPER_BOUND",
            "WEEK_START",
            "TIMEZONE",
            "WEEKLY_TARGET_HOURS",
        )
        return cls.from_mapping({k: getattr(settings, k) for k in keys if hasattr(settings, k)})
