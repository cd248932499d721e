from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional

from ..core.constants import DEFAULT_WEEK_START


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 instant; a trailing ``Z`` is read as UTC."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_like(reference: Optional[datetime]) -> datetime:
    """``now_local()`` in the zone of ``reference``; naive when it is naive."""
    now = now_local()
    if reference is not None and reference.tzinfo is not None:
        return now.astimezone(reference.tzinfo)
    return now


def add_months(day: date, months: int) -> date:
    """First day of the month ``months`` away from ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


@dataclass(frozen=True)
class CalendarSettings:
    """Explicit calendar used for day, week and month boundaries.

    ``timezone`` of ``None`` means instants are read as the wall clock they
    carry (naive datetimes stay naive, aware ones keep their own zone).
    With a zone set, naive instants are wall-clock times in that zone.
    ``week_start`` uses Python weekday numbering (0 = Monday).
    """

    timezone: Optional[tzinfo] = None
    week_start: int = DEFAULT_WEEK_START

    def attach(self, instant: Optional[datetime]) -> Optional[datetime]:
        """Give a naive ``instant`` the calendar zone; anything else is returned as is."""
        if instant is None or instant.tzinfo is not None or self.timezone is None:
            return instant
        return instant.replace(tzinfo=self.timezone)

    def now(self, like: Optional[datetime] = None) -> datetime:
        """Current time in the calendar zone, else in ``like``'s zone (naive when it is naive)."""
        if self.timezone is None:
            return now_like(like)
        return now_local().astimezone(self.timezone)

    def to_local(self, instant: datetime) -> datetime:
        if self.timezone is None:
            return instant
        return self.attach(instant).astimezone(self.timezone)

    def local_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()

    def at_midnight(self, day: date, like: Optional[datetime] = None) -> datetime:
        """Midnight of ``day`` in the calendar zone (or ``like``'s zone)."""
        tz = self.timezone
        if tz is None and like is not None:
            tz = like.tzinfo
        return datetime(day.year, day.month, day.day, tzinfo=tz)

    def start_of_day(self, instant: datetime) -> datetime:
        local = self.to_local(instant)
        return self.at_midnight(local.date(), like=local)

    def start_of_week(self, day: date) -> date:
        return day - timedelta(days=(day.weekday() - self.week_start) % 7)

    def start_of_month(self, instant: datetime) -> datetime:
        local = self.to_local(instant)
        return self.at_midnight(local.date().replace(day=1), like=local)

    def weekday_order(self) -> tuple[int, ...]:
        return tuple((self.week_start + i) % 7 for i in range(7))


def elapsed_seconds(start: datetime, end: datetime) -> float:
    """Seconds from ``start`` to ``end`` on the absolute timeline.

    Aware instants are compared in UTC, so a shared zone's DST jump is
    counted as real elapsed time.
    """
    if start.tzinfo is not None and end.tzinfo is not None:
        start = start.astimezone(timezone.utc)
        end = end.astimezone(timezone.utc)
    return (end - start).total_seconds()
