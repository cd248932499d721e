"""Interval math on wall-clock instants.

All functions are pure. Day boundaries come from an explicit
``CalendarSettings`` instead of process-wide locale state; when none is
given, instants are read in the zone they carry.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..common.datetime_utils import CalendarSettings, elapsed_seconds
from ..core.exceptions import InvalidIntervalError

_DEFAULT_CALENDAR = CalendarSettings()


@dataclass(frozen=True)
class DaySegment:
    """Minutes of an interval that fall on one calendar day."""

    day: date
    minutes: int


def _floor_minutes(start: datetime, end: datetime) -> int:
    return int(elapsed_seconds(start, end) // 60)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed from ``start`` to ``end`` (floored).

    Raises ``InvalidIntervalError`` when ``end`` is before ``start``.
    """
    if elapsed_seconds(start, end) < 0:
        raise InvalidIntervalError(f"Interval ends before it starts ({start.isoformat()} > {end.isoformat()})")
    return _floor_minutes(start, end)


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Like ``minutes_between`` but clamped to 0 for reversed intervals."""
    return max(0, _floor_minutes(start, end))


def spans_day_boundary(start: datetime, end: datetime, calendar: Optional[CalendarSettings] = None) -> bool:
    calendar = calendar or _DEFAULT_CALENDAR
    return calendar.local_date(start) != calendar.local_date(end)


def split_across_days(
    start: datetime,
    end: datetime,
    calendar: Optional[CalendarSettings] = None,
) -> Iterator[DaySegment]:
    """Split ``[start, end)`` into one segment per calendar day it touches.

    Segment minutes always add up to ``minutes_between(start, end)``: each
    segment is the difference of floored offsets from ``start``, so seconds
    never get lost at a boundary. An interval that ends exactly at midnight
    produces no empty trailing segment. The interval is checked eagerly; the
    segments are produced lazily.
    """
    calendar = calendar or _DEFAULT_CALENDAR
    total = minutes_between(start, end)
    return _segments(start, end, total, calendar)


def _segments(start: datetime, end: datetime, total: int, calendar: CalendarSettings) -> Iterator[DaySegment]:
    local_start = calendar.to_local(start)
    day = local_start.date()
    last_day = calendar.local_date(end)
    consumed = 0

    while day < last_day:
        boundary = calendar.at_midnight(day + timedelta(days=1), like=local_start)
        if boundary >= end:
            break
        upto = _floor_minutes(start, boundary)
        yield DaySegment(day=day, minutes=upto - consumed)
        consumed = upto
        day += timedelta(days=1)

    yield DaySegment(day=day, minutes=total - consumed)
