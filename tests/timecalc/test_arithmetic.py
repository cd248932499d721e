from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from src.shift_hours.shift_hours.common.datetime_utils import CalendarSettings
from src.shift_hours.shift_hours.core.exceptions import InvalidIntervalError
from src.shift_hours.shift_hours.timecalc.arithmetic import (
    DaySegment,
    elapsed_minutes,
    minutes_between,
    spans_day_boundary,
    split_across_days,
)


def test_minutes_between_floors_partial_minutes():
    start = datetime(2024, 3, 4, 9, 0, 0)

    assert minutes_between(start, start + timedelta(minutes=90, seconds=59)) == 90
    assert minutes_between(start, start) == 0


def test_minutes_between_rejects_reversed_interval():
    with pytest.raises(InvalidIntervalError):
        minutes_between(datetime(2024, 3, 4, 17, 0), datetime(2024, 3, 4, 9, 0))


def test_elapsed_minutes_clamps_reversed_interval():
    assert elapsed_minutes(datetime(2024, 3, 4, 17, 0), datetime(2024, 3, 4, 9, 0)) == 0


def test_minutes_between_compares_aware_instants_in_utc():
    start = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)
    end = datetime(2024, 3, 4, 12, 0, tzinfo=timezone(timedelta(hours=2)))

    assert minutes_between(start, end) == 60


def test_spans_day_boundary():
    assert spans_day_boundary(datetime(2024, 3, 4, 22, 0), datetime(2024, 3, 5, 6, 0))
    assert not spans_day_boundary(datetime(2024, 3, 4, 9, 0), datetime(2024, 3, 4, 17, 0))


def test_spans_day_boundary_uses_calendar_timezone():
    # 23:30 UTC and 00:30 UTC are the same day in New York
    calendar = CalendarSettings(timezone=ZoneInfo("America/New_York"))
    start = datetime(2024, 3, 4, 23, 30, tzinfo=timezone.utc)
    end = datetime(2024, 3, 5, 0, 30, tzinfo=timezone.utc)

    assert spans_day_boundary(start, end)
    assert not spans_day_boundary(start, end, calendar)


def test_split_overnight_shift_into_two_days():
    segments = list(split_across_days(datetime(2024, 3, 4, 22, 0), datetime(2024, 3, 5, 6, 0)))

    assert segments == [
        DaySegment(day=date(2024, 3, 4), minutes=120),
        DaySegment(day=date(2024, 3, 5), minutes=360),
    ]


def test_split_same_day_gives_one_segment():
    segments = list(split_across_days(datetime(2024, 3, 4, 9, 0), datetime(2024, 3, 4, 17, 0)))

    assert segments == [DaySegment(day=date(2024, 3, 4), minutes=480)]


def test_split_multi_day_has_full_interior_days():
    segments = list(split_across_days(datetime(2024, 3, 4, 12, 0), datetime(2024, 3, 7, 6, 0)))

    assert [s.minutes for s in segments] == [720, 1440, 1440, 360]
    assert [s.day for s in segments] == [date(2024, 3, d) for d in (4, 5, 6, 7)]


def test_split_ending_at_midnight_has_no_empty_segment():
    segments = list(split_across_days(datetime(2024, 3, 4, 20, 0), datetime(2024, 3, 5, 0, 0)))

    assert segments == [DaySegment(day=date(2024, 3, 4), minutes=240)]


def test_split_minutes_sum_with_second_offsets():
    start = datetime(2024, 3, 4, 23, 59, 30)
    for hours in (1, 25, 49, 73):
        end = start + timedelta(hours=hours, seconds=45)
        segments = list(split_across_days(start, end))
        assert sum(s.minutes for s in segments) == minutes_between(start, end)


def test_split_rejects_reversed_interval_eagerly():
    with pytest.raises(InvalidIntervalError):
        split_across_days(datetime(2024, 3, 5, 6, 0), datetime(2024, 3, 4, 22, 0))


def test_split_in_calendar_timezone():
    calendar = CalendarSettings(timezone=ZoneInfo("Europe/London"))
    # 22:00-06:00 London time in summer (UTC+1)
    start = datetime(2024, 7, 1, 21, 0, tzinfo=timezone.utc)
    end = datetime(2024, 7, 2, 5, 0, tzinfo=timezone.utc)

    segments = list(split_across_days(start, end, calendar))

    assert segments == [
        DaySegment(day=date(2024, 7, 1), minutes=120),
        DaySegment(day=date(2024, 7, 2), minutes=360),
    ]


def test_split_is_a_lazy_generator():
    segments = split_across_days(datetime(2024, 3, 4, 22, 0), datetime(2024, 3, 5, 6, 0))

    assert next(segments).minutes == 120
    assert next(segments).minutes == 360
    with pytest.raises(StopIteration):
        next(segments)
