from datetime import date, datetime, timedelta

from src.shift_hours.shift_hours.analytics.histograms import (
    hours_by_month,
    hours_by_week_of_month,
    hours_by_weekday,
    week_of_month,
    weeks_in_month,
)
from src.shift_hours.shift_hours.common.datetime_utils import CalendarSettings
from src.shift_hours.shift_hours.shifts.model import ShiftRecord


def _shift(start: datetime, hours: float = 8, **kwargs):
    return ShiftRecord(scheduled_start=start, scheduled_end=start + timedelta(hours=hours), **kwargs)


def test_hours_by_weekday_is_dense_and_ordered_from_monday():
    shifts = [
        _shift(datetime(2024, 3, 4, 9, 0)),
        _shift(datetime(2024, 3, 4, 18, 0), hours=2),
        _shift(datetime(2024, 3, 6, 9, 0), hours=8, break_minutes=30),
    ]

    histogram = hours_by_weekday(shifts)

    assert [d.weekday for d in histogram] == [0, 1, 2, 3, 4, 5, 6]
    assert [d.hours for d in histogram] == [10.0, 0.0, 7.5, 0.0, 0.0, 0.0, 0.0]
    assert histogram[0].name == "Mon"


def test_hours_by_weekday_follows_week_start():
    histogram = hours_by_weekday([_shift(datetime(2024, 3, 10, 9, 0))], CalendarSettings(week_start=6))

    assert [d.name for d in histogram][:2] == ["Sun", "Mon"]
    assert histogram[0].hours == 8.0


def test_hours_by_weekday_empty():
    histogram = hours_by_weekday([])

    assert len(histogram) == 7
    assert all(d.hours == 0.0 for d in histogram)


def test_overnight_shift_counts_on_start_day():
    histogram = hours_by_weekday([_shift(datetime(2024, 3, 10, 22, 0))])

    assert histogram[6].hours == 8.0
    assert histogram[0].hours == 0.0


def test_weeks_in_month():
    # March 2024 starts on a Friday, September 2024 on a Sunday
    assert weeks_in_month(date(2024, 3, 1), 0) == 5
    assert weeks_in_month(date(2024, 9, 1), 0) == 6
    assert weeks_in_month(date(2024, 9, 1), 6) == 5
    assert week_of_month(date(2024, 3, 4), 0) == 2
    assert week_of_month(date(2024, 3, 31), 0) == 5


def test_hours_by_week_of_month_ignores_other_months():
    shifts = [
        _shift(datetime(2024, 3, 1, 9, 0)),
        _shift(datetime(2024, 3, 5, 9, 0), hours=4),
        _shift(datetime(2024, 4, 1, 9, 0)),
    ]

    histogram = hours_by_week_of_month(shifts, date(2024, 3, 1))

    assert [w.week_of_month for w in histogram] == [1, 2, 3, 4, 5]
    assert [w.hours for w in histogram] == [8.0, 4.0, 0.0, 0.0, 0.0]


def test_hours_by_month_has_twelve_entries():
    shifts = [
        _shift(datetime(2024, 1, 15, 9, 0)),
        _shift(datetime(2024, 12, 31, 22, 0), hours=4),
        _shift(datetime(2023, 12, 31, 9, 0)),
    ]

    histogram = hours_by_month(shifts, 2024)

    assert len(histogram) == 12
    assert histogram[0].hours == 8.0
    assert histogram[11].hours == 4.0
    assert histogram[11].name == "Dec"
    assert sum(m.hours for m in histogram) == 12.0
