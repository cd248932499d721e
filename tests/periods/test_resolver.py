from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from src.shift_hours.shift_hours.common.datetime_utils import CalendarSettings
from src.shift_hours.shift_hours.core.enums import PayPeriodType, ShiftStatus
from src.shift_hours.shift_hours.periods.model import PayPeriod
from src.shift_hours.shift_hours.periods.resolver import PeriodResolver
from src.shift_hours.shift_hours.shifts.model import ShiftRecord


def _shift(start: datetime, **kwargs):
    return ShiftRecord(scheduled_start=start, scheduled_end=start + timedelta(hours=8), **kwargs)


def test_weekly_period_starts_on_monday_by_default():
    # 2024-03-07 is a Thursday
    period = PeriodResolver().period_containing(datetime(2024, 3, 7, 15, 30), PayPeriodType.WEEKLY)

    assert period.start_date == datetime(2024, 3, 4)
    assert period.end_date == datetime(2024, 3, 11)
    assert period.duration_days == 7


def test_weekly_period_honours_week_start():
    resolver = PeriodResolver(CalendarSettings(week_start=6))

    period = resolver.period_containing(datetime(2024, 3, 7, 15, 30), PayPeriodType.WEEKLY)

    assert period.start_date == datetime(2024, 3, 3)
    assert period.end_date == datetime(2024, 3, 10)


def test_biweekly_periods_tile_from_anchor():
    resolver = PeriodResolver()
    anchor = date(2024, 1, 1)

    first = resolver.period_containing(datetime(2024, 1, 10), PayPeriodType.BIWEEKLY, anchor)
    second = resolver.period_containing(datetime(2024, 1, 15), PayPeriodType.BIWEEKLY, anchor)

    assert first.start_date == datetime(2024, 1, 1)
    assert first.end_date == datetime(2024, 1, 15)
    assert second.start_date == first.end_date


def test_biweekly_before_anchor_tiles_backwards():
    period = PeriodResolver().period_containing(datetime(2023, 12, 31, 23, 0), PayPeriodType.BIWEEKLY, date(2024, 1, 1))

    assert period.start_date == datetime(2023, 12, 18)
    assert period.end_date == datetime(2024, 1, 1)


def test_biweekly_uses_resolver_reference_then_epoch():
    with_reference = PeriodResolver(reference_date=date(2024, 1, 8))
    epoch = PeriodResolver()

    assert with_reference.period_containing(datetime(2024, 1, 9), PayPeriodType.BIWEEKLY).start_date == datetime(2024, 1, 8)
    period = epoch.period_containing(datetime(2024, 4, 18), PayPeriodType.BIWEEKLY)
    assert (period.start_date.date() - date(2001, 1, 1)).days % 14 == 0
    assert period.contains(datetime(2024, 4, 18))


def test_monthly_period_handles_december_and_leap_february():
    resolver = PeriodResolver()

    december = resolver.period_containing(datetime(2023, 12, 31, 23, 59), PayPeriodType.MONTHLY)
    february = resolver.period_containing(datetime(2024, 2, 10), PayPeriodType.MONTHLY)

    assert december.start_date == datetime(2023, 12, 1)
    assert december.end_date == datetime(2024, 1, 1)
    assert february.duration_days == 29


def test_period_end_is_exclusive():
    period = PeriodResolver().period_containing(datetime(2024, 3, 7), PayPeriodType.WEEKLY)

    assert period.contains(datetime(2024, 3, 4))
    assert not period.contains(datetime(2024, 3, 11))


def test_previous_and_next():
    resolver = PeriodResolver()
    march = resolver.period_containing(datetime(2024, 3, 15), PayPeriodType.MONTHLY)
    week = resolver.period_containing(datetime(2024, 3, 15), PayPeriodType.WEEKLY)

    assert resolver.previous(march).start_date == datetime(2024, 2, 1)
    assert resolver.previous(march).end_date == march.start_date
    assert resolver.next(march).start_date == datetime(2024, 4, 1)
    assert resolver.next(resolver.previous(week)) == week


def test_recent_periods_newest_first():
    periods = PeriodResolver().recent_periods(datetime(2024, 3, 15), PayPeriodType.WEEKLY, 3)

    assert [p.start_date for p in periods] == [datetime(2024, 3, 11), datetime(2024, 3, 4), datetime(2024, 2, 26)]
    assert PeriodResolver().recent_periods(datetime(2024, 3, 15), PayPeriodType.WEEKLY, 0) == []


def test_assign_filters_by_scheduled_start_and_status():
    resolver = PeriodResolver()
    period = resolver.period_containing(datetime(2024, 3, 7), PayPeriodType.WEEKLY)
    inside = _shift(datetime(2024, 3, 10, 22, 0))
    boundary = _shift(datetime(2024, 3, 11, 0, 0))
    cancelled = _shift(datetime(2024, 3, 5, 9, 0), status=ShiftStatus.CANCELLED)
    deleted = _shift(datetime(2024, 3, 6, 9, 0), deleted_at=datetime(2024, 3, 6, 10, 0))
    shifts = [inside, boundary, cancelled, deleted]

    assert resolver.assign(shifts, period) == [inside]
    assert resolver.assign(shifts, period, include_cancelled=True) == [inside, cancelled]
    assert resolver.assign(shifts, period, include_deleted=True) == [inside, deleted]


def test_overnight_shift_belongs_to_period_of_its_start():
    resolver = PeriodResolver()
    period = resolver.period_containing(datetime(2024, 3, 7), PayPeriodType.WEEKLY)
    sunday_night = _shift(datetime(2024, 3, 10, 22, 0))

    assert resolver.assign([sunday_night], period) == [sunday_night]
    assert resolver.assign([sunday_night], resolver.next(period)) == []


def test_group_by_period_orders_oldest_first():
    resolver = PeriodResolver()
    shifts = [
        _shift(datetime(2024, 3, 20, 9, 0)),
        _shift(datetime(2024, 3, 5, 9, 0)),
        _shift(datetime(2024, 3, 6, 9, 0)),
        _shift(datetime(2024, 3, 7, 9, 0), status=ShiftStatus.CANCELLED),
    ]

    groups = resolver.group_by_period(shifts, PayPeriodType.WEEKLY)

    assert [p.start_date for p in groups] == [datetime(2024, 3, 4), datetime(2024, 3, 18)]
    assert len(groups[PayPeriod(datetime(2024, 3, 4), datetime(2024, 3, 11), PayPeriodType.WEEKLY)]) == 2


def test_periods_in_calendar_timezone():
    tz = ZoneInfo("America/New_York")
    resolver = PeriodResolver(CalendarSettings(timezone=tz))
    # Monday 03:00 UTC is still Sunday evening in New York
    instant = datetime(2024, 3, 4, 3, 0, tzinfo=timezone.utc)

    period = resolver.period_containing(instant, PayPeriodType.WEEKLY)

    assert period.start_date == datetime(2024, 2, 26, tzinfo=tz)
    assert period.contains(instant)


def test_period_label():
    period = PayPeriod(datetime(2024, 3, 4), datetime(2024, 3, 11), PayPeriodType.WEEKLY)

    assert period.label == "Mar 4 - Mar 10"
    assert period.days()[-1] == date(2024, 3, 10)
