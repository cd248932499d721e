from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import CalendarSettings, add_months
from ..core.constants import BIWEEKLY_EPOCH
from ..core.enums import PayPeriodType
from ..shifts.model import ShiftRecord
from .model import PayPeriod

_FIXED_LENGTH_DAYS = {
    PayPeriodType.WEEKLY: 7,
    PayPeriodType.BIWEEKLY: 14,
}


class PeriodResolver:
    """Maps instants to pay periods and shifts to the periods they belong to.

    Weekly periods start on ``calendar.week_start``; biweekly periods are
    14-day tiles anchored at a reference date; monthly periods follow the
    calendar month.
    """

    def __init__(self, calendar: Optional[CalendarSettings] = None, reference_date: Optional[date] = None):
        self._calendar = calendar or CalendarSettings()
        self._reference_date = reference_date

    @property
    def calendar(self) -> CalendarSettings:
        return self._calendar

    def _anchor(self, reference_date) -> date:
        anchor = reference_date or self._reference_date or BIWEEKLY_EPOCH
        if isinstance(anchor, datetime):
            anchor = self._calendar.local_date(anchor)
        return anchor

    def _make(self, first: date, last_exclusive: date, period_type: PayPeriodType, like: datetime) -> PayPeriod:
        return PayPeriod(
            start_date=self._calendar.at_midnight(first, like=like),
            end_date=self._calendar.at_midnight(last_exclusive, like=like),
            period_type=period_type,
        )

    def period_containing(
        self,
        instant: datetime,
        period_type: PayPeriodType,
        reference_date: Optional[date] = None,
    ) -> PayPeriod:
        local = self._calendar.to_local(instant)
        day = local.date()
        period_type = PayPeriodType(period_type)

        if period_type == PayPeriodType.WEEKLY:
            first = self._calendar.start_of_week(day)
            return self._make(first, first + timedelta(days=7), period_type, local)

        if period_type == PayPeriodType.BIWEEKLY:
            anchor = self._anchor(reference_date)
            index = (day - anchor).days // 14
            first = anchor + timedelta(days=index * 14)
            return self._make(first, first + timedelta(days=14), period_type, local)

        first = day.replace(day=1)
        return self._make(first, add_months(first, 1), period_type, local)

    def previous(self, period: PayPeriod) -> PayPeriod:
        return self._step(period, -1)

    def next(self, period: PayPeriod) -> PayPeriod:
        return self._step(period, 1)

    def _step(self, period: PayPeriod, direction: int) -> PayPeriod:
        first = period.start_date.date()
        length = _FIXED_LENGTH_DAYS.get(period.period_type)
        if length is not None:
            new_first = first + timedelta(days=direction * length)
            new_end = new_first + timedelta(days=length)
        else:
            new_first = add_months(first, direction)
            new_end = add_months(new_first, 1)
        return self._make(new_first, new_end, period.period_type, period.start_date)

    def recent_periods(
        self,
        instant: datetime,
        period_type: PayPeriodType,
        count: int,
        reference_date: Optional[date] = None,
    ) -> list[PayPeriod]:
        """``count`` periods ending with the one containing ``instant``, newest first."""
        periods: list[PayPeriod] = []
        if count <= 0:
            return periods
        period = self.period_containing(instant, period_type, reference_date)
        for _ in range(count):
            periods.append(period)
            period = self.previous(period)
        return periods

    @staticmethod
    def _is_active(shift: ShiftRecord, include_cancelled: bool, include_deleted: bool) -> bool:
        if shift.is_deleted and not include_deleted:
            return False
        if shift.is_cancelled and not include_cancelled:
            return False
        return True

    def assign(
        self,
        shifts: Iterable[ShiftRecord],
        period: PayPeriod,
        *,
        include_cancelled: bool = False,
        include_deleted: bool = False,
    ) -> list[ShiftRecord]:
        return [
            s
            for s in shifts
            if self._is_active(s, include_cancelled, include_deleted) and period.contains(s.scheduled_start)
        ]

    def group_by_period(
        self,
        shifts: Iterable[ShiftRecord],
        period_type: PayPeriodType,
        reference_date: Optional[date] = None,
        *,
        include_cancelled: bool = False,
        include_deleted: bool = False,
    ) -> dict[PayPeriod, list[ShiftRecord]]:
        """Shifts bucketed by the period of their scheduled start, oldest period first."""
        groups: dict[PayPeriod, list[ShiftRecord]] = {}
        for s in shifts:
            if not self._is_active(s, include_cancelled, include_deleted):
                continue
            period = self.period_containing(s.scheduled_start, period_type, reference_date)
            groups.setdefault(period, []).append(s)
        return dict(sorted(groups.items(), key=lambda item: item[0].start_date))
