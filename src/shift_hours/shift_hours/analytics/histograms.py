"""Dense hour histograms for charting.

Every bucket of the requested range is present, with 0 hours when nothing
was worked in it. Shifts are bucketed by the local day of their scheduled
start.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

import pandas as pd

from ..common.datetime_utils import CalendarSettings, add_months
from ..core.constants import MINUTES_PER_HOUR
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..shifts.model import ShiftRecord
from .model import DayHours, MonthHours, WeekHours


def _dense_hours(keys: Sequence[int], minutes: Sequence[int], index: Sequence[int]) -> pd.Series:
    frame = pd.DataFrame({"key": list(keys), "minutes": list(minutes)}, dtype="int64")
    totals = frame.groupby("key")["minutes"].sum()
    return totals.reindex(list(index), fill_value=0) / MINUTES_PER_HOUR


def _paid(shifts: Iterable[ShiftRecord], calculator: Optional[PayrollCalculator], calendar: CalendarSettings):
    calculator = calculator or StandardPayrollCalculator()
    for s in shifts:
        yield calendar.to_local(s.scheduled_start).date(), calculator.paid_minutes(s)


def weeks_in_month(month_start: date, week_start: int) -> int:
    offset = (month_start.weekday() - week_start) % 7
    days = (add_months(month_start, 1) - month_start).days
    return (offset + days + 6) // 7


def week_of_month(day: date, week_start: int) -> int:
    offset = (day.replace(day=1).weekday() - week_start) % 7
    return (offset + day.day - 1) // 7 + 1


def hours_by_weekday(
    shifts: Iterable[ShiftRecord],
    calendar: Optional[CalendarSettings] = None,
    calculator: Optional[PayrollCalculator] = None,
) -> tuple[DayHours, ...]:
    calendar = calendar or CalendarSettings()
    rows = list(_paid(shifts, calculator, calendar))
    order = calendar.weekday_order()
    totals = _dense_hours([d.weekday() for d, _ in rows], [m for _, m in rows], order)
    return tuple(DayHours(weekday=w, hours=float(totals.loc[w])) for w in order)


def hours_by_week_of_month(
    shifts: Iterable[ShiftRecord],
    month_start: date,
    calendar: Optional[CalendarSettings] = None,
    calculator: Optional[PayrollCalculator] = None,
) -> tuple[WeekHours, ...]:
    calendar = calendar or CalendarSettings()
    month_start = month_start.replace(day=1)
    rows = [
        (d, m)
        for d, m in _paid(shifts, calculator, calendar)
        if (d.year, d.month) == (month_start.year, month_start.month)
    ]
    weeks = range(1, weeks_in_month(month_start, calendar.week_start) + 1)
    totals = _dense_hours([week_of_month(d, calendar.week_start) for d, _ in rows], [m for _, m in rows], weeks)
    return tuple(WeekHours(week_of_month=w, hours=float(totals.loc[w])) for w in weeks)


def hours_by_month(
    shifts: Iterable[ShiftRecord],
    year: int,
    calendar: Optional[CalendarSettings] = None,
    calculator: Optional[PayrollCalculator] = None,
) -> tuple[MonthHours, ...]:
    calendar = calendar or CalendarSettings()
    rows = [(d, m) for d, m in _paid(shifts, calculator, calendar) if d.year == year]
    months = range(1, 13)
    totals = _dense_hours([d.month for d, _ in rows], [m for _, m in rows], months)
    return tuple(MonthHours(month=mo, hours=float(totals.loc[mo])) for mo in months)
