from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..common.datetime_utils import CalendarSettings
from ..common.validators import require_consistent_offsets
from .model import ShiftRecord


class ShiftRepository(Protocol):
    def list_between(self, start: datetime, end: datetime, *, include_deleted: bool = False) -> Sequence[ShiftRecord]:
        """Shifts whose scheduled start is in ``[start, end)``, oldest first."""
        raise NotImplementedError


class InMemoryShiftRepository:
    """Repository over a fixed snapshot; keeps insertion order for ties.

    With a ``calendar`` that has a zone, naive instants are stored as
    wall-clock times in that zone.
    """

    def __init__(self, shifts: Iterable[ShiftRecord] = (), calendar: Optional[CalendarSettings] = None):
        self._calendar = calendar or CalendarSettings()
        self._shifts = [s.in_calendar(self._calendar) for s in shifts]

    def add(self, shift: ShiftRecord) -> None:
        self._shifts.append(shift.in_calendar(self._calendar))

    def list_all(self) -> Sequence[ShiftRecord]:
        return list(self._shifts)

    def list_between(self, start: datetime, end: datetime, *, include_deleted: bool = False) -> Sequence[ShiftRecord]:
        start, end = self._calendar.attach(start), self._calendar.attach(end)
        require_consistent_offsets(
            [start, end, *(s.scheduled_start for s in self._shifts)], "period bounds and shifts"
        )
        items = [
            s
            for s in self._shifts
            if start <= s.scheduled_start < end and (include_deleted or not s.is_deleted)
        ]
        items.sort(key=lambda s: s.scheduled_start)
        return items
