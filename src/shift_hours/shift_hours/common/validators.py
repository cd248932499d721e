from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.constants import DEFAULT_RATE_VALID_UPPER_BOUND, MAXIMUM_SHIFT_HOURS
from ..core.exceptions import (
    InvalidBreakError,
    InvalidIntervalError,
    InvalidRateError,
    OverlappingShiftError,
    ValidationError,
)
from ..payroll.rates import is_valid_rate
from ..shifts.model import ShiftRecord
from .datetime_utils import CalendarSettings, elapsed_seconds


def require_positive(value, field_name: str):
    if value is None or value <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return value


def require_non_negative(value, field_name: str):
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return value


def validate_interval(start, end, label: str = "shift") -> None:
    if elapsed_seconds(start, end) <= 0:
        raise InvalidIntervalError(f"{label} must end after it starts")


def validate_shift(
    shift: ShiftRecord,
    *,
    rate_upper_bound: float = DEFAULT_RATE_VALID_UPPER_BOUND,
    maximum_duration_hours: int = MAXIMUM_SHIFT_HOURS,
) -> ShiftRecord:
    """Reject records the calculator would otherwise clamp silently."""
    require_consistent_offsets(shift.instants, "shift")
    validate_interval(shift.scheduled_start, shift.scheduled_end, "scheduled shift")
    # clock-in without clock-out is fine while the shift is running
    if shift.actual_end is not None and shift.actual_start is None:
        raise InvalidIntervalError("actual end recorded without an actual start")
    if shift.has_actual_times:
        validate_interval(shift.actual_start, shift.actual_end, "actual shift")

    duration_seconds = elapsed_seconds(shift.scheduled_start, shift.scheduled_end)
    if duration_seconds > maximum_duration_hours * 3600:
        raise InvalidIntervalError(f"shift is longer than {maximum_duration_hours} hours")

    if shift.break_minutes < 0:
        raise InvalidBreakError("break minutes must not be negative")
    if shift.break_minutes * 60 >= duration_seconds:
        raise InvalidBreakError("break is as long as the shift itself")

    if not is_valid_rate(shift.rate_multiplier, rate_upper_bound):
        raise InvalidRateError(f"rate multiplier {shift.rate_multiplier} is outside (0, {rate_upper_bound}]")
    return shift


def validate_no_overlap(shift: ShiftRecord, others: Iterable[ShiftRecord]) -> None:
    for other in others:
        if other is shift or other.is_deleted:
            continue
        if shift.shift_id is not None and other.shift_id == shift.shift_id:
            continue
        require_consistent_offsets((shift.scheduled_start, other.scheduled_start), "compared shifts")
        if shift.scheduled_start < other.scheduled_end and other.scheduled_start < shift.scheduled_end:
            raise OverlappingShiftError("This shift overlaps with an existing shift.")


def validate_shifts(
    shifts: Sequence[ShiftRecord],
    *,
    rate_upper_bound: float = DEFAULT_RATE_VALID_UPPER_BOUND,
    check_overlap: bool = False,
) -> list[tuple[int, ValidationError]]:
    """Validation pass over a batch; returns ``(index, error)`` per bad record."""
    errors: list[tuple[int, ValidationError]] = []
    for index, shift in enumerate(shifts):
        try:
            validate_shift(shift, rate_upper_bound=rate_upper_bound)
            if check_overlap and not shift.is_cancelled:
                validate_no_overlap(shift, [s for s in shifts if not s.is_cancelled])
        except ValidationError as exc:
            errors.append((index, exc))
    return errors


def first_error(errors: Sequence[tuple[int, ValidationError]]) -> Optional[ValidationError]:
    return errors[0][1] if errors else None


def require_consistent_offsets(instants: Iterable, label: str = "instants") -> None:
    """All ``instants`` must be naive, or all must carry a UTC offset."""
    kinds = {value.tzinfo is not None for value in instants if value is not None}
    if len(kinds) > 1:
        raise ValidationError(f"{label} mix values with and without a UTC offset")


def align_shifts(
    shifts: Iterable[ShiftRecord],
    calendar: CalendarSettings,
    *extra: Optional[datetime],
) -> list[ShiftRecord]:
    """Shifts read in ``calendar``'s zone, checked to be comparable with ``extra`` instants."""
    aligned = [s.in_calendar(calendar) for s in shifts]
    require_consistent_offsets(
        [calendar.attach(v) for v in extra] + [v for s in aligned for v in s.instants],
        "shift instants",
    )
    return aligned
