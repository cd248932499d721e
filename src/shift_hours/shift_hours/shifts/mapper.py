"""Plain-dict (JSON) mapping for shift records."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import ShiftStatus
from ..core.exceptions import InvalidRateError, ValidationError
from .model import ShiftRecord

_STATUS_BY_KEY = {status.value.replace("_", ""): status for status in ShiftStatus}


def _instant(raw: Mapping[str, Any], key: str, *, required: bool = False):
    value = raw.get(key)
    if value in (None, ""):
        if required:
            raise ValidationError(f"{key} is required")
        return None
    try:
        return parse_iso_datetime(str(value))
    except ValueError as exc:
        raise ValidationError(f"{key} is not an ISO-8601 instant: {value!r}") from exc


def _status(value: Optional[str]) -> ShiftStatus:
    if not value:
        return ShiftStatus.SCHEDULED
    # "in_progress", "IN_PROGRESS", "inProgress" and "In-Progress" all match
    key = re.sub(r"[\s_-]", "", str(value)).lower()
    try:
        return _STATUS_BY_KEY[key]
    except KeyError as exc:
        raise ValidationError(f"Unknown shift status: {value!r}") from exc


def shift_from_dict(raw: Mapping[str, Any]) -> ShiftRecord:
    try:
        break_minutes = int(raw.get("break_minutes") or 0)
        rate_multiplier = float(raw.get("rate_multiplier", 1.0))
        shift_id = raw.get("shift_id")
        shift_id = int(shift_id) if shift_id is not None else None
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Malformed shift payload: {exc}") from exc
    if not math.isfinite(rate_multiplier):
        raise InvalidRateError(f"rate_multiplier must be a finite number: {raw.get('rate_multiplier')!r}")

    return ShiftRecord(
        scheduled_start=_instant(raw, "scheduled_start", required=True),
        scheduled_end=_instant(raw, "scheduled_end", required=True),
        actual_start=_instant(raw, "actual_start"),
        actual_end=_instant(raw, "actual_end"),
        break_minutes=break_minutes,
        rate_multiplier=rate_multiplier,
        rate_label=raw.get("rate_label") or None,
        status=_status(raw.get("status")),
        shift_id=shift_id,
        is_additional_shift=bool(raw.get("is_additional_shift", False)),
        deleted_at=_instant(raw, "deleted_at"),
    )


def shifts_from_list(items: Any) -> list[ShiftRecord]:
    if not isinstance(items, list):
        raise ValidationError("shifts must be a list")
    shifts = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValidationError(f"shifts[{index}] must be an object")
        try:
            shifts.append(shift_from_dict(item))
        except ValidationError as exc:
            raise type(exc)(f"shifts[{index}]: {exc}") from exc
    return shifts


def shift_to_dict(shift: ShiftRecord) -> dict:
    def iso(value):
        return value.isoformat() if value else None

    return {
        "shift_id": shift.shift_id,
        "scheduled_start": iso(shift.scheduled_start),
        "scheduled_end": iso(shift.scheduled_end),
        "actual_start": iso(shift.actual_start),
        "actual_end": iso(shift.actual_end),
        "break_minutes": shift.break_minutes,
        "rate_multiplier": shift.rate_multiplier,
        "rate_label": shift.rate_label,
        "status": shift.status.value,
        "is_additional_shift": shift.is_additional_shift,
        "deleted_at": iso(shift.deleted_at),
    }
