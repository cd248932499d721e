from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.validators import validate_shifts
from ..container import Container
from ..core.enums import PayPeriodType
from ..core.exceptions import ValidationError
from ..periods.model import PayPeriod
from ..shifts.mapper import shift_from_dict, shifts_from_list
from .model import PeriodSummary
from .rates import format_multiplier, is_valid_rate, known_label, rate_label
from .service import PeriodReport


def period_to_dict(period: PayPeriod) -> dict:
    return {
        "start_date": period.start_date.isoformat(),
        "end_date": period.end_date.isoformat(),
        "period_type": period.period_type.value,
        "label": period.label,
    }


def summary_to_dict(summary: PeriodSummary) -> dict:
    return {
        "total_paid_minutes": summary.total_paid_minutes,
        "regular_minutes": summary.regular_minutes,
        "premium_minutes": summary.premium_minutes,
        "total_hours": summary.total_hours,
        "regular_hours": summary.regular_hours,
        "premium_hours": summary.premium_hours,
        "shift_count": summary.shift_count,
        "average_shift_hours": summary.average_shift_hours,
        "estimated_pay_cents": summary.estimated_pay_cents,
        "additional_shift_minutes": summary.additional_shift_minutes,
        "rate_breakdown": [
            {
                "label": b.label,
                "multiplier": b.multiplier,
                "minutes": b.minutes,
                "hours": b.hours,
                "pay_cents": b.pay_cents,
            }
            for b in summary.rate_breakdown
        ],
    }


def report_to_dict(report: PeriodReport) -> dict:
    return {
        "period": period_to_dict(report.period),
        "previous_period": period_to_dict(report.previous_period),
        "actual": summary_to_dict(report.actual),
        "scheduled": summary_to_dict(report.scheduled),
        "previous_actual": summary_to_dict(report.previous_actual),
        "compared_to_previous": report.compared_to_previous,
        "daily_totals": [
            {"day": d.day.isoformat(), "minutes": d.minutes, "hours": d.hours} for d in report.daily_totals
        ],
    }


def _json_body() -> Mapping[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data


def _optional_instant(data: Mapping[str, Any], key: str):
    value = data.get(key)
    if not value:
        return None
    try:
        return parse_iso_datetime(str(value))
    except ValueError as exc:
        raise ValidationError(f"{key} is not an ISO-8601 instant: {value!r}") from exc


def _optional_period_type(value) -> Optional[PayPeriodType]:
    if not value:
        return None
    try:
        return PayPeriodType(str(value).lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown pay period type: {value!r}") from exc


def _optional_base_rate(value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("base_rate_cents must be an integer")
    if value < 0:
        raise ValidationError("base_rate_cents must not be negative")
    return value


def register(app: Flask, container: Container) -> None:
    @app.route("/api/periods/summary", methods=["POST"], endpoint="api_period_summary")
    def api_period_summary():
        try:
            data = _json_body()
            shifts = shifts_from_list(data.get("shifts", []))
            reference = data.get("reference_date")
            try:
                reference_date = parse_iso_date(str(reference)) if reference else None
            except ValueError as exc:
                raise ValidationError(f"reference_date must be YYYY-MM-DD: {reference!r}") from exc
            instant = _optional_instant(data, "instant")
            if instant is None:
                instant = container.resolver.calendar.now(shifts[0].scheduled_start if shifts else None)

            report = container.report_service_for(shifts).build_period_report(
                instant=instant,
                period_type=_optional_period_type(data.get("period_type")),
                reference_date=reference_date,
                base_rate_cents=_optional_base_rate(data.get("base_rate_cents")),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(report_to_dict(report)), 200

    @app.route("/api/shifts/validate", methods=["POST"], endpoint="api_validate_shifts")
    def api_validate_shifts():
        try:
            data = _json_body()
            items = data.get("shifts", [])
            if not isinstance(items, list):
                raise ValidationError("shifts must be a list")
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        errors = []
        parsed = []
        positions = []
        for index, item in enumerate(items):
            try:
                if not isinstance(item, dict):
                    raise ValidationError("shift must be an object")
                parsed.append(shift_from_dict(item))
                positions.append(index)
            except ValidationError as e:
                errors.append({"index": index, "error": type(e).__name__, "message": str(e)})

        found = validate_shifts(
            parsed,
            rate_upper_bound=container.settings.rate_valid_upper_bound,
            check_overlap=bool(data.get("check_overlap", False)),
        )
        errors.extend(
            {"index": positions[i], "error": type(e).__name__, "message": str(e)} for i, e in found
        )
        errors.sort(key=lambda item: item["index"])
        return jsonify({"valid": not errors, "errors": errors}), 200

    @app.route("/api/rates/<multiplier>", methods=["GET"], endpoint="api_rate_info")
    def api_rate_info(multiplier: str):
        try:
            value = float(multiplier)
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            return jsonify({"error": f"not a finite number: {multiplier!r}"}), 400

        upper_bound = container.settings.rate_valid_upper_bound
        return jsonify(
            {
                "multiplier": value,
                "label": rate_label(value),
                "known": known_label(value) is not None,
                "formatted": format_multiplier(value),
                "is_valid": is_valid_rate(value, upper_bound),
                "upper_bound": upper_bound,
            }
        ), 200
