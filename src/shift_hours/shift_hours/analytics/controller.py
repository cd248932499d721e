from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..container import Container
from ..core.exceptions import ValidationError
from ..payroll.controller import summary_to_dict
from ..shifts.mapper import shifts_from_list
from .model import (
    BurnoutRiskAssessment,
    DashboardSnapshot,
    Insight,
    OvertimePrediction,
    PeriodForecast,
    ShiftPatterns,
)


def burnout_to_dict(burnout: BurnoutRiskAssessment) -> dict:
    return {
        "level": burnout.level.value,
        "score": burnout.score,
        "factors": [
            {"name": f.name, "severity": f.severity.name.lower(), "description": f.description}
            for f in burnout.factors
        ],
        "recommendations": list(burnout.recommendations),
    }


def insight_to_dict(insight: Insight) -> dict:
    return {
        "type": insight.type.value,
        "title": insight.title,
        "message": insight.message,
        "priority": insight.priority.name.lower(),
        "action_label": insight.action_label,
    }


def patterns_to_dict(patterns: ShiftPatterns) -> dict:
    overtime = patterns.overtime
    preferences = patterns.preferences
    balance = patterns.balance
    return {
        "overtime": {
            "frequency": overtime.frequency,
            "average_hours_per_occurrence": overtime.average_hours_per_occurrence,
            "total_overtime_hours": overtime.total_overtime_hours,
            "most_common_weekday": overtime.most_common_weekday,
        },
        "preferences": {
            "morning": preferences.morning,
            "afternoon": preferences.afternoon,
            "evening": preferences.evening,
            "night": preferences.night,
            "preferred_slot": preferences.preferred_slot.value,
        },
        "work_life_balance": {
            "score": balance.score,
            "rating": balance.rating,
            "factors": [{"name": f.name, "impact": f.impact, "description": f.description} for f in balance.factors],
            "recommendations": list(balance.recommendations),
        },
        "consistency_score": patterns.consistency_score,
    }


def forecast_to_dict(forecast: PeriodForecast) -> dict:
    return {
        "current_hours": forecast.current_hours,
        "projected_hours": forecast.projected_hours,
        "target_hours": forecast.target_hours,
        "warning_level": forecast.warning_level.value,
        "warning_label": forecast.warning_level.display_name,
        "message": forecast.message,
        "days_remaining": forecast.days_remaining,
        "average_hours_per_day": forecast.average_hours_per_day,
        "recommended_daily_hours": forecast.recommended_daily_hours,
    }


def outlook_to_dict(outlook: OvertimePrediction) -> dict:
    return {
        "probability": outlook.probability,
        "predicted_hours": outlook.predicted_hours,
        "scheduled_hours": outlook.scheduled_hours,
        "has_overtime": outlook.has_overtime,
        "warnings": list(outlook.warnings),
    }


def snapshot_to_dict(snapshot: DashboardSnapshot) -> dict:
    weekly, monthly, yearly = snapshot.weekly, snapshot.monthly, snapshot.yearly
    return {
        "generated_at": snapshot.generated_at.isoformat(),
        "weekly": {
            "period_start": weekly.period_start.isoformat(),
            "period_end": weekly.period_end.isoformat(),
            "summary": summary_to_dict(weekly.summary),
            "compared_to_previous": weekly.compared_to_previous,
            "by_day": [{"weekday": d.weekday, "name": d.name, "hours": d.hours} for d in weekly.by_day],
        },
        "monthly": {
            "period_start": monthly.period_start.isoformat(),
            "period_end": monthly.period_end.isoformat(),
            "summary": summary_to_dict(monthly.summary),
            "overtime_hours": monthly.overtime_hours,
            "compared_to_previous": monthly.compared_to_previous,
            "by_week": [{"week_of_month": w.week_of_month, "hours": w.hours} for w in monthly.by_week],
        },
        "yearly": {
            "year": yearly.year,
            "summary": summary_to_dict(yearly.summary),
            "overtime_hours": yearly.overtime_hours,
            "compared_to_previous": yearly.compared_to_previous,
            "by_month": [{"month": m.month, "name": m.name, "hours": m.hours} for m in yearly.by_month],
        },
        "burnout": burnout_to_dict(snapshot.burnout),
        "insights": [insight_to_dict(i) for i in snapshot.insights],
        "patterns": patterns_to_dict(snapshot.patterns) if snapshot.patterns else None,
        "forecast": forecast_to_dict(snapshot.forecast) if snapshot.forecast else None,
        "overtime_outlook": outlook_to_dict(snapshot.overtime_outlook) if snapshot.overtime_outlook else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/analytics/dashboard", methods=["POST"], endpoint="api_analytics_dashboard")
    def api_analytics_dashboard():
        try:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ValidationError("request body must be a JSON object")
            shifts = shifts_from_list(data.get("shifts", []))

            now = data.get("now")
            try:
                now = parse_iso_datetime(str(now)) if now else None
            except ValueError as exc:
                raise ValidationError(f"now is not an ISO-8601 instant: {now!r}") from exc
            snapshot = container.analytics_engine.refresh(shifts, now)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(snapshot_to_dict(snapshot)), 200
