from datetime import date
from types import SimpleNamespace

import pytest

from src.shift_hours.shift_hours.core.enums import PayPeriodType
from src.shift_hours.shift_hours.core.exceptions import ValidationError
from src.shift_hours.shift_hours.core.settings import EngineSettings


def test_defaults_from_empty_mapping():
    settings = EngineSettings.from_mapping({})

    assert settings.period_type == PayPeriodType.WEEKLY
    assert settings.reference_date is None
    assert settings.base_rate_cents is None
    assert settings.rate_valid_upper_bound == 10.0
    assert settings.week_start == 0
    assert settings.calendar.timezone is None
    assert settings.weekly_target_hours == 40.0


def test_from_module_reads_env_style_strings():
    module = SimpleNamespace(
        PERIOD_TYPE="Biweekly",
        REFERENCE_DATE="2024-01-01",
        BASE_RATE_CENTS="1500",
        RATE_VALID_UPPER_BOUND=5.0,
        WEEK_START=6,
        TIMEZONE="Europe/London",
        WEEKLY_TARGET_HOURS="37.5",
    )

    settings = EngineSettings.from_module(module)

    assert settings.period_type == PayPeriodType.BIWEEKLY
    assert settings.reference_date == date(2024, 1, 1)
    assert settings.base_rate_cents == 1500
    assert settings.rate_valid_upper_bound == 5.0
    assert settings.calendar.week_start == 6
    assert str(settings.calendar.timezone) == "Europe/London"
    assert settings.weekly_target_hours == 37.5


@pytest.mark.parametrize(
    "raw",
    [
        {"PERIOD_TYPE": "daily"},
        {"BASE_RATE_CENTS": "-5"},
        {"RATE_VALID_UPPER_BOUND": "-1"},
        {"WEEK_START": "7"},
        {"WEEKLY_TARGET_HOURS": "-40"},
    ],
)
def test_invalid_settings_raise(raw):
    with pytest.raises(ValidationError):
        EngineSettings.from_mapping(raw)


def test_unknown_timezone_raises_on_use():
    settings = EngineSettings.from_mapping({"TIMEZONE": "Mars/Olympus"})

    with pytest.raises(ValidationError):
        settings.calendar
