"""Example: the service layer without Flask.

Builds the container from the active settings module and prints the current
week's report for a couple of hand-made shifts.
"""

import importlib
from datetime import datetime

from config import get_settings_module

from src.shift_hours.shift_hours.container import build_container
from src.shift_hours.shift_hours.core.enums import ShiftStatus
from src.shift_hours.shift_hours.core.settings import EngineSettings
from src.shift_hours.shift_hours.shifts.model import ShiftRecord


def main():
    settings = EngineSettings.from_module(importlib.import_module(get_settings_module()))
    container = build_container(settings)

    container.shifts_repo.add(
        ShiftRecord(
            scheduled_start=datetime(2024, 3, 4, 9, 0),
            scheduled_end=datetime(2024, 3, 4, 17, 0),
            break_minutes=30,
            status=ShiftStatus.COMPLETED,
        )
    )
    container.shifts_repo.add(
        ShiftRecord(
            scheduled_start=datetime(2024, 3, 5, 22, 0),
            scheduled_end=datetime(2024, 3, 6, 6, 0),
            rate_multiplier=1.5,
            status=ShiftStatus.COMPLETED,
        )
    )

    report = container.payroll_report_service.build_period_report(instant=datetime(2024, 3, 6, 12, 0))
    print(report.period.label, report.actual.total_hours, report.actual.premium_hours)


if __name__ == "__main__":
    main()
