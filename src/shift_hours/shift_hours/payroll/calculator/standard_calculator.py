from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from .base import PayrollCalculator
from ...core.constants import MINUTES_PER_HOUR
from ...shifts.model import ShiftRecord
from ...timecalc.arithmetic import elapsed_minutes


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: (end - start) - break_minutes, not below 0.

    Premium is all-or-nothing per shift: every paid minute of a shift with a
    multiplier above 1.0 is premium.
    """

    def paid_minutes(self, shift: ShiftRecord) -> int:
        minutes = elapsed_minutes(shift.effective_start, shift.effective_end)
        minutes -= max(0, int(shift.break_minutes or 0))
        return max(minutes, 0)

    def premium_minutes(self, shift: ShiftRecord) -> int:
        if shift.has_premium_pay:
            return self.paid_minutes(shift)
        return 0

    def estimated_pay_cents(self, shift: ShiftRecord, base_rate_cents: int) -> int:
        # non-finite or non-positive multipliers price at 0
        if not math.isfinite(shift.rate_multiplier) or shift.rate_multiplier <= 0:
            return 0
        amount = (
            Decimal(self.paid_minutes(shift))
            * Decimal(int(base_rate_cents))
            * Decimal(str(shift.rate_multiplier))
            / MINUTES_PER_HOUR
        )
        return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def overtime_minutes(self, shift: ShiftRecord) -> int:
        """Minutes counted as overtime for reporting.

        Premium or additional shifts count entirely; otherwise only the
        actual overrun beyond the scheduled duration of a completed shift.
        """
        if shift.is_cancelled:
            return 0
        paid = self.paid_minutes(shift)
        if shift.has_premium_pay or shift.is_additional_shift:
            return paid
        if shift.is_completed and shift.has_actual_times:
            scheduled = elapsed_minutes(shift.scheduled_start, shift.scheduled_end)
            actual = elapsed_minutes(shift.actual_start, shift.actual_end)
            return max(0, actual - scheduled)
        return 0
