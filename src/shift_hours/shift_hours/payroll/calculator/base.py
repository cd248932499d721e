from __future__ import annotations

from abc import ABC, abstractmethod

from ...shifts.model import ShiftRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def paid_minutes(self, shift: ShiftRecord) -> int:
        raise NotImplementedError

    @abstractmethod
    def premium_minutes(self, shift: ShiftRecord) -> int:
        raise NotImplementedError

    @abstractmethod
    def estimated_pay_cents(self, shift: ShiftRecord, base_rate_cents: int) -> int:
        raise NotImplementedError

    def overtime_minutes(self, shift: ShiftRecord) -> int:
        return self.premium_minutes(shift)
