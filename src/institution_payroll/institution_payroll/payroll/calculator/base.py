from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from ...attendance.model import AttendanceStats
from ...employees.model import Employee
from ..model import Payout, Payslip, SalaryDetails, SalaryStructure


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute_payout(
        self,
        stats: AttendanceStats,
        structure: SalaryStructure,
        days_in_month: int,
        *,
        hourly_rate: Decimal,
        overtime_multiplier: Decimal,
        manual_overtime_pay: Optional[Decimal] = None,
    ) -> Payout:
        raise NotImplementedError

    @abstractmethod
    def compute_payslip(
        self,
        employee: Employee,
        year: int,
        month: int,
        stats: AttendanceStats,
        details: SalaryDetails,
        payout: Payout,
    ) -> Payslip:
        raise NotImplementedError
