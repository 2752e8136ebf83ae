from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..attendance.model import MonthView
from ..attendance.service import AttendanceService
from ..common.datetime_utils import days_in_month
from ..core.exceptions import NotFoundError, StorageError
from ..core.logging_config import get_logger
from ..employees.model import Employee
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollConfig, Payout, Payslip, SalaryDetails, SalaryStructure, StatutoryInfo
from .repository import SalaryRepository
from .salary import resolve_salary_details

logger = get_logger(__name__)


@dataclass(frozen=True)
class MonthlyPayroll:
    month_view: MonthView
    details: SalaryDetails
    payout: Payout


class PayrollService:
    def __init__(
        self,
        salaries: SalaryRepository,
        attendance: AttendanceService,
        *,
        calculator: Optional[PayrollCalculator] = None,
        defaults: Optional[PayrollConfig] = None,
    ):
        self._salaries = salaries
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()
        self._defaults = defaults or PayrollConfig()

    def payroll_config(self) -> PayrollConfig:
        """Stored company config over deployment defaults; defaults when unreadable."""
        try:
            return self._salaries.get_payroll_config(self._defaults)
        except StorageError:
            logger.exception("payroll config unavailable, using defaults")
            return self._defaults

    def salary_details(self, employee: Employee) -> SalaryDetails:
        row = self._salaries.get_salary_row(employee)
        if row is None:
            raise NotFoundError("Employee salary record not found")
        return resolve_salary_details(employee.employee_type, row, self.payroll_config())

    def update_salary(
        self,
        employee: Employee,
        structure: SalaryStructure,
        statutory: StatutoryInfo,
        *,
        designation: Optional[str] = None,
    ) -> None:
        self._salaries.save_salary(employee, structure, statutory, designation=designation)
        logger.info("salary structure updated for %s", employee.id)

    def monthly_payout(
        self,
        employee: Employee,
        year: int,
        month: int,
        *,
        manual_overtime_pay: Optional[Decimal] = None,
        today: Optional[date] = None,
    ) -> MonthlyPayroll:
        details = self.salary_details(employee)
        view = self._attendance.build_month(employee, year, month, today=today)
        payout = self._calculator.compute_payout(
            view.stats,
            details.structure,
            days_in_month(year, month),
            hourly_rate=details.hourly_rate,
            overtime_multiplier=details.overtime_multiplier,
            manual_overtime_pay=manual_overtime_pay,
        )
        return MonthlyPayroll(month_view=view, details=details, payout=payout)

    def payslip(
        self,
        employee: Employee,
        year: int,
        month: int,
        *,
        manual_overtime_pay: Optional[Decimal] = None,
        today: Optional[date] = None,
    ) -> Payslip:
        result = self.monthly_payout(employee, year, month, manual_overtime_pay=manual_overtime_pay, today=today)
        return self._calculator.compute_payslip(
            employee, year, month, result.month_view.stats, result.details, result.payout
        )
