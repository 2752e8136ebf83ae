from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...attendance.model import AttendanceStats
from ...common.money import ZERO, round_money, to_decimal
from ...employees.model import Employee
from ..model import Payout, Payslip, SalaryDetails, SalaryStructure
from ..statutory import esi_deduction, pf_deduction, professional_tax
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: salary components minus LOP days, plus overtime.

    Monthly salary is the sum of the structure components, so the summary
    ``net_payout`` equals payslip gross earnings minus the LOP deduction and
    the payslip ``net_pay`` only differs by the statutory deductions.
    """

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
        monthly = structure.total
        per_day = monthly / days_in_month if days_in_month > 0 else ZERO
        lop_days = max(0, int(stats.total_lop_days))
        lop = per_day * lop_days

        approved_hours = to_decimal(stats.approved_overtime)
        if manual_overtime_pay is not None:
            overtime_pay = to_decimal(manual_overtime_pay)
        else:
            overtime_pay = approved_hours * to_decimal(hourly_rate) * to_decimal(overtime_multiplier)

        return Payout(
            monthly_salary=round_money(monthly),
            days_in_month=days_in_month,
            per_day_salary=round_money(per_day),
            total_lop_days=lop_days,
            lop_deduction=round_money(lop),
            approved_overtime_hours=approved_hours,
            overtime_pay=round_money(overtime_pay),
            net_payout=round_money(monthly - lop + overtime_pay),
        )

    def compute_payslip(
        self,
        employee: Employee,
        year: int,
        month: int,
        stats: AttendanceStats,
        details: SalaryDetails,
        payout: Payout,
    ) -> Payslip:
        ss = details.structure
        si = details.statutory

        pf = pf_deduction(ss.basic_pay) if si.pf_applicable else round_money(ZERO)
        esi = esi_deduction(payout.monthly_salary) if si.esi_applicable else round_money(ZERO)
        pt = professional_tax(payout.monthly_salary, si.pt_state, month) if si.pt_applicable else round_money(ZERO)

        gross = round_money(payout.monthly_salary + payout.overtime_pay)
        deductions = round_money(payout.lop_deduction + pf + esi + pt)

        return Payslip(
            employee_name=employee.name,
            employee_code=employee.employee_code,
            designation=details.designation or employee.designation or ("Officer" if employee.is_officer else "Staff"),
            year=year,
            month=month,
            structure=ss,
            overtime_pay=payout.overtime_pay,
            pf_deduction=pf,
            esi=esi,
            professional_tax=pt,
            lop_deduction=payout.lop_deduction,
            gross_earnings=gross,
            total_deductions=deductions,
            net_pay=gross - deductions,
            attendance={
                "working_days": stats.working_days,
                "days_present": stats.present_days,
                "days_leave": stats.leave_days,
                "paid_leave_days": stats.paid_leave_days,
                "lop_leave_days": stats.lop_leave_days,
                "unmarked_days": stats.unmarked_days,
                "days_lop": stats.total_lop_days,
                "late_days": stats.late_days,
                "overtime_hours": stats.approved_overtime,
                "total_hours_worked": stats.total_hours,
            },
        )
