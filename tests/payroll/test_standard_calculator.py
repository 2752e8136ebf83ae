from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from institution_payroll.attendance.aggregator import aggregate
from institution_payroll.core.enums import EmployeeType
from institution_payroll.employees.model import Employee
from institution_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from institution_payroll.payroll.model import PayrollConfig
from institution_payroll.payroll.salary import resolve_salary_details

EMPLOYEE = Employee(id="o1", user_id="u-o1", name="Asha Rao", employee_type=EmployeeType.OFFICER, employee_code="OFF-001")
DETAILS = resolve_salary_details(EmployeeType.OFFICER, {"annual_salary": 360000}, PayrollConfig())


def _stats(**overrides):
    return replace(aggregate([], 30), **overrides)


def test_payout_deducts_lop_and_adds_approved_overtime():
    payout = StandardPayrollCalculator().compute_payout(
        _stats(total_lop_days=3, approved_overtime=Decimal("2")),
        DETAILS.structure,
        30,
        hourly_rate=Decimal("200"),
        overtime_multiplier=Decimal("1.5"),
    )

    assert payout.per_day_salary == Decimal("1000.00")
    assert payout.lop_deduction == Decimal("3000.00")
    assert payout.overtime_pay == Decimal("600.00")
    assert payout.net_payout == Decimal("27600.00")


def test_manual_overtime_pay_overrides_computed():
    payout = StandardPayrollCalculator().compute_payout(
        _stats(approved_overtime=Decimal("2")),
        DETAILS.structure,
        30,
        hourly_rate=Decimal("200"),
        overtime_multiplier=Decimal("1.5"),
        manual_overtime_pay=Decimal("1000"),
    )

    assert payout.overtime_pay == Decimal("1000.00")
    assert payout.net_payout == Decimal("31000.00")


def test_zero_day_month_never_divides():
    payout = StandardPayrollCalculator().compute_payout(
        _stats(total_lop_days=2),
        DETAILS.structure,
        0,
        hourly_rate=Decimal("0"),
        overtime_multiplier=Decimal("1.5"),
    )

    assert payout.per_day_salary == Decimal("0.00")
    assert payout.lop_deduction == Decimal("0.00")
    assert payout.net_payout == Decimal("30000.00")


def test_payslip_net_is_payout_minus_statutory_deductions():
    calc = StandardPayrollCalculator()
    stats = _stats(total_lop_days=3, present_days=18)
    payout = calc.compute_payout(
        stats, DETAILS.structure, 30, hourly_rate=DETAILS.hourly_rate, overtime_multiplier=DETAILS.overtime_multiplier
    )

    slip = calc.compute_payslip(EMPLOYEE, 2025, 6, stats, DETAILS, payout)

    assert slip.gross_earnings == Decimal("30000.00")
    assert (slip.pf_deduction, slip.esi, slip.professional_tax) == (
        Decimal("1440.00"),
        Decimal("0.00"),
        Decimal("200.00"),
    )
    assert slip.total_deductions == Decimal("4640.00")
    assert slip.net_pay == Decimal("25360.00")
    assert slip.net_pay == payout.net_payout - slip.pf_deduction - slip.esi - slip.professional_tax
    assert slip.designation == "Officer"
    assert slip.attendance["days_lop"] == 3
