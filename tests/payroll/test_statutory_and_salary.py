from __future__ import annotations

import json
from decimal import Decimal

from institution_payroll.core.enums import EmployeeType
from institution_payroll.payroll.model import PayrollConfig
from institution_payroll.payroll.salary import resolve_salary_details
from institution_payroll.payroll.statutory import (
    esi_deduction,
    pf_deduction,
    professional_tax,
)


def test_pf_is_twelve_percent_of_capped_basic():
    assert pf_deduction(Decimal("12000")) == Decimal("1440.00")
    assert pf_deduction(Decimal("40000")) == Decimal("1800.00")
    assert pf_deduction(Decimal("-5")) == Decimal("0.00")


def test_esi_applies_only_up_to_ceiling():
    assert esi_deduction(Decimal("20000")) == Decimal("150.00")
    assert esi_deduction(Decimal("21000")) == Decimal("157.50")
    assert esi_deduction(Decimal("21000.01")) == Decimal("0.00")


def test_maharashtra_slabs_with_february_surcharge():
    assert professional_tax(Decimal("7500"), "Maharashtra", 6) == Decimal("0.00")
    assert professional_tax(Decimal("9000"), "maharashtra", 6) == Decimal("175.00")
    assert professional_tax(Decimal("30000"), "maharashtra", 6) == Decimal("200.00")
    assert professional_tax(Decimal("30000"), "maharashtra", 2) == Decimal("300.00")


def test_karnataka_and_other_states():
    assert professional_tax(Decimal("24999"), "karnataka", 6) == Decimal("0.00")
    assert professional_tax(Decimal("25000"), "karnataka", 6) == Decimal("200.00")
    assert professional_tax(Decimal("10000"), "goa", 6) == Decimal("0.00")
    assert professional_tax(Decimal("10001"), "", 6) == Decimal("200.00")


def test_officer_structure_is_derived_from_annual_salary():
    details = resolve_salary_details(EmployeeType.OFFICER, {"annual_salary": 360000}, PayrollConfig())

    assert details.monthly_salary == Decimal("30000")
    s = details.structure
    assert (s.basic_pay, s.hra, s.special_allowance) == (Decimal("12000.00"), Decimal("6000.00"), Decimal("9150.00"))
    assert s.total == Decimal("30000.00")
    assert details.statutory.esi_applicable is False
    assert details.overtime_multiplier == Decimal("1.5")


def test_stored_structure_and_statutory_win():
    row = {
        "annual_salary": "240000",
        "salary_structure": json.dumps({"basic_pay": "10000", "hra": "5000", "special_allowance": "5000"}),
        "statutory_info": {"pf_applicable": False, "esi_applicable": True, "pt_state": "karnataka"},
        "overtime_rate_multiplier": "2",
    }

    details = resolve_salary_details(EmployeeType.OFFICER, row, PayrollConfig())

    assert details.structure.total == Decimal("20000")
    assert details.statutory.pf_applicable is False
    assert details.statutory.pt_state == "karnataka"
    assert details.overtime_multiplier == Decimal("2")


def test_staff_without_salary_uses_hourly_rate():
    config = PayrollConfig.from_dict({"staff_fallback_hourly_rate": "100"})

    details = resolve_salary_details(EmployeeType.STAFF, {}, config)

    # 100/h x 8h x 22 days
    assert details.hourly_rate == Decimal("100")
    assert details.monthly_salary == Decimal("17600")


def test_payroll_config_overlays_known_keys_only():
    base = PayrollConfig.from_dict({"working_days_per_month": "26"})

    merged = PayrollConfig.from_dict({"basic_percentage": 50, "unknown": 1}, base=base)

    assert merged.basic_percentage == Decimal("50")
    assert merged.working_days_per_month == 26
    assert merged.hra_percentage == Decimal("20")
