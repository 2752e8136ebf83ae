from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.money import ZERO, round_money, to_decimal
from ..core.constants import ESI_GROSS_CEILING
from ..core.enums import EmployeeType
from .model import PayrollConfig, SalaryDetails, SalaryStructure, StatutoryInfo

MONTHS_PER_YEAR = Decimal("12")


def _json_object(value) -> Optional[dict]:
    """Stored JSON columns come back as dicts or strings depending on the driver."""
    if isinstance(value, (bytes, str)):
        value = json.loads(value) if value else None
    if isinstance(value, dict) and value:
        return value
    return None


def default_salary_structure(monthly_salary, config: PayrollConfig) -> SalaryStructure:
    """Split a monthly CTC into components when none is stored."""
    monthly = to_decimal(monthly_salary)
    basic = monthly * config.basic_percentage / 100
    hra = monthly * config.hra_percentage / 100
    special = monthly - basic - hra - config.conveyance_allowance - config.medical_allowance
    return SalaryStructure(
        basic_pay=round_money(basic),
        hra=round_money(hra),
        conveyance_allowance=config.conveyance_allowance,
        medical_allowance=config.medical_allowance,
        special_allowance=round_money(max(ZERO, special)),
    )


def default_statutory_info(monthly_salary) -> StatutoryInfo:
    return StatutoryInfo(
        pf_applicable=True,
        esi_applicable=to_decimal(monthly_salary) <= ESI_GROSS_CEILING,
        pt_applicable=True,
    )


def resolve_salary_details(employee_type: EmployeeType, row: Mapping[str, Any], config: PayrollConfig) -> SalaryDetails:
    """Salary figures for an officer or staff row, filling gaps from config.

    Officers are paid from annual CTC. Staff may only carry an hourly rate, in
    which case the annual figure is derived from a standard month.
    """
    stored_hourly = to_decimal(row.get("hourly_rate"))
    hours_per_month = config.standard_work_hours * config.working_days_per_month

    if employee_type == EmployeeType.OFFICER:
        annual = to_decimal(row.get("annual_salary"))
        monthly = annual / MONTHS_PER_YEAR
        hourly = stored_hourly or (monthly / hours_per_month if hours_per_month else ZERO)
    else:
        hourly = stored_hourly or config.staff_fallback_hourly_rate
        annual = to_decimal(row.get("annual_salary")) or hourly * hours_per_month * MONTHS_PER_YEAR
        monthly = annual / MONTHS_PER_YEAR

    stored_structure = _json_object(row.get("salary_structure"))
    structure = (
        SalaryStructure.from_dict(stored_structure)
        if stored_structure
        else default_salary_structure(monthly, config)
    )

    stored_statutory = _json_object(row.get("statutory_info"))
    statutory = StatutoryInfo.from_dict(stored_statutory) if stored_statutory else default_statutory_info(monthly)

    return SalaryDetails(
        annual_salary=annual,
        monthly_salary=monthly,
        structure=structure,
        statutory=statutory,
        hourly_rate=hourly,
        overtime_multiplier=to_decimal(row.get("overtime_rate_multiplier")) or config.default_overtime_multiplier,
        designation=row.get("designation"),
    )
