from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.money import ZERO, to_decimal
from ..core import constants


@dataclass(frozen=True)
class SalaryStructure:
    basic_pay: Decimal = ZERO
    hra: Decimal = ZERO
    conveyance_allowance: Decimal = ZERO
    medical_allowance: Decimal = ZERO
    special_allowance: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SalaryStructure":
        return cls(**{k: to_decimal(data.get(k)) for k in cls.__dataclass_fields__})

    def to_dict(self) -> dict:
        return {k: str(getattr(self, k)) for k in self.__dataclass_fields__}

    @property
    def total(self) -> Decimal:
        return self.basic_pay + self.hra + self.conveyance_allowance + self.medical_allowance + self.special_allowance


@dataclass(frozen=True)
class StatutoryInfo:
    pf_applicable: bool = True
    esi_applicable: bool = False
    pt_applicable: bool = True
    pt_state: str = constants.DEFAULT_PT_STATE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StatutoryInfo":
        return cls(
            pf_applicable=bool(data.get("pf_applicable", True)),
            esi_applicable=bool(data.get("esi_applicable", False)),
            pt_applicable=bool(data.get("pt_applicable", True)),
            pt_state=str(data.get("pt_state") or constants.DEFAULT_PT_STATE),
        )

    def to_dict(self) -> dict:
        return {
            "pf_applicable": self.pf_applicable,
            "esi_applicable": self.esi_applicable,
            "pt_applicable": self.pt_applicable,
            "pt_state": self.pt_state,
        }


@dataclass(frozen=True)
class PayrollConfig:
    """Company-wide payroll defaults, overridable per deployment."""

    basic_percentage: Decimal = constants.BASIC_PERCENTAGE
    hra_percentage: Decimal = constants.HRA_PERCENTAGE
    conveyance_allowance: Decimal = constants.CONVEYANCE_ALLOWANCE
    medical_allowance: Decimal = constants.MEDICAL_ALLOWANCE
    default_overtime_multiplier: Decimal = constants.DEFAULT_OVERTIME_MULTIPLIER
    standard_work_hours: Decimal = constants.STANDARD_WORK_HOURS
    working_days_per_month: int = constants.WORKING_DAYS_PER_MONTH
    staff_fallback_hourly_rate: Decimal = constants.STAFF_FALLBACK_HOURLY_RATE

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]], *, base: Optional["PayrollConfig"] = None) -> "PayrollConfig":
        """Overlay known keys from ``data`` on ``base``; unknown keys are ignored."""
        base = base or cls()
        values = {}
        for name in cls.__dataclass_fields__:
            current = getattr(base, name)
            raw = (data or {}).get(name)
            if raw is None:
                values[name] = current
            elif isinstance(current, int):
                values[name] = int(raw)
            else:
                values[name] = to_decimal(raw)
        return cls(**values)


@dataclass(frozen=True)
class SalaryDetails:
    annual_salary: Decimal
    monthly_salary: Decimal
    structure: SalaryStructure
    statutory: StatutoryInfo
    hourly_rate: Decimal
    overtime_multiplier: Decimal
    designation: Optional[str] = None


@dataclass(frozen=True)
class Payout:
    """Summary-card figures for one employee and month."""

    monthly_salary: Decimal
    days_in_month: int
    per_day_salary: Decimal
    total_lop_days: int
    lop_deduction: Decimal
    approved_overtime_hours: Decimal
    overtime_pay: Decimal
    net_payout: Decimal


@dataclass(frozen=True)
class Payslip:
    employee_name: str
    employee_code: str
    designation: str
    year: int
    month: int
    structure: SalaryStructure
    overtime_pay: Decimal
    pf_deduction: Decimal
    esi: Decimal
    professional_tax: Decimal
    lop_deduction: Decimal
    gross_earnings: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    tds: Decimal = ZERO
    # attendance figures printed on the slip
    attendance: dict = field(default_factory=dict)
