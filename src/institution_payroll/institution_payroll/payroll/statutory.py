"""Statutory deductions: provident fund, employee state insurance, professional tax."""

from __future__ import annotations

from decimal import Decimal

from ..common.money import ZERO, round_money, to_decimal
from ..core.constants import ESI_GROSS_CEILING, ESI_RATE, PF_RATE, PF_WAGE_CEILING

FEBRUARY = 2


def pf_deduction(basic_pay) -> Decimal:
    """Employee PF share on basic pay, capped at the statutory wage ceiling."""
    basic = max(ZERO, to_decimal(basic_pay))
    return round_money(min(basic, PF_WAGE_CEILING) * PF_RATE)


def esi_deduction(gross) -> Decimal:
    gross = to_decimal(gross)
    if gross <= 0 or gross > ESI_GROSS_CEILING:
        return round_money(ZERO)
    return round_money(gross * ESI_RATE)


def _maharashtra(gross: Decimal, month: int) -> Decimal:
    if gross <= 7500:
        return ZERO
    if gross <= 10000:
        return Decimal("175")
    return Decimal("300") if month == FEBRUARY else Decimal("200")


def _karnataka(gross: Decimal, month: int) -> Decimal:
    return ZERO if gross < 25000 else Decimal("200")


def _other(gross: Decimal, month: int) -> Decimal:
    return Decimal("200") if gross > 10000 else ZERO


_PT_SLABS = {
    "maharashtra": _maharashtra,
    "karnataka": _karnataka,
}


def professional_tax(gross, state: str, month: int = 1) -> Decimal:
    """Monthly professional tax by state slab; unknown states use a flat slab."""
    slab = _PT_SLABS.get((state or "").strip().lower(), _other)
    return round_money(slab(to_decimal(gross), month))
