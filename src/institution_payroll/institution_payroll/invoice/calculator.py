"""Invoice arithmetic: line discounts, GST split, TDS and balance due.

Tax amounts are accumulated from exact Decimal products and rounded to paise
once at the invoice level; line amounts are rounded first so the sub-total is
exactly the sum of the stored line amounts.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import ZERO, round_money, to_decimal
from ..core.enums import InvoiceStatus
from .model import GSTRates, InvoiceTotals, LineItem, LineItemInput

HUNDRED = Decimal("100")


def is_inter_state(from_state_code: Optional[str], to_state_code: Optional[str]) -> bool:
    return (from_state_code or "").strip() != (to_state_code or "").strip()


def line_discount(base: Decimal, item: LineItemInput) -> Decimal:
    """Percent or absolute discount, kept within [0, base]."""
    if item.discount_percent:
        discount = base * to_decimal(item.discount_percent) / HUNDRED
    else:
        discount = to_decimal(item.discount_amount)
    return min(max(discount, ZERO), max(base, ZERO))


def compute_line_item(item: LineItemInput, inter_state: bool, rates: GSTRates, display_order: int = 0) -> LineItem:
    """Tax-exclusive amount plus the per-line tax figures shown on the invoice."""
    base = to_decimal(item.quantity) * to_decimal(item.rate)
    discount = round_money(line_discount(base, item))
    amount = round_money(base - discount)

    if inter_state:
        taxes = dict(igst_rate=rates.igst_rate, igst_amount=round_money(amount * rates.igst_rate / HUNDRED))
    else:
        taxes = dict(
            cgst_rate=rates.cgst_rate,
            cgst_amount=round_money(amount * rates.cgst_rate / HUNDRED),
            sgst_rate=rates.sgst_rate,
            sgst_amount=round_money(amount * rates.sgst_rate / HUNDRED),
        )

    return LineItem(
        description=item.description,
        quantity=to_decimal(item.quantity),
        rate=to_decimal(item.rate),
        discount_amount=discount,
        amount=amount,
        display_order=display_order,
        discount_percent=item.discount_percent,
        hsn_sac_code=item.hsn_sac_code,
        unit=item.unit,
        **taxes,
    )


def compute_totals(
    line_items: Sequence[LineItemInput],
    from_state_code: Optional[str],
    to_state_code: Optional[str],
    *,
    discount_amount=ZERO,
    tds_rate=ZERO,
    rates: Optional[GSTRates] = None,
) -> InvoiceTotals:
    """Invoice-level totals.

    ``total = sub_total - discount + tax - tds``; the invoice discount does not
    reduce the tax base and is capped at the sub-total. TDS is withheld on the
    sub-total. Balance due starts equal to the total.
    """
    rates = rates or GSTRates()
    inter = is_inter_state(from_state_code, to_state_code)
    items = tuple(compute_line_item(item, inter, rates, i) for i, item in enumerate(line_items))

    sub_total = sum((li.amount for li in items), ZERO)
    if inter:
        igst = sum((li.amount * rates.igst_rate / HUNDRED for li in items), ZERO)
        cgst = sgst = ZERO
    else:
        cgst = sum((li.amount * rates.cgst_rate / HUNDRED for li in items), ZERO)
        sgst = sum((li.amount * rates.sgst_rate / HUNDRED for li in items), ZERO)
        igst = ZERO

    discount = min(max(ZERO, to_decimal(discount_amount)), max(ZERO, sub_total))
    tds_rate = to_decimal(tds_rate)
    tds = sub_total * tds_rate / HUNDRED
    total = round_money(sub_total - discount + cgst + sgst + igst - tds)

    return InvoiceTotals(
        line_items=items,
        is_inter_state=inter,
        sub_total=round_money(sub_total),
        discount_amount=round_money(discount),
        cgst_rate=ZERO if inter else rates.cgst_rate,
        cgst_amount=round_money(cgst),
        sgst_rate=ZERO if inter else rates.sgst_rate,
        sgst_amount=round_money(sgst),
        igst_rate=rates.igst_rate if inter else ZERO,
        igst_amount=round_money(igst),
        tds_rate=tds_rate,
        tds_amount=round_money(tds),
        total_amount=total,
        balance_due=total,
    )


def purchase_totals(line_items: Sequence[LineItemInput], total_amount=None) -> InvoiceTotals:
    """Vendor bills: no tax split, total is the stated total or the line sum."""
    items = tuple(
        LineItem(
            description=item.description,
            quantity=to_decimal(item.quantity),
            rate=to_decimal(item.rate),
            discount_amount=ZERO,
            amount=round_money(item.amount if item.amount is not None else to_decimal(item.quantity) * to_decimal(item.rate)),
            display_order=i,
        )
        for i, item in enumerate(line_items)
    )
    total = round_money(total_amount) if total_amount else sum((li.amount for li in items), round_money(ZERO))
    return InvoiceTotals(
        line_items=items,
        is_inter_state=False,
        sub_total=total,
        discount_amount=round_money(ZERO),
        cgst_rate=ZERO,
        cgst_amount=round_money(ZERO),
        sgst_rate=ZERO,
        sgst_amount=round_money(ZERO),
        igst_rate=ZERO,
        igst_amount=round_money(ZERO),
        tds_rate=ZERO,
        tds_amount=round_money(ZERO),
        total_amount=total,
        balance_due=total,
    )


def apply_payment(total_amount, balance_due, amount) -> tuple[Decimal, InvoiceStatus]:
    """New balance after a payment, never below zero, and the resulting status."""
    balance = round_money(max(ZERO, to_decimal(balance_due) - to_decimal(amount)))
    if balance == 0:
        return balance, InvoiceStatus.PAID
    if balance < to_decimal(total_amount):
        return balance, InvoiceStatus.PARTIALLY_PAID
    return balance, InvoiceStatus.ISSUED
