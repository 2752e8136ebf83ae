from __future__ import annotations

from decimal import Decimal

from institution_payroll.common.money import amount_in_words
from institution_payroll.core.enums import InvoiceStatus
from institution_payroll.invoice.calculator import (
    apply_payment,
    compute_totals,
    is_inter_state,
    purchase_totals,
)
from institution_payroll.invoice.model import LineItemInput

ITEMS = (
    LineItemInput(description="Training sessions", quantity=Decimal("2"), rate=Decimal("1000")),
    LineItemInput(description="Kits", quantity=Decimal("1"), rate=Decimal("500"), discount_percent=Decimal("10")),
)


def test_state_codes_decide_inter_state():
    assert is_inter_state("27", "29") is True
    assert is_inter_state("27", " 27 ") is False
    assert is_inter_state(None, None) is False


def test_intra_state_totals_split_cgst_and_sgst():
    totals = compute_totals(ITEMS, "27", "27", discount_amount=Decimal("100"), tds_rate=Decimal("2"))

    assert [li.amount for li in totals.line_items] == [Decimal("2000.00"), Decimal("450.00")]
    assert totals.line_items[1].discount_amount == Decimal("50.00")
    assert totals.sub_total == Decimal("2450.00")
    assert (totals.cgst_amount, totals.sgst_amount, totals.igst_amount) == (
        Decimal("220.50"),
        Decimal("220.50"),
        Decimal("0.00"),
    )
    assert totals.tds_amount == Decimal("49.00")
    # 2450 - 100 + 441 - 49
    assert totals.total_amount == Decimal("2742.00")
    assert totals.balance_due == totals.total_amount


def test_inter_state_totals_use_igst():
    totals = compute_totals(ITEMS, "27", "29")

    assert totals.is_inter_state is True
    assert (totals.cgst_amount, totals.sgst_amount) == (Decimal("0.00"), Decimal("0.00"))
    assert totals.igst_amount == Decimal("441.00")
    assert totals.total_amount == Decimal("2891.00")


def test_tax_is_rounded_once_at_invoice_level():
    items = [LineItemInput(description=f"Item {i}", quantity=Decimal("1"), rate=Decimal("0.05")) for i in range(3)]

    totals = compute_totals(items, "27", "27")

    # each line rounds to 0.00 but 3 x 0.0045 = 0.0135
    assert all(li.cgst_amount == Decimal("0.00") for li in totals.line_items)
    assert totals.cgst_amount == Decimal("0.01")


def test_discount_is_capped_at_sub_total():
    totals = compute_totals(ITEMS[:1], "27", "27", discount_amount=Decimal("5000"))

    assert totals.discount_amount == Decimal("2000.00")
    assert totals.total_amount == Decimal("360.00")


def test_line_discount_never_exceeds_the_line_base():
    oversized = LineItemInput(description="x", quantity=Decimal("1"), rate=Decimal("100"), discount_amount=Decimal("150"))
    over_percent = LineItemInput(description="y", quantity=Decimal("1"), rate=Decimal("100"), discount_percent=Decimal("120"))

    for item in (oversized, over_percent):
        totals = compute_totals([item], "29", "29")
        assert totals.line_items[0].amount == Decimal("0.00")
        assert (totals.sub_total, totals.cgst_amount, totals.total_amount) == (Decimal("0.00"), Decimal("0.00"), Decimal("0.00"))


def test_purchase_totals_prefer_stated_total():
    items = [LineItemInput(description="Chairs", quantity=Decimal("4"), rate=Decimal("250"))]

    assert purchase_totals(items).total_amount == Decimal("1000.00")
    assert purchase_totals(items, Decimal("1180")).total_amount == Decimal("1180.00")


def test_payments_move_status_and_never_go_negative():
    assert apply_payment(Decimal("1000"), Decimal("1000"), Decimal("400")) == (
        Decimal("600.00"),
        InvoiceStatus.PARTIALLY_PAID,
    )
    assert apply_payment(Decimal("1000"), Decimal("600"), Decimal("600")) == (Decimal("0.00"), InvoiceStatus.PAID)
    assert apply_payment(Decimal("1000"), Decimal("600"), Decimal("900")) == (Decimal("0.00"), InvoiceStatus.PAID)


def test_amount_in_words_uses_indian_numbering():
    assert amount_in_words(Decimal("125000.50")) == "Indian Rupee One Lakh Twenty Five Thousand and Fifty Paise Only"
    assert amount_in_words(Decimal("0")) == "Indian Rupee Zero Only"
    assert amount_in_words(Decimal("10000000")) == "Indian Rupee One Crore Only"
