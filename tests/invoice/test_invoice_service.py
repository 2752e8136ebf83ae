from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from institution_payroll.container import build_container_from_store
from institution_payroll.core.enums import InvoiceStatus, InvoiceType
from institution_payroll.core.exceptions import NotFoundError, ValidationError
from institution_payroll.invoice.model import CreateInvoiceInput, LineItemInput


def _input(number="INV-001", **overrides):
    values = dict(
        invoice_number=number,
        invoice_date=date(2025, 6, 5),
        from_company_name="Acme Learning",
        from_company_state_code="27",
        to_company_name="City School",
        to_company_state_code="27",
        line_items=(LineItemInput(description="Workshop", quantity=Decimal("1"), rate=Decimal("10000")),),
        extra={"to_company_gstin": "27ABCDE1234F1Z5"},
    )
    values.update(overrides)
    return CreateInvoiceInput(**values)


def test_create_invoice_persists_header_and_lines(container, store):
    invoice = container.invoice_service.create_invoice(_input())

    assert invoice.status == InvoiceStatus.DRAFT
    assert invoice.total_amount == Decimal("11800.00")
    assert invoice.total_in_words == "Indian Rupee Eleven Thousand Eight Hundred Only"
    assert len(invoice.line_items) == 1
    header = store.rows("invoices")[0]
    assert header["to_company_gstin"] == "27ABCDE1234F1Z5"
    assert len(store.rows("invoice_line_items", invoice_id=invoice.id)) == 1


def test_company_profile_rates_are_used(container, store):
    store.insert("company_profiles", [{"company_name": "Acme", "is_default": True, "default_cgst_rate": 6, "default_sgst_rate": 6}])

    invoice = container.invoice_service.create_invoice(_input())

    assert (invoice.cgst_amount, invoice.sgst_amount) == (Decimal("600.00"), Decimal("600.00"))


def test_configured_rates_apply_without_company_profile(store):
    container = build_container_from_store(store, payroll={"cgst_rate": "2.5", "sgst_rate": "2.5", "igst_rate": "5"})

    invoice = container.invoice_service.create_invoice(_input(to_company_state_code="29"))

    assert invoice.igst_amount == Decimal("500.00")
    assert invoice.total_amount == Decimal("10500.00")


def test_invoice_number_must_be_unique(container):
    container.invoice_service.create_invoice(_input())

    with pytest.raises(ValidationError):
        container.invoice_service.create_invoice(_input())


@pytest.mark.parametrize(
    "overrides",
    [
        {"invoice_number": " "},
        {"line_items": ()},
        {"line_items": (LineItemInput(description="x", quantity=Decimal("-1"), rate=Decimal("10")),)},
        {"tds_rate": Decimal("101")},
        {"discount_amount": Decimal("-1")},
        {"line_items": (LineItemInput(description="x", quantity=Decimal("1"), rate=Decimal("100"), discount_amount=Decimal("150")),)},
        {"line_items": (LineItemInput(description="x", quantity=Decimal("1"), rate=Decimal("100"), discount_percent=Decimal("101")),)},
        {"line_items": (LineItemInput(description="x", quantity=Decimal("1"), rate=Decimal("100"), discount_amount=Decimal("-5")),)},
    ],
)
def test_invalid_invoices_are_rejected(container, overrides):
    with pytest.raises(ValidationError):
        container.invoice_service.create_invoice(_input(**overrides))


def test_purchase_invoice_uses_vendor_total(container):
    invoice = container.invoice_service.create_purchase_invoice(
        _input(number="BILL-9", total_amount=Decimal("10500"))
    )

    assert invoice.invoice_type == InvoiceType.PURCHASE
    assert invoice.total_amount == Decimal("10500.00")
    assert invoice.cgst_amount == Decimal("0.00")


def test_payments_update_balance_and_status(container, store):
    invoice = container.invoice_service.create_invoice(_input())

    partial = container.invoice_service.record_payment(invoice.id, Decimal("5000"))
    assert (partial.balance_due, partial.status) == (Decimal("6800.00"), InvoiceStatus.PARTIALLY_PAID)

    paid = container.invoice_service.record_payment(invoice.id, Decimal("6800"), paid_date=date(2025, 7, 1))
    assert (paid.balance_due, paid.status, paid.paid_date) == (Decimal("0.00"), InvoiceStatus.PAID, date(2025, 7, 1))


def test_payment_rules(container):
    invoice = container.invoice_service.create_invoice(_input())

    with pytest.raises(ValidationError):
        container.invoice_service.record_payment(invoice.id, Decimal("0"))

    container.invoice_service.update_status(invoice.id, InvoiceStatus.CANCELLED)
    with pytest.raises(ValidationError):
        container.invoice_service.record_payment(invoice.id, Decimal("10"))

    with pytest.raises(NotFoundError):
        container.invoice_service.record_payment("missing", Decimal("10"))


def test_list_filters_by_type_status_and_date(container):
    container.invoice_service.create_invoice(_input("INV-1", invoice_date=date(2025, 5, 30)))
    container.invoice_service.create_invoice(_input("INV-2"))
    container.invoice_service.create_purchase_invoice(_input("BILL-1"))

    sales = container.invoice_service.list_invoices(invoice_type=InvoiceType.SALES)
    june = container.invoice_service.list_invoices(start=date(2025, 6, 1), end=date(2025, 6, 30))

    assert [i.invoice_number for i in sales] == ["INV-1", "INV-2"]
    assert sorted(i.invoice_number for i in june) == ["BILL-1", "INV-2"]
    assert container.invoice_service.list_invoices(status=InvoiceStatus.PAID) == []


def test_only_drafts_can_be_deleted(container, store):
    draft = container.invoice_service.create_invoice(_input("INV-1"))
    issued = container.invoice_service.create_invoice(_input("INV-2"))
    container.invoice_service.update_status(issued.id, InvoiceStatus.ISSUED)

    container.invoice_service.delete_invoice(draft.id)

    assert not store.rows("invoices", id=draft.id)
    assert not store.rows("invoice_line_items", invoice_id=draft.id)
    with pytest.raises(ValidationError):
        container.invoice_service.delete_invoice(issued.id)
