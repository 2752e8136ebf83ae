from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.money import amount_in_words, to_decimal
from ..common.validators import require_non_empty, require_non_negative
from ..core.enums import InvoiceStatus, InvoiceType
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging_config import get_logger
from .calculator import apply_payment, compute_totals, purchase_totals
from .model import CreateInvoiceInput, Invoice, InvoiceTotals
from .repository import InvoiceRepository

logger = get_logger(__name__)


class InvoiceService:
    def __init__(self, invoices: InvoiceRepository):
        self._invoices = invoices

    def _validate(self, data: CreateInvoiceInput) -> str:
        number = require_non_empty(data.invoice_number, "Invoice number")
        if not data.line_items:
            raise ValidationError("At least one line item is required")
        for item in data.line_items:
            require_non_negative(to_decimal(item.quantity), "Quantity")
            require_non_negative(to_decimal(item.rate), "Rate")
            base = to_decimal(item.quantity) * to_decimal(item.rate)
            percent = to_decimal(item.discount_percent) if item.discount_percent is not None else None
            if percent is not None and not (0 <= percent <= 100):
                raise ValidationError("Line discount percent must be between 0 and 100")
            amount = require_non_negative(to_decimal(item.discount_amount), "Line discount")
            if not percent and amount > base:
                raise ValidationError(f"Line discount exceeds the amount of '{item.description}'")
        if self._invoices.number_exists(number):
            raise ValidationError(f"Invoice number {number} already exists")
        return number

    @staticmethod
    def _header(number: str, data: CreateInvoiceInput, invoice_type: InvoiceType, totals: InvoiceTotals) -> dict:
        return {
            **data.extra,
            "invoice_number": number,
            "invoice_type": invoice_type.value,
            "from_company_name": data.from_company_name,
            "from_company_state_code": data.from_company_state_code,
            "to_company_name": data.to_company_name,
            "to_company_state_code": data.to_company_state_code,
            "invoice_date": data.invoice_date,
            "due_date": data.due_date,
            "reference_number": data.reference_number,
            "notes": data.notes,
            "institution_id": data.institution_id,
            "created_by": data.created_by,
            "sub_total": totals.sub_total,
            "discount_amount": totals.discount_amount,
            "cgst_rate": totals.cgst_rate,
            "cgst_amount": totals.cgst_amount,
            "sgst_rate": totals.sgst_rate,
            "sgst_amount": totals.sgst_amount,
            "igst_rate": totals.igst_rate,
            "igst_amount": totals.igst_amount,
            "tds_rate": totals.tds_rate,
            "tds_amount": totals.tds_amount,
            "total_amount": totals.total_amount,
            "balance_due": totals.balance_due,
            "total_in_words": amount_in_words(totals.total_amount),
            "status": InvoiceStatus.DRAFT.value,
        }

    def create_invoice(self, data: CreateInvoiceInput) -> Invoice:
        number = self._validate(data)
        require_non_negative(to_decimal(data.discount_amount), "Discount")
        tds_rate = to_decimal(data.tds_rate)
        if not (0 <= tds_rate <= 100):
            raise ValidationError("TDS rate must be between 0 and 100")

        totals = compute_totals(
            data.line_items,
            data.from_company_state_code,
            data.to_company_state_code,
            discount_amount=data.discount_amount,
            tds_rate=tds_rate,
            rates=self._invoices.gst_rates(),
        )
        invoice = self._invoices.create(self._header(number, data, data.invoice_type, totals), totals.line_items)
        logger.info("invoice %s created, total %s", number, totals.total_amount)
        return invoice

    def create_purchase_invoice(self, data: CreateInvoiceInput) -> Invoice:
        number = self._validate(data)
        totals = purchase_totals(data.line_items, data.total_amount)
        invoice = self._invoices.create(self._header(number, data, InvoiceType.PURCHASE, totals), totals.line_items)
        logger.info("purchase invoice %s recorded, total %s", number, totals.total_amount)
        return invoice

    def get_invoice(self, invoice_id: str) -> Invoice:
        invoice = self._invoices.get(invoice_id)
        if not invoice:
            raise NotFoundError("Invoice not found")
        return invoice

    def list_invoices(
        self,
        *,
        invoice_type: Optional[InvoiceType] = None,
        status: Optional[InvoiceStatus] = None,
        institution_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Invoice]:
        return self._invoices.list(
            invoice_type=invoice_type, status=status, institution_id=institution_id, start=start, end=end
        )

    def record_payment(self, invoice_id: str, amount: Decimal, *, paid_date: Optional[date] = None) -> Invoice:
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError("Payment amount must be positive")

        invoice = self.get_invoice(invoice_id)
        if invoice.status == InvoiceStatus.CANCELLED:
            raise ValidationError("Cannot record a payment on a cancelled invoice")

        balance, status = apply_payment(invoice.total_amount, invoice.balance_due, amount)
        patch = {"balance_due": balance, "status": status.value}
        if status == InvoiceStatus.PAID:
            patch["paid_date"] = paid_date or now_local().date()
        self._invoices.update(invoice_id, patch)
        return self.get_invoice(invoice_id)

    def update_status(self, invoice_id: str, status: InvoiceStatus, *, paid_date: Optional[date] = None) -> None:
        self.get_invoice(invoice_id)
        patch: dict = {"status": status.value}
        if status == InvoiceStatus.PAID and paid_date:
            patch["paid_date"] = paid_date
        self._invoices.update(invoice_id, patch)

    def delete_invoice(self, invoice_id: str) -> None:
        """Only drafts can be deleted."""
        invoice = self.get_invoice(invoice_id)
        if invoice.status != InvoiceStatus.DRAFT or not self._invoices.delete_draft(invoice_id):
            raise ValidationError("Only draft invoices can be deleted")
