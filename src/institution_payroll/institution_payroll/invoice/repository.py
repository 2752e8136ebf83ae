from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import as_date
from ..common.money import to_decimal
from ..core.enums import InvoiceStatus, InvoiceType
from ..database.record_store import DateRange, RecordStore
from .model import GSTRates, Invoice, LineItem

INVOICES = "invoices"
LINE_ITEMS = "invoice_line_items"
COMPANY_PROFILES = "company_profiles"


def _optional_date(value) -> Optional[date]:
    return as_date(value) if value else None


class InvoiceRepository:
    def __init__(self, store: RecordStore, *, default_rates: Optional[GSTRates] = None):
        self._store = store
        self._default_rates = default_rates or GSTRates()

    @staticmethod
    def _to_line_item(r: dict) -> LineItem:
        return LineItem(
            description=r.get("description") or "",
            quantity=to_decimal(r.get("quantity")),
            rate=to_decimal(r.get("rate")),
            discount_amount=to_decimal(r.get("discount_amount")),
            amount=to_decimal(r.get("amount")),
            cgst_rate=to_decimal(r.get("cgst_rate")),
            cgst_amount=to_decimal(r.get("cgst_amount")),
            sgst_rate=to_decimal(r.get("sgst_rate")),
            sgst_amount=to_decimal(r.get("sgst_amount")),
            igst_rate=to_decimal(r.get("igst_rate")),
            igst_amount=to_decimal(r.get("igst_amount")),
            display_order=int(r.get("display_order") or 0),
            discount_percent=to_decimal(r["discount_percent"]) if r.get("discount_percent") is not None else None,
            hsn_sac_code=r.get("hsn_sac_code"),
            unit=r.get("unit"),
        )

    @staticmethod
    def _to_invoice(r: dict, line_items: Sequence[LineItem] = ()) -> Invoice:
        return Invoice(
            id=str(r["id"]),
            invoice_number=r["invoice_number"],
            invoice_type=InvoiceType(r.get("invoice_type") or InvoiceType.SALES.value),
            status=InvoiceStatus(r.get("status") or InvoiceStatus.DRAFT.value),
            invoice_date=_optional_date(r.get("invoice_date")),
            to_company_name=r.get("to_company_name") or "",
            sub_total=to_decimal(r.get("sub_total")),
            cgst_amount=to_decimal(r.get("cgst_amount")),
            sgst_amount=to_decimal(r.get("sgst_amount")),
            igst_amount=to_decimal(r.get("igst_amount")),
            tds_amount=to_decimal(r.get("tds_amount")),
            total_amount=to_decimal(r.get("total_amount")),
            balance_due=to_decimal(r.get("balance_due")),
            total_in_words=r.get("total_in_words"),
            due_date=_optional_date(r.get("due_date")),
            paid_date=_optional_date(r.get("paid_date")),
            line_items=tuple(line_items),
        )

    @staticmethod
    def _line_row(invoice_id, li: LineItem) -> dict:
        return {
            "invoice_id": invoice_id,
            "description": li.description,
            "hsn_sac_code": li.hsn_sac_code,
            "quantity": li.quantity,
            "unit": li.unit,
            "rate": li.rate,
            "discount_percent": li.discount_percent,
            "discount_amount": li.discount_amount,
            "cgst_rate": li.cgst_rate,
            "cgst_amount": li.cgst_amount,
            "sgst_rate": li.sgst_rate,
            "sgst_amount": li.sgst_amount,
            "igst_rate": li.igst_rate,
            "igst_amount": li.igst_amount,
            "amount": li.amount,
            "display_order": li.display_order,
        }

    def number_exists(self, invoice_number: str) -> bool:
        return bool(self._store.query(INVOICES, filters={"invoice_number": invoice_number}))

    def default_company_profile(self) -> Optional[dict]:
        rows = self._store.query(COMPANY_PROFILES, filters={"is_default": True})
        return rows[0] if rows else None

    def gst_rates(self) -> GSTRates:
        """Default GST rates from the company profile, falling back per field."""
        profile = self.default_company_profile() or {}
        defaults = self._default_rates
        return GSTRates(
            cgst_rate=to_decimal(profile["default_cgst_rate"]) if profile.get("default_cgst_rate") is not None else defaults.cgst_rate,
            sgst_rate=to_decimal(profile["default_sgst_rate"]) if profile.get("default_sgst_rate") is not None else defaults.sgst_rate,
            igst_rate=to_decimal(profile["default_igst_rate"]) if profile.get("default_igst_rate") is not None else defaults.igst_rate,
        )

    def create(self, header: dict, line_items: Sequence[LineItem]) -> Invoice:
        inserted = self._store.insert(INVOICES, [header])[0]
        rows = self._store.insert(LINE_ITEMS, [self._line_row(inserted["id"], li) for li in line_items])
        return self._to_invoice(inserted, [self._to_line_item(r) for r in rows])

    def get(self, invoice_id: str) -> Optional[Invoice]:
        rows = self._store.query(INVOICES, filters={"id": invoice_id})
        if not rows:
            return None
        items = self._store.query(LINE_ITEMS, filters={"invoice_id": rows[0]["id"]}, order_by="display_order")
        return self._to_invoice(rows[0], [self._to_line_item(r) for r in items])

    def list(
        self,
        *,
        invoice_type: Optional[InvoiceType] = None,
        status: Optional[InvoiceStatus] = None,
        institution_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Invoice]:
        filters: dict = {}
        if invoice_type is not None:
            filters["invoice_type"] = invoice_type.value
        if status is not None:
            filters["status"] = status.value
        if institution_id is not None:
            filters["institution_id"] = institution_id

        window = None
        if start is not None or end is not None:
            window = DateRange("invoice_date", start or date.min, end or date.max)

        rows = self._store.query(INVOICES, filters=filters, window=window, order_by="invoice_date")
        return [self._to_invoice(r) for r in rows]

    def update(self, invoice_id: str, patch: dict) -> None:
        self._store.update(INVOICES, invoice_id, patch)

    def delete_draft(self, invoice_id: str) -> int:
        deleted = self._store.delete(INVOICES, filters={"id": invoice_id, "status": InvoiceStatus.DRAFT.value})
        if deleted:
            self._store.delete(LINE_ITEMS, filters={"invoice_id": invoice_id})
        return deleted
