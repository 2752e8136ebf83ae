from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO, to_decimal
from ..core.constants import DEFAULT_CGST_RATE, DEFAULT_IGST_RATE, DEFAULT_SGST_RATE
from ..core.enums import InvoiceStatus, InvoiceType


@dataclass(frozen=True)
class GSTRates:
    """Percentages; CGST and SGST together normally equal IGST."""

    cgst_rate: Decimal = DEFAULT_CGST_RATE
    sgst_rate: Decimal = DEFAULT_SGST_RATE
    igst_rate: Decimal = DEFAULT_IGST_RATE

    @classmethod
    def from_dict(cls, data) -> "GSTRates":
        return cls(
            cgst_rate=to_decimal(data.get("cgst_rate", DEFAULT_CGST_RATE)),
            sgst_rate=to_decimal(data.get("sgst_rate", DEFAULT_SGST_RATE)),
            igst_rate=to_decimal(data.get("igst_rate", DEFAULT_IGST_RATE)),
        )


@dataclass(frozen=True)
class LineItemInput:
    description: str
    quantity: Decimal
    rate: Decimal
    discount_percent: Optional[Decimal] = None
    discount_amount: Optional[Decimal] = None
    hsn_sac_code: Optional[str] = None
    unit: Optional[str] = None
    # purchase bills carry the vendor's amount as-is
    amount: Optional[Decimal] = None


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: Decimal
    rate: Decimal
    discount_amount: Decimal
    amount: Decimal
    cgst_rate: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_rate: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_rate: Decimal = ZERO
    igst_amount: Decimal = ZERO
    display_order: int = 0
    discount_percent: Optional[Decimal] = None
    hsn_sac_code: Optional[str] = None
    unit: Optional[str] = None


@dataclass(frozen=True)
class InvoiceTotals:
    line_items: tuple
    is_inter_state: bool
    sub_total: Decimal
    discount_amount: Decimal
    cgst_rate: Decimal
    cgst_amount: Decimal
    sgst_rate: Decimal
    sgst_amount: Decimal
    igst_rate: Decimal
    igst_amount: Decimal
    tds_rate: Decimal
    tds_amount: Decimal
    total_amount: Decimal
    balance_due: Decimal

    @property
    def total_tax(self) -> Decimal:
        return self.cgst_amount + self.sgst_amount + self.igst_amount


@dataclass(frozen=True)
class CreateInvoiceInput:
    invoice_number: str
    invoice_date: date
    from_company_name: str
    to_company_name: str
    line_items: tuple
    invoice_type: InvoiceType = InvoiceType.SALES
    from_company_state_code: Optional[str] = None
    to_company_state_code: Optional[str] = None
    due_date: Optional[date] = None
    discount_amount: Decimal = ZERO
    tds_rate: Decimal = ZERO
    # purchase bills only; overrides the sum of line amounts
    total_amount: Optional[Decimal] = None
    institution_id: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    # address, GSTIN, bank and other print-only header fields, stored verbatim
    extra: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Invoice:
    id: str
    invoice_number: str
    invoice_type: InvoiceType
    status: InvoiceStatus
    invoice_date: Optional[date]
    to_company_name: str
    sub_total: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    tds_amount: Decimal
    total_amount: Decimal
    balance_due: Decimal
    total_in_words: Optional[str] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    line_items: tuple = ()
