from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok, parse_date_value, parse_decimal_value, parse_enum
from ..container import Container
from ..core.enums import InvoiceStatus, InvoiceType
from .model import CreateInvoiceInput, LineItemInput

# print-only header columns accepted verbatim
_EXTRA_FIELDS = {
    "from_company_address",
    "from_company_city",
    "from_company_state",
    "from_company_pincode",
    "from_company_gstin",
    "from_company_pan",
    "from_company_phone",
    "from_company_email",
    "to_company_address",
    "to_company_city",
    "to_company_state",
    "to_company_pincode",
    "to_company_gstin",
    "to_company_contact_person",
    "to_company_phone",
    "place_of_supply",
    "terms",
    "terms_and_conditions",
    "declaration",
    "attachment_url",
    "attachment_name",
}


def _optional_decimal(value, field_name: str):
    return parse_decimal_value(value, field_name) if value not in (None, "") else None


def _line_item(raw: dict) -> LineItemInput:
    return LineItemInput(
        description=str(raw.get("description") or ""),
        quantity=parse_decimal_value(raw.get("quantity"), "quantity"),
        rate=parse_decimal_value(raw.get("rate"), "rate"),
        discount_percent=_optional_decimal(raw.get("discount_percent"), "discount_percent"),
        discount_amount=_optional_decimal(raw.get("discount_amount"), "discount_amount"),
        hsn_sac_code=raw.get("hsn_sac_code"),
        unit=raw.get("unit"),
        amount=_optional_decimal(raw.get("amount"), "amount"),
    )


def _create_input(body: dict, invoice_type: InvoiceType) -> CreateInvoiceInput:
    due = body.get("due_date")
    return CreateInvoiceInput(
        invoice_number=str(body.get("invoice_number") or ""),
        invoice_type=invoice_type,
        invoice_date=parse_date_value(body.get("invoice_date"), "invoice_date"),
        due_date=parse_date_value(due, "due_date") if due else None,
        from_company_name=str(body.get("from_company_name") or ""),
        from_company_state_code=body.get("from_company_state_code"),
        to_company_name=str(body.get("to_company_name") or ""),
        to_company_state_code=body.get("to_company_state_code"),
        line_items=tuple(_line_item(li) for li in body.get("line_items") or [] if isinstance(li, dict)),
        discount_amount=parse_decimal_value(body.get("discount_amount"), "discount_amount"),
        tds_rate=parse_decimal_value(body.get("tds_rate"), "tds_rate"),
        total_amount=_optional_decimal(body.get("total_amount"), "total_amount"),
        institution_id=body.get("institution_id"),
        reference_number=body.get("reference_number"),
        notes=body.get("notes"),
        created_by=body.get("created_by"),
        extra={k: v for k, v in body.items() if k in _EXTRA_FIELDS},
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/invoices", methods=["POST"], endpoint="invoice_create")
    def create_invoice():
        body = json_body()
        invoice_type = parse_enum(InvoiceType, body.get("invoice_type") or InvoiceType.SALES.value, "invoice type")
        invoice = container.invoice_service.create_invoice(_create_input(body, invoice_type))
        return ok(invoice, 201)

    @app.route("/api/invoices/purchase", methods=["POST"], endpoint="invoice_create_purchase")
    def create_purchase_invoice():
        invoice = container.invoice_service.create_purchase_invoice(_create_input(json_body(), InvoiceType.PURCHASE))
        return ok(invoice, 201)

    @app.route("/api/invoices", methods=["GET"], endpoint="invoice_list")
    def list_invoices():
        args = request.args
        invoices = container.invoice_service.list_invoices(
            invoice_type=parse_enum(InvoiceType, args["invoice_type"], "invoice type") if args.get("invoice_type") else None,
            status=parse_enum(InvoiceStatus, args["status"], "status") if args.get("status") else None,
            institution_id=args.get("institution_id") or None,
            start=parse_date_value(args["start_date"], "start_date") if args.get("start_date") else None,
            end=parse_date_value(args["end_date"], "end_date") if args.get("end_date") else None,
        )
        return ok(invoices)

    @app.route("/api/invoices/<invoice_id>", methods=["GET"], endpoint="invoice_get")
    def get_invoice(invoice_id: str):
        return ok(container.invoice_service.get_invoice(invoice_id))

    @app.route("/api/invoices/<invoice_id>/payments", methods=["POST"], endpoint="invoice_payment")
    def record_payment(invoice_id: str):
        body = json_body()
        paid = body.get("paid_date")
        invoice = container.invoice_service.record_payment(
            invoice_id,
            parse_decimal_value(body.get("amount"), "amount"),
            paid_date=parse_date_value(paid, "paid_date") if paid else None,
        )
        return ok(invoice)

    @app.route("/api/invoices/<invoice_id>/status", methods=["PATCH"], endpoint="invoice_status")
    def update_status(invoice_id: str):
        body = json_body()
        paid = body.get("paid_date")
        container.invoice_service.update_status(
            invoice_id,
            parse_enum(InvoiceStatus, body.get("status"), "status"),
            paid_date=parse_date_value(paid, "paid_date") if paid else None,
        )
        return ok()

    @app.route("/api/invoices/<invoice_id>", methods=["DELETE"], endpoint="invoice_delete")
    def delete_invoice(invoice_id: str):
        container.invoice_service.delete_invoice(invoice_id)
        return ok()
