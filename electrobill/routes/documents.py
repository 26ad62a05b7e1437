# Overview: Line-item form handling shared by the quotation and invoice editors.

"""
Quotation and invoice editors post their line items as parallel lists:

    product_id[]  product_name[]  product_sku[]  unit_price[]  quantity[]

plus customerId, discountAmount and the document-specific header fields.
The browser keeps a live totals preview; the same figures are recomputed
here so a re-rendered form (after an error) shows consistent numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from flask import current_app

from ..api import ApiError
from ..services import customers_service
from ..services.billing_service import DocumentDraft, DocumentTotals, json_amount, money
from ..validation import MAX_AMOUNT
from .helpers import flash_api_error


ROW_FIELDS = ("product_id", "product_name", "product_sku", "unit_price", "quantity")


@dataclass
class DocumentForm:
    draft: DocumentDraft
    values: dict
    discount_amount: str = "0"
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def totals(self) -> DocumentTotals:
        return self.draft.totals(_discount_or_zero(self.discount_amount), tax_rate())


def tax_rate():
    return current_app.config["TAX_RATE_PERCENT"]


def _discount_or_zero(raw):
    try:
        return money(raw)
    except ValueError:
        return 0


def read_rows(form) -> list[dict]:
    columns = {name: form.getlist(f"{name}[]") for name in ROW_FIELDS}
    count = max((len(v) for v in columns.values()), default=0)
    return [
        {name: (columns[name][i] if i < len(columns[name]) else "") for name in ROW_FIELDS}
        for i in range(count)
    ]


def read_document_form(form, header_fields) -> DocumentForm:
    """
    Parse and check a submitted document.

    Errors: customer missing, no valid line items, discount not a
    non-negative number. A discount above the subtotal is left for the API
    to reject.
    """
    draft = DocumentDraft.from_rows(read_rows(form))
    values = {name: (form.get(name) or "").strip() for name in header_fields}
    discount_raw = (form.get("discountAmount") or "0").strip() or "0"
    doc = DocumentForm(draft=draft, values=values, discount_amount=discount_raw)

    if not values.get("customerId"):
        doc.errors["customerId"] = "Please select a customer"
    if not draft.items:
        doc.errors["items"] = "Please add at least one product"
    try:
        discount = money(discount_raw)
    except ValueError:
        doc.errors["discountAmount"] = "Discount must be a number"
    else:
        if discount < 0:
            doc.errors["discountAmount"] = "Discount cannot be negative"
        elif discount > MAX_AMOUNT:
            doc.errors["discountAmount"] = "Discount is too large"
    return doc


def to_request(doc: DocumentForm) -> dict:
    """JSON body for create/update: header fields (blank ones dropped) plus items."""
    payload = {name: value for name, value in doc.values.items() if value}
    payload["discountAmount"] = json_amount(doc.discount_amount)
    payload["items"] = doc.draft.to_request_items()
    return payload


def form_from_document(document: dict, header_fields) -> DocumentForm:
    """Seed the editor from an existing quotation/invoice."""
    values = {}
    for name in header_fields:
        value = document.get(name)
        if name.endswith("Date") or name == "validUntil":
            value = str(value)[:10] if value else ""
        values[name] = "" if value is None else str(value)
    return DocumentForm(
        draft=DocumentDraft.from_document(document),
        values=values,
        discount_amount=str(document.get("discountAmount") or "0"),
    )


# Customer picker on document and payment forms
CUSTOMER_PICKER_LIMIT = 100


def customer_choices() -> list[dict]:
    try:
        return customers_service.list_customers(page=1, limit=CUSTOMER_PICKER_LIMIT).items
    except ApiError as e:
        flash_api_error(e, "Failed to load customers")
        return []
