# Overview: Invoice calls; listing, drafting, status changes and cancellation.

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult, InvoiceStatus


class InvoiceInputError(ValueError):
    pass


def list_invoices(
    page=1,
    limit=10,
    search=None,
    customer_id=None,
    status=None,
    start_date=None,
    end_date=None,
) -> PaginatedResult:
    payload = api.get(endpoints.INVOICES.BASE, params={
        "page": page,
        "limit": limit,
        "search": search,
        "customerId": customer_id,
        "status": status,
        "startDate": start_date,
        "endDate": end_date,
    })
    return PaginatedResult.from_payload(payload)


def get_invoice(invoice_id) -> dict:
    return api.get(endpoints.INVOICES.by_id(invoice_id))


def create_invoice(data: dict) -> dict:
    """data: {customerId, quotationId?, dueDate?, paymentTerms?, notes?, discountAmount, items}"""
    return api.post(endpoints.INVOICES.BASE, json=data)


def update_invoice(invoice_id, data: dict) -> dict:
    return api.patch(endpoints.INVOICES.by_id(invoice_id), json=data)


def update_invoice_status(invoice_id, status: str) -> dict:
    if status not in InvoiceStatus.ALL:
        raise InvoiceInputError(f"Invalid invoice status: {status}")
    return api.patch(endpoints.INVOICES.status(invoice_id), params={"status": status})


def cancel_invoice(invoice_id):
    return api.delete(endpoints.INVOICES.cancel(invoice_id))


def delete_invoice(invoice_id):
    return api.delete(endpoints.INVOICES.by_id(invoice_id))


def get_invoice_summary(start_date=None, end_date=None) -> dict:
    return api.get(endpoints.INVOICES.SUMMARY, params={"startDate": start_date, "endDate": end_date}) or {}


def search_products(search: str) -> list:
    return api.get(endpoints.INVOICES.SEARCH_PRODUCTS, params={"search": search}) or []
