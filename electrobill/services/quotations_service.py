# Overview: Quotation calls; drafting, status changes and conversion to invoices.

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult, QuotationStatus


class QuotationInputError(ValueError):
    pass


def list_quotations(
    page=1,
    limit=10,
    search=None,
    customer_id=None,
    status=None,
    start_date=None,
    end_date=None,
) -> PaginatedResult:
    payload = api.get(endpoints.QUOTATIONS.BASE, params={
        "page": page,
        "limit": limit,
        "search": search,
        "customerId": customer_id,
        "status": status,
        "startDate": start_date,
        "endDate": end_date,
    })
    return PaginatedResult.from_payload(payload)


def get_quotation(quotation_id) -> dict:
    return api.get(endpoints.QUOTATIONS.by_id(quotation_id))


def create_quotation(data: dict) -> dict:
    """data: {customerId, validUntil?, notes?, discountAmount, items: [{productId, quantity}]}"""
    return api.post(endpoints.QUOTATIONS.BASE, json=data)


def update_quotation(quotation_id, data: dict) -> dict:
    return api.patch(endpoints.QUOTATIONS.by_id(quotation_id), json=data)


def update_quotation_status(quotation_id, status: str) -> dict:
    if status not in QuotationStatus.ALL:
        raise QuotationInputError(f"Invalid quotation status: {status}")
    return api.patch(endpoints.QUOTATIONS.status(quotation_id), params={"status": status})


def convert_to_invoice(quotation_id) -> dict:
    """Returns the invoice the backend created from the quotation."""
    return api.post(endpoints.QUOTATIONS.convert_to_invoice(quotation_id))


def delete_quotation(quotation_id):
    return api.delete(endpoints.QUOTATIONS.by_id(quotation_id))


def search_products(search: str) -> list:
    return api.get(endpoints.QUOTATIONS.SEARCH_PRODUCTS, params={"search": search}) or []
