# Overview: Payment processing, receipts and outstanding-invoice lookups.

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult


def list_active_payment_methods() -> list:
    return api.get(endpoints.PAYMENTS.PAYMENT_METHODS) or []


def process_payment(data: dict) -> dict:
    """
    Post a payment allocated across invoices.

    data: {customerId, paymentMethodId, totalAmount, referenceNumber?, notes?,
           items: [{invoiceId, amountPaid}]}
    Returns the generated receipt with tax and balance details.
    """
    return api.post(endpoints.PAYMENTS.PROCESS, json=data)


def list_receipts(
    page=1,
    limit=10,
    search=None,
    customer_id=None,
    payment_method_id=None,
    start_date=None,
    end_date=None,
) -> PaginatedResult:
    payload = api.get(endpoints.PAYMENTS.RECEIPTS, params={
        "page": page,
        "limit": limit,
        "search": search,
        "customerId": customer_id,
        "paymentMethodId": payment_method_id,
        "startDate": start_date,
        "endDate": end_date,
    })
    return PaginatedResult.from_payload(payload)


def get_receipt(receipt_id) -> dict:
    return api.get(endpoints.PAYMENTS.receipt_by_id(receipt_id))


def delete_receipt(receipt_id):
    return api.delete(endpoints.PAYMENTS.receipt_by_id(receipt_id))


def get_customer_outstanding_invoices(customer_id) -> list:
    """
    Unpaid and partially paid invoices for a customer.

    Older API builds wrap the list as {customer, totalOutstanding,
    outstandingInvoices}; both shapes are accepted.
    """
    payload = api.get(endpoints.PAYMENTS.customer_outstanding(customer_id))
    if isinstance(payload, dict):
        return payload.get("outstandingInvoices") or []
    return payload or []
