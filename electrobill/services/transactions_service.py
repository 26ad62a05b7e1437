# Overview: Ledger transaction calls (read-only).

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult


def list_transactions(
    page=1,
    limit=10,
    search=None,
    customer_id=None,
    supplier_id=None,
    transaction_type=None,
    start_date=None,
    end_date=None,
) -> PaginatedResult:
    payload = api.get(endpoints.TRANSACTIONS.BASE, params={
        "page": page,
        "limit": limit,
        "search": search,
        "customerId": customer_id,
        "supplierId": supplier_id,
        "transactionType": transaction_type,
        "startDate": start_date,
        "endDate": end_date,
    })
    return PaginatedResult.from_payload(payload)


def get_transaction(transaction_id) -> dict:
    return api.get(endpoints.TRANSACTIONS.by_id(transaction_id))


def get_transaction_summary(start_date=None, end_date=None) -> dict:
    return api.get(endpoints.TRANSACTIONS.SUMMARY, params={
        "startDate": start_date,
        "endDate": end_date,
    }) or {}


def get_customer_statement(customer_id, start_date=None, end_date=None) -> dict:
    return api.get(endpoints.TRANSACTIONS.customer_statement(customer_id), params={
        "startDate": start_date,
        "endDate": end_date,
    })
