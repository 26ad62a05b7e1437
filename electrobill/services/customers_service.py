# Overview: Customer calls, including statements and outstanding-balance reports.

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult


def list_customers(page=1, limit=10, search=None, include_inactive=None) -> PaginatedResult:
    payload = api.get(endpoints.CUSTOMERS.BASE, params={
        "page": page,
        "limit": limit,
        "search": search,
        "includeInactive": include_inactive,
    })
    return PaginatedResult.from_payload(payload)


def get_customer(customer_id) -> dict:
    return api.get(endpoints.CUSTOMERS.by_id(customer_id))


def create_customer(data: dict) -> dict:
    return api.post(endpoints.CUSTOMERS.BASE, json=data)


def update_customer(customer_id, data: dict) -> dict:
    return api.patch(endpoints.CUSTOMERS.by_id(customer_id), json=data)


def delete_customer(customer_id):
    return api.delete(endpoints.CUSTOMERS.by_id(customer_id))


def toggle_customer_status(customer_id) -> dict:
    return api.patch(endpoints.CUSTOMERS.toggle_status(customer_id))


def get_customer_statement(customer_id, start_date=None, end_date=None) -> dict:
    return api.get(endpoints.CUSTOMERS.statement(customer_id), params={
        "startDate": start_date,
        "endDate": end_date,
    })


def list_customers_with_outstanding_balance() -> list:
    return api.get(endpoints.CUSTOMERS.OUTSTANDING_BALANCE) or []


def list_top_customers(limit=10) -> list:
    return api.get(endpoints.CUSTOMERS.TOP_CUSTOMERS, params={"limit": limit}) or []
