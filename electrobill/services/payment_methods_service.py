# Overview: Payment method management calls.

from ..api import endpoints
from ..extensions import api
from ..models import PaymentMethodType


class PaymentMethodInputError(ValueError):
    pass


def list_payment_methods(include_inactive=False) -> list:
    return api.get(endpoints.PAYMENT_METHODS.BASE, params={"includeInactive": include_inactive}) or []


def _check_type(method_type):
    if method_type is not None and method_type not in PaymentMethodType.ALL:
        raise PaymentMethodInputError(
            f"Invalid payment method type: {method_type}. Must be one of {list(PaymentMethodType.ALL)}"
        )


def create_payment_method(name: str, method_type: str, is_active: bool = True) -> dict:
    _check_type(method_type)
    return api.post(endpoints.PAYMENT_METHODS.BASE, json={
        "name": name,
        "type": method_type,
        "isActive": is_active,
    })


def update_payment_method(method_id, data: dict) -> dict:
    _check_type(data.get("type"))
    return api.patch(endpoints.PAYMENT_METHODS.by_id(method_id), json=data)


def delete_payment_method(method_id):
    return api.delete(endpoints.PAYMENT_METHODS.by_id(method_id))


def toggle_payment_method_status(method_id) -> dict:
    return api.patch(endpoints.PAYMENT_METHODS.toggle_status(method_id))
