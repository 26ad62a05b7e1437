# Overview: Product catalogue calls.

from ..api import endpoints
from ..extensions import api


def list_products(include_inactive=None, category_id=None, brand_id=None, search=None) -> list:
    payload = api.get(endpoints.PRODUCTS.BASE, params={
        "includeInactive": include_inactive,
        "categoryId": category_id,
        "brandId": brand_id,
        "search": search,
    })
    if isinstance(payload, dict):
        return payload.get("data") or []
    return payload or []


def get_product(product_id) -> dict:
    return api.get(endpoints.PRODUCTS.by_id(product_id))


def get_product_by_sku(sku: str) -> dict:
    return api.get(endpoints.PRODUCTS.by_sku(sku))


def create_product(data: dict) -> dict:
    return api.post(endpoints.PRODUCTS.BASE, json=data)


def update_product(product_id, data: dict) -> dict:
    return api.patch(endpoints.PRODUCTS.by_id(product_id), json=data)


def toggle_product_status(product_id) -> dict:
    return api.patch(endpoints.PRODUCTS.toggle_status(product_id))


def delete_product(product_id):
    return api.delete(endpoints.PRODUCTS.by_id(product_id))


def list_low_stock_products() -> list:
    return api.get(endpoints.PRODUCTS.LOW_STOCK) or []
