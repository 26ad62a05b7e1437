# Overview: Brand calls.

from ..api import endpoints
from ..extensions import api


def list_brands(include_inactive=False) -> list:
    return api.get(endpoints.BRANDS.BASE, params={"includeInactive": include_inactive}) or []


def get_brand(brand_id) -> dict:
    return api.get(endpoints.BRANDS.by_id(brand_id))


def create_brand(data: dict) -> dict:
    return api.post(endpoints.BRANDS.BASE, json=data)


def update_brand(brand_id, data: dict) -> dict:
    return api.patch(endpoints.BRANDS.by_id(brand_id), json=data)


def delete_brand(brand_id):
    return api.delete(endpoints.BRANDS.by_id(brand_id))


def toggle_brand_status(brand_id) -> dict:
    return api.patch(endpoints.BRANDS.toggle_status(brand_id))
