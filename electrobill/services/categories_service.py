# Overview: Product category calls.

from ..api import endpoints
from ..extensions import api


def list_categories(include_inactive=False) -> list:
    return api.get(endpoints.CATEGORIES.BASE, params={"includeInactive": include_inactive}) or []


def get_category_hierarchy() -> list:
    return api.get(endpoints.CATEGORIES.HIERARCHY) or []


def get_category(category_id) -> dict:
    return api.get(endpoints.CATEGORIES.by_id(category_id))


def create_category(data: dict) -> dict:
    return api.post(endpoints.CATEGORIES.BASE, json=data)


def update_category(category_id, data: dict) -> dict:
    return api.patch(endpoints.CATEGORIES.by_id(category_id), json=data)


def delete_category(category_id):
    return api.delete(endpoints.CATEGORIES.by_id(category_id))


def toggle_category_status(category_id) -> dict:
    return api.patch(endpoints.CATEGORIES.toggle_status(category_id))


def flatten_hierarchy(nodes, depth=0):
    """Yield (depth, category) pairs depth-first for indented display."""
    for node in nodes or []:
        yield depth, node
        yield from flatten_hierarchy(node.get("subCategories") or node.get("children"), depth + 1)
