# Overview: Inventory calls; stock levels, adjustments and summaries.

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult, InventoryAdjustmentType


class InventoryInputError(ValueError):
    """Raised before calling the API when an adjustment is malformed."""


def list_inventory(
    page=1,
    limit=10,
    search=None,
    product_id=None,
    category_id=None,
    location=None,
    low_stock=None,
    include_zero_stock=None,
) -> PaginatedResult:
    payload = api.get(endpoints.INVENTORY.BASE, params={
        "page": page,
        "limit": limit,
        "search": search,
        "productId": product_id,
        "categoryId": category_id,
        "location": location,
        "lowStock": low_stock,
        "includeZeroStock": include_zero_stock,
    })
    return PaginatedResult.from_payload(payload)


def get_inventory_item(inventory_id) -> dict:
    return api.get(endpoints.INVENTORY.by_id(inventory_id))


def get_product_inventory(product_id) -> dict:
    return api.get(endpoints.INVENTORY.by_product(product_id))


def adjust_stock(inventory_id, quantity: int, adjustment_type: str, reason: str) -> dict:
    """
    Adjust stock for one inventory record.

    The API applies the movement and records the transaction; quantity is
    always positive, the direction comes from adjustment_type.
    """
    if adjustment_type not in InventoryAdjustmentType.ALL:
        raise InventoryInputError(
            f"Invalid adjustment type: {adjustment_type}. Must be one of {list(InventoryAdjustmentType.ALL)}"
        )
    if quantity <= 0:
        raise InventoryInputError("Quantity must be greater than 0")
    if not (reason or "").strip():
        raise InventoryInputError("Reason is required")
    return api.patch(endpoints.INVENTORY.adjust_stock(inventory_id), json={
        "quantity": quantity,
        "type": adjustment_type,
        "reason": reason.strip(),
    })


def get_inventory_summary() -> dict:
    return api.get(endpoints.INVENTORY.SUMMARY) or {}


def list_locations() -> list:
    return api.get(endpoints.INVENTORY.LOCATIONS) or []


def list_low_stock() -> list:
    return api.get(endpoints.INVENTORY.LOW_STOCK) or []
