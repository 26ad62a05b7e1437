# Overview: Product batch calls; receiving, expiries and FIFO previews.

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult, BatchAdjustmentType
from .inventory_service import InventoryInputError


def list_batches(page=1, limit=10, search=None, include_expired=None, product_id=None) -> PaginatedResult:
    payload = api.get(endpoints.PRODUCT_BATCHES.BASE, params={
        "page": page,
        "limit": limit,
        "search": search,
        "includeExpired": include_expired,
        "productId": product_id,
    })
    return PaginatedResult.from_payload(payload)


def list_expiring_batches(days=30) -> list:
    return api.get(endpoints.PRODUCT_BATCHES.EXPIRING, params={"days": days}) or []


def get_fifo_allocation(product_id, quantity: int) -> list:
    """Which batches the backend would draw `quantity` units from, oldest first."""
    return api.get(endpoints.PRODUCT_BATCHES.fifo(product_id, quantity)) or []


def get_batch(batch_id) -> dict:
    return api.get(endpoints.PRODUCT_BATCHES.by_id(batch_id))


def create_batch(data: dict) -> dict:
    return api.post(endpoints.PRODUCT_BATCHES.BASE, json=data)


def update_batch(batch_id, data: dict) -> dict:
    return api.patch(endpoints.PRODUCT_BATCHES.by_id(batch_id), json=data)


def adjust_batch_stock(batch_id, quantity: int, adjustment_type: str, reason: str) -> dict:
    if adjustment_type not in BatchAdjustmentType.ALL:
        raise InventoryInputError(
            f"Invalid adjustment type: {adjustment_type}. Must be one of {list(BatchAdjustmentType.ALL)}"
        )
    if quantity <= 0:
        raise InventoryInputError("Quantity must be greater than 0")
    if not (reason or "").strip():
        raise InventoryInputError("Reason is required")
    return api.patch(endpoints.PRODUCT_BATCHES.adjust_stock(batch_id), json={
        "quantity": quantity,
        "type": adjustment_type,
        "reason": reason.strip(),
    })


def delete_batch(batch_id):
    return api.delete(endpoints.PRODUCT_BATCHES.by_id(batch_id))
