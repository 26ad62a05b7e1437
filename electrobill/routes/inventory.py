# Overview: Inventory pages; stock levels with filters, stock adjustment and low-stock report.

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_login, require_permission
from ..models import InventoryAdjustmentType
from ..permissions import PERMISSIONS
from ..services import categories_service, inventory_service
from ..services.inventory_service import InventoryInputError
from ..validation import FormPolicy, ValidationError, validate_form
from .helpers import arg, flag_arg, flash_api_error, list_args, pagination_for

inventory_bp = Blueprint("inventory", __name__, url_prefix="/inventory")

ADJUSTMENT_POLICY = FormPolicy(
    writable_fields=frozenset({"quantity", "type", "reason"}),
    required_on_create=frozenset({"quantity", "type", "reason"}),
    integer_fields=frozenset({"quantity"}),
    labels={"type": "Adjustment type"},
)


@inventory_bp.get("")
@require_login
@require_permission(PERMISSIONS.INVENTORY_READ)
def list_inventory():
    """
    Query params:
    - search, category_id, location
    - low_stock: only rows at or under the reorder level
    - include_zero_stock: show rows with no stock on hand
    - page, limit
    """
    page, limit, search = list_args()
    filters = {
        "category_id": arg("category_id"),
        "location": arg("location"),
        "low_stock": flag_arg("low_stock"),
        "include_zero_stock": flag_arg("include_zero_stock"),
    }
    try:
        result = inventory_service.list_inventory(page, limit, search, **filters)
        summary = inventory_service.get_inventory_summary()
        locations = inventory_service.list_locations()
        categories = categories_service.list_categories()
    except ApiError as e:
        flash_api_error(e, "Failed to load inventory")
        result, summary, locations, categories = None, {}, [], []
    return render_template(
        "inventory/list.html",
        items=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        summary=summary,
        locations=locations,
        categories=categories,
        search=search or "",
        filters=filters,
    )


@inventory_bp.get("/low-stock")
@require_login
@require_permission(PERMISSIONS.INVENTORY_READ)
def low_stock():
    try:
        items = inventory_service.list_low_stock()
    except ApiError as e:
        flash_api_error(e, "Failed to load low stock items")
        items = []
    return render_template("inventory/low_stock.html", items=items)


@inventory_bp.get("/product/<product_id>")
@require_login
@require_permission(PERMISSIONS.INVENTORY_READ)
def product_inventory(product_id):
    """Stock totals and per-location rows for one product."""
    stock = inventory_service.get_product_inventory(product_id) or {}
    return render_template("inventory/product.html", stock=stock, product=stock.get("product") or {})


@inventory_bp.get("/<inventory_id>")
@require_login
@require_permission(PERMISSIONS.INVENTORY_READ)
def view_inventory(inventory_id):
    item = inventory_service.get_inventory_item(inventory_id)
    return render_template("inventory/detail.html", item=item)


@inventory_bp.route("/<inventory_id>/adjust", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.INVENTORY_UPDATE)
def adjust_stock(inventory_id):
    """Increase, decrease or correct stock with a reason."""
    item = inventory_service.get_inventory_item(inventory_id)

    def render(values, errors, status=200):
        return render_template(
            "inventory/adjust.html",
            item=item,
            values=values,
            errors=errors,
            adjustment_types=InventoryAdjustmentType.ALL,
            cancel_url=url_for("inventory.view_inventory", inventory_id=inventory_id),
        ), status

    if request.method == "GET":
        return render({"type": InventoryAdjustmentType.INCREASE}, {})

    try:
        data = validate_form(request.form, ADJUSTMENT_POLICY)
        inventory_service.adjust_stock(inventory_id, data["quantity"], data["type"], data["reason"])
    except ValidationError as e:
        return render(request.form, e.errors, 400)
    except InventoryInputError as e:
        return render(request.form, {"form": str(e)}, 400)
    except ApiError as e:
        flash_api_error(e, "Failed to adjust stock")
        return render(request.form, {}, 400)

    flash("Stock adjusted successfully", "success")
    return redirect(url_for("inventory.view_inventory", inventory_id=inventory_id))
