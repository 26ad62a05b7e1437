# Overview: Product batch pages; receiving stock, expiries, FIFO preview, adjustment and delete.

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_login, require_permission
from ..models import BatchAdjustmentType
from ..permissions import PERMISSIONS
from ..services import product_batches_service, products_service
from ..services.inventory_service import InventoryInputError
from ..validation import FormPolicy, ValidationError, validate_form
from .helpers import arg, flag_arg, flash_api_error, list_args, pagination_for
from .inventory import ADJUSTMENT_POLICY

batches_bp = Blueprint("batches", __name__, url_prefix="/inventory/batches")

BATCH_CREATE_POLICY = FormPolicy(
    writable_fields=frozenset({
        "productId", "supplierBatchRef", "buyingPrice", "quantityReceived", "expiryDate", "notes",
    }),
    required_on_create=frozenset({"productId", "buyingPrice", "quantityReceived"}),
    numeric_fields=frozenset({"buyingPrice"}),
    integer_fields=frozenset({"quantityReceived"}),
    date_fields=frozenset({"expiryDate"}),
    labels={"productId": "Product", "supplierBatchRef": "Supplier batch ref"},
)

# Product and received quantity are fixed once a batch exists
BATCH_UPDATE_POLICY = FormPolicy(
    writable_fields=frozenset({"supplierBatchRef", "buyingPrice", "expiryDate", "notes"}),
    numeric_fields=frozenset({"buyingPrice"}),
    date_fields=frozenset({"expiryDate"}),
    labels={"supplierBatchRef": "Supplier batch ref"},
)


def _products():
    try:
        return products_service.list_products()
    except ApiError as e:
        flash_api_error(e, "Failed to load products")
        return []


@batches_bp.get("")
@require_login
@require_permission(PERMISSIONS.INVENTORY_READ)
def list_batches():
    page, limit, search = list_args()
    include_expired = flag_arg("include_expired")
    product_id = arg("product_id")
    try:
        result = product_batches_service.list_batches(page, limit, search, include_expired, product_id)
    except ApiError as e:
        flash_api_error(e, "Failed to load product batches")
        result = None
    return render_template(
        "batches/list.html",
        batches=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        search=search or "",
        include_expired=bool(include_expired),
        product_id=product_id or "",
    )


@batches_bp.get("/expiring")
@require_login
@require_permission(PERMISSIONS.INVENTORY_READ)
def expiring_batches():
    days = request.args.get("days", type=int) or current_app.config["EXPIRING_BATCH_DAYS"]
    try:
        batches = product_batches_service.list_expiring_batches(days)
    except ApiError as e:
        flash_api_error(e, "Failed to load expiring batches")
        batches = []
    return render_template("batches/expiring.html", batches=batches, days=days)


@batches_bp.get("/fifo")
@require_login
@require_permission(PERMISSIONS.INVENTORY_READ)
def fifo_preview():
    """Which batches a sale of ?quantity= units of ?product_id= would draw from."""
    product_id = arg("product_id")
    quantity = request.args.get("quantity", type=int)
    allocation = None
    if product_id and quantity and quantity > 0:
        try:
            allocation = product_batches_service.get_fifo_allocation(product_id, quantity)
        except ApiError as e:
            flash_api_error(e, "Failed to load FIFO allocation")
    return render_template(
        "batches/fifo.html",
        products=_products(),
        product_id=product_id or "",
        quantity=quantity or "",
        allocation=allocation,
    )


@batches_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.INVENTORY_CREATE)
def create_batch():
    def render(values, errors, status=200):
        return render_template(
            "batches/form.html", batch=None, products=_products(), values=values, errors=errors,
        ), status

    if request.method == "GET":
        return render({"productId": request.args.get("product_id", "")}, {})

    try:
        data = validate_form(request.form, BATCH_CREATE_POLICY, partial=False)
    except ValidationError as e:
        return render(request.form, e.errors, 400)
    if data["quantityReceived"] <= 0:
        return render(request.form, {"quantityReceived": "Quantity received must be greater than 0"}, 400)

    try:
        created = product_batches_service.create_batch(data)
    except ApiError as e:
        flash_api_error(e, "Failed to create product batch")
        return render(request.form, {}, 400)

    flash("Product batch created successfully", "success")
    if isinstance(created, dict) and created.get("id"):
        return redirect(url_for("batches.view_batch", batch_id=created["id"]))
    return redirect(url_for("batches.list_batches"))


@batches_bp.get("/<batch_id>")
@require_login
@require_permission(PERMISSIONS.INVENTORY_READ)
def view_batch(batch_id):
    batch = product_batches_service.get_batch(batch_id)
    return render_template("batches/detail.html", batch=batch)


@batches_bp.route("/<batch_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.INVENTORY_UPDATE)
def edit_batch(batch_id):
    batch = product_batches_service.get_batch(batch_id)
    if request.method == "GET":
        values = dict(batch)
        if values.get("expiryDate"):
            values["expiryDate"] = str(values["expiryDate"])[:10]
        return render_template("batches/form.html", batch=batch, products=[], values=values, errors={})

    try:
        data = validate_form(request.form, BATCH_UPDATE_POLICY, partial=True)
    except ValidationError as e:
        return render_template(
            "batches/form.html", batch=batch, products=[], values=request.form, errors=e.errors,
        ), 400

    try:
        product_batches_service.update_batch(batch_id, data)
    except ApiError as e:
        flash_api_error(e, "Failed to update product batch")
        return render_template(
            "batches/form.html", batch=batch, products=[], values=request.form, errors={},
        ), 400

    flash("Product batch updated successfully", "success")
    return redirect(url_for("batches.view_batch", batch_id=batch_id))


@batches_bp.route("/<batch_id>/adjust", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.INVENTORY_UPDATE)
def adjust_batch_stock(batch_id):
    batch = product_batches_service.get_batch(batch_id)

    def render(values, errors, status=200):
        return render_template(
            "inventory/adjust.html",
            item=batch,
            values=values,
            errors=errors,
            adjustment_types=BatchAdjustmentType.ALL,
            cancel_url=url_for("batches.view_batch", batch_id=batch_id),
        ), status

    if request.method == "GET":
        return render({"type": BatchAdjustmentType.INCREASE}, {})

    try:
        data = validate_form(request.form, ADJUSTMENT_POLICY)
        product_batches_service.adjust_batch_stock(batch_id, data["quantity"], data["type"], data["reason"])
    except ValidationError as e:
        return render(request.form, e.errors, 400)
    except InventoryInputError as e:
        return render(request.form, {"form": str(e)}, 400)
    except ApiError as e:
        flash_api_error(e, "Failed to adjust batch stock")
        return render(request.form, {}, 400)

    flash("Batch stock adjusted successfully", "success")
    return redirect(url_for("batches.view_batch", batch_id=batch_id))


@batches_bp.post("/<batch_id>/delete")
@require_login
@require_permission(PERMISSIONS.INVENTORY_DELETE)
def delete_batch(batch_id):
    try:
        product_batches_service.delete_batch(batch_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete product batch")
        return redirect(url_for("batches.view_batch", batch_id=batch_id))
    flash("Product batch deleted successfully", "success")
    return redirect(url_for("batches.list_batches"))
