# Overview: Product catalogue pages; list with filters, SKU lookup, low stock and CRUD.

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ..api import ApiError, ApiNotFoundError
from ..decorators import require_login, require_permission
from ..pagination import Pagination, parse_page_args
from ..permissions import PERMISSIONS
from ..services import brands_service, categories_service, products_service
from ..validation import FormPolicy, ValidationError, validate_form
from .helpers import arg, flag_arg, flash_api_error

products_bp = Blueprint("products", __name__, url_prefix="/products")

PRODUCT_POLICY = FormPolicy(
    writable_fields=frozenset({
        "sku", "name", "description", "categoryId", "brandId", "unitOfMeasure",
        "sellingPrice", "wholesalePrice", "weight", "dimensions",
        "warrantyPeriodMonths", "reorderLevel",
    }),
    required_on_create=frozenset({"sku", "name", "categoryId", "sellingPrice"}),
    numeric_fields=frozenset({"sellingPrice", "wholesalePrice", "weight"}),
    integer_fields=frozenset({"warrantyPeriodMonths", "reorderLevel"}),
    labels={"sku": "SKU", "categoryId": "Category", "brandId": "Brand"},
)


def _form_choices():
    """Active categories and brands for the product form selects."""
    try:
        categories = categories_service.list_categories()
        brands = brands_service.list_brands()
    except ApiError as e:
        flash_api_error(e, "Failed to load categories and brands")
        return [], []
    return categories, brands


def _render_form(product, values, errors, status=200):
    categories, brands = _form_choices()
    return render_template(
        "products/form.html",
        product=product,
        values=values,
        errors=errors,
        categories=categories,
        brands=brands,
    ), status


@products_bp.get("")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_READ)
def list_products():
    """
    The products endpoint is not paginated; pages are cut locally.

    Query params:
    - search, category_id, brand_id, include_inactive
    - page, limit
    """
    page, limit = parse_page_args(request.args, current_app.config["DEFAULT_PAGE_SIZE"])
    search = arg("search")
    category_id = arg("category_id")
    brand_id = arg("brand_id")
    include_inactive = flag_arg("include_inactive")

    try:
        products = products_service.list_products(include_inactive, category_id, brand_id, search)
    except ApiError as e:
        flash_api_error(e, "Failed to load products")
        products = []

    pagination = Pagination(len(products), limit, page)
    categories, brands = _form_choices()
    return render_template(
        "products/list.html",
        products=products[pagination.start_index:pagination.end_index],
        pagination=pagination,
        categories=categories,
        brands=brands,
        search=search or "",
        category_id=category_id or "",
        brand_id=brand_id or "",
        include_inactive=bool(include_inactive),
    )


@products_bp.get("/low-stock")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_READ)
def low_stock_products():
    try:
        products = products_service.list_low_stock_products()
    except ApiError as e:
        flash_api_error(e, "Failed to load low stock products")
        products = []
    return render_template("products/low_stock.html", products=products)


@products_bp.get("/lookup")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_READ)
def lookup_sku():
    """Jump straight to a product by SKU (?sku=)."""
    sku = arg("sku")
    if not sku:
        flash("Enter a SKU to look up", "error")
        return redirect(url_for("products.list_products"))
    try:
        product = products_service.get_product_by_sku(sku)
    except ApiNotFoundError:
        flash(f"No product with SKU {sku}", "error")
        return redirect(url_for("products.list_products"))
    except ApiError as e:
        flash_api_error(e, "Failed to look up product")
        return redirect(url_for("products.list_products"))
    return redirect(url_for("products.view_product", product_id=product["id"]))


@products_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.PRODUCTS_CREATE)
def create_product():
    if request.method == "GET":
        return _render_form(None, {"unitOfMeasure": "pcs", "reorderLevel": 10}, {})

    try:
        data = validate_form(request.form, PRODUCT_POLICY, partial=False)
    except ValidationError as e:
        return _render_form(None, request.form, e.errors, 400)

    try:
        created = products_service.create_product(data)
    except ApiError as e:
        flash_api_error(e, "Failed to create product")
        return _render_form(None, request.form, {}, 400)

    flash("Product created successfully", "success")
    if isinstance(created, dict) and created.get("id"):
        return redirect(url_for("products.view_product", product_id=created["id"]))
    return redirect(url_for("products.list_products"))


@products_bp.get("/<product_id>")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_READ)
def view_product(product_id):
    product = products_service.get_product(product_id)
    return render_template("products/detail.html", product=product)


@products_bp.route("/<product_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.PRODUCTS_UPDATE)
def edit_product(product_id):
    product = products_service.get_product(product_id)
    if request.method == "GET":
        return _render_form(product, product, {})

    try:
        data = validate_form(request.form, PRODUCT_POLICY, partial=True)
    except ValidationError as e:
        return _render_form(product, request.form, e.errors, 400)

    try:
        products_service.update_product(product_id, data)
    except ApiError as e:
        flash_api_error(e, "Failed to update product")
        return _render_form(product, request.form, {}, 400)

    flash("Product updated successfully", "success")
    return redirect(url_for("products.view_product", product_id=product_id))


@products_bp.post("/<product_id>/toggle-status")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_UPDATE)
def toggle_product_status(product_id):
    try:
        product = products_service.toggle_product_status(product_id)
    except ApiError as e:
        flash_api_error(e, "Failed to update product status")
    else:
        state = "activated" if (product or {}).get("isActive") else "deactivated"
        flash(f"Product {state} successfully", "success")
    return redirect(url_for("products.list_products"))


@products_bp.post("/<product_id>/delete")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_DELETE)
def delete_product(product_id):
    try:
        products_service.delete_product(product_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete product")
        return redirect(url_for("products.view_product", product_id=product_id))
    flash("Product deleted successfully", "success")
    return redirect(url_for("products.list_products"))
