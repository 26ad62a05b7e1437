# Overview: Product category pages (hierarchy view, create, edit, status toggle, delete).

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_login, require_permission
from ..permissions import PERMISSIONS
from ..services import categories_service
from ..validation import FormPolicy, ValidationError, validate_form
from .helpers import flag_arg, flash_api_error

categories_bp = Blueprint("categories", __name__, url_prefix="/categories")

CATEGORY_POLICY = FormPolicy(
    writable_fields=frozenset({"name", "description", "parentCategoryId"}),
    required_on_create=frozenset({"name"}),
    labels={"parentCategoryId": "Parent category"},
)


def _render_form(category, values, errors, status=200):
    try:
        parents = categories_service.list_categories()
    except ApiError as e:
        flash_api_error(e, "Failed to load categories")
        parents = []
    if category:
        parents = [c for c in parents if c.get("id") != category.get("id")]
    return render_template(
        "categories/form.html",
        category=category,
        parents=parents,
        values=values,
        errors=errors,
    ), status


@categories_bp.get("")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_READ)
def list_categories():
    """Tree view by default; ?include_inactive= switches to the flat list with inactive rows."""
    include_inactive = flag_arg("include_inactive")
    try:
        if include_inactive:
            rows = [(0, c) for c in categories_service.list_categories(include_inactive=True)]
        else:
            rows = list(categories_service.flatten_hierarchy(categories_service.get_category_hierarchy()))
    except ApiError as e:
        flash_api_error(e, "Failed to load categories")
        rows = []
    return render_template("categories/list.html", rows=rows, include_inactive=bool(include_inactive))


@categories_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.PRODUCTS_CREATE)
def create_category():
    if request.method == "GET":
        return _render_form(None, {"parentCategoryId": request.args.get("parent_id", "")}, {})

    try:
        data = validate_form(request.form, CATEGORY_POLICY, partial=False)
    except ValidationError as e:
        return _render_form(None, request.form, e.errors, 400)

    try:
        categories_service.create_category(data)
    except ApiError as e:
        flash_api_error(e, "Failed to create category")
        return _render_form(None, request.form, {}, 400)

    flash("Category created successfully", "success")
    return redirect(url_for("categories.list_categories"))


@categories_bp.route("/<category_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.PRODUCTS_UPDATE)
def edit_category(category_id):
    category = categories_service.get_category(category_id)
    if request.method == "GET":
        return _render_form(category, category, {})

    try:
        data = validate_form(request.form, CATEGORY_POLICY, partial=True)
    except ValidationError as e:
        return _render_form(category, request.form, e.errors, 400)

    try:
        categories_service.update_category(category_id, data)
    except ApiError as e:
        flash_api_error(e, "Failed to update category")
        return _render_form(category, request.form, {}, 400)

    flash("Category updated successfully", "success")
    return redirect(url_for("categories.list_categories"))


@categories_bp.post("/<category_id>/toggle-status")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_UPDATE)
def toggle_category_status(category_id):
    try:
        category = categories_service.toggle_category_status(category_id)
    except ApiError as e:
        flash_api_error(e, "Failed to update category status")
    else:
        state = "activated" if (category or {}).get("isActive") else "deactivated"
        flash(f"Category {state} successfully", "success")
    return redirect(url_for("categories.list_categories"))


@categories_bp.post("/<category_id>/delete")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_DELETE)
def delete_category(category_id):
    try:
        categories_service.delete_category(category_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete category")
    else:
        flash("Category deleted successfully", "success")
    return redirect(url_for("categories.list_categories"))
