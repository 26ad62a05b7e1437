# Overview: Brand pages (list, create, edit, status toggle, delete).

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_login, require_permission
from ..permissions import PERMISSIONS
from ..services import brands_service
from ..validation import FormPolicy, ValidationError, validate_form
from .helpers import flag_arg, flash_api_error

brands_bp = Blueprint("brands", __name__, url_prefix="/brands")

BRAND_POLICY = FormPolicy(
    writable_fields=frozenset({"name", "description", "logoUrl", "website"}),
    required_on_create=frozenset({"name"}),
    labels={"logoUrl": "Logo URL"},
)


@brands_bp.get("")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_READ)
def list_brands():
    include_inactive = flag_arg("include_inactive")
    try:
        brands = brands_service.list_brands(include_inactive=bool(include_inactive))
    except ApiError as e:
        flash_api_error(e, "Failed to load brands")
        brands = []
    return render_template("brands/list.html", brands=brands, include_inactive=bool(include_inactive))


@brands_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.PRODUCTS_CREATE)
def create_brand():
    if request.method == "GET":
        return render_template("brands/form.html", brand=None, values={}, errors={})

    try:
        data = validate_form(request.form, BRAND_POLICY, partial=False)
    except ValidationError as e:
        return render_template("brands/form.html", brand=None, values=request.form, errors=e.errors), 400

    try:
        brands_service.create_brand(data)
    except ApiError as e:
        flash_api_error(e, "Failed to create brand")
        return render_template("brands/form.html", brand=None, values=request.form, errors={}), 400

    flash("Brand created successfully", "success")
    return redirect(url_for("brands.list_brands"))


@brands_bp.route("/<brand_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.PRODUCTS_UPDATE)
def edit_brand(brand_id):
    brand = brands_service.get_brand(brand_id)
    if request.method == "GET":
        return render_template("brands/form.html", brand=brand, values=brand, errors={})

    try:
        data = validate_form(request.form, BRAND_POLICY, partial=True)
    except ValidationError as e:
        return render_template("brands/form.html", brand=brand, values=request.form, errors=e.errors), 400

    try:
        brands_service.update_brand(brand_id, data)
    except ApiError as e:
        flash_api_error(e, "Failed to update brand")
        return render_template("brands/form.html", brand=brand, values=request.form, errors={}), 400

    flash("Brand updated successfully", "success")
    return redirect(url_for("brands.list_brands"))


@brands_bp.post("/<brand_id>/toggle-status")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_UPDATE)
def toggle_brand_status(brand_id):
    try:
        brand = brands_service.toggle_brand_status(brand_id)
    except ApiError as e:
        flash_api_error(e, "Failed to update brand status")
    else:
        state = "activated" if (brand or {}).get("isActive") else "deactivated"
        flash(f"Brand {state} successfully", "success")
    return redirect(url_for("brands.list_brands"))


@brands_bp.post("/<brand_id>/delete")
@require_login
@require_permission(PERMISSIONS.PRODUCTS_DELETE)
def delete_brand(brand_id):
    try:
        brands_service.delete_brand(brand_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete brand")
    else:
        flash("Brand deleted successfully", "success")
    return redirect(url_for("brands.list_brands"))
