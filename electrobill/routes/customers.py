# Overview: Customer pages; list, create, view with statement, edit, status toggle and delete.

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_any_permission, require_login, require_permission
from ..permissions import PERMISSIONS
from ..services import customers_service
from ..validation import FormPolicy, ValidationError, validate_form
from .helpers import arg, flag_arg, flash_api_error, list_args, pagination_for

customers_bp = Blueprint("customers", __name__, url_prefix="/customers")

CUSTOMER_POLICY = FormPolicy(
    writable_fields=frozenset({
        "customerCode", "businessName", "contactPerson", "email", "phone",
        "alternatePhone", "taxNumber", "creditLimit", "addressLine1",
        "addressLine2", "city", "country",
    }),
    required_on_create=frozenset({"phone"}),
    numeric_fields=frozenset({"creditLimit"}),
    email_fields=frozenset({"email"}),
    labels={"addressLine1": "Address line 1", "addressLine2": "Address line 2"},
)


@customers_bp.get("")
@require_login
@require_permission(PERMISSIONS.CUSTOMERS_READ)
def list_customers():
    """
    Query params:
    - search: matches code, business name, contact person, phone or email
    - include_inactive: show deactivated customers too
    - page, limit
    """
    page, limit, search = list_args()
    include_inactive = flag_arg("include_inactive")
    try:
        result = customers_service.list_customers(page, limit, search, include_inactive)
    except ApiError as e:
        flash_api_error(e, "Failed to load customers")
        result = None
    return render_template(
        "customers/list.html",
        customers=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        search=search or "",
        include_inactive=bool(include_inactive),
    )


@customers_bp.get("/outstanding")
@require_login
@require_permission(PERMISSIONS.CUSTOMERS_READ)
def outstanding_balances():
    try:
        customers = customers_service.list_customers_with_outstanding_balance()
    except ApiError as e:
        flash_api_error(e, "Failed to load outstanding balances")
        customers = []
    return render_template("customers/outstanding.html", customers=customers)


@customers_bp.get("/top")
@require_login
@require_any_permission(PERMISSIONS.CUSTOMERS_READ, PERMISSIONS.SALES_READ)
def top_customers():
    """Best customers by purchase value; sales staff may see it too."""
    limit = request.args.get("limit", default=10, type=int)
    if not limit or limit < 1:
        limit = 10
    try:
        customers = customers_service.list_top_customers(limit)
    except ApiError as e:
        flash_api_error(e, "Failed to load top customers")
        customers = []
    return render_template("customers/top.html", customers=customers, limit=limit)


@customers_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.CUSTOMERS_CREATE)
def create_customer():
    if request.method == "GET":
        return render_template("customers/form.html", customer=None, values={"country": "Kenya"}, errors={})

    try:
        data = validate_form(request.form, CUSTOMER_POLICY, partial=False)
    except ValidationError as e:
        return render_template("customers/form.html", customer=None, values=request.form, errors=e.errors), 400

    try:
        created = customers_service.create_customer(data)
    except ApiError as e:
        flash_api_error(e, "Failed to create customer")
        return render_template("customers/form.html", customer=None, values=request.form, errors={}), 400

    flash("Customer created successfully", "success")
    if isinstance(created, dict) and created.get("id"):
        return redirect(url_for("customers.view_customer", customer_id=created["id"]))
    return redirect(url_for("customers.list_customers"))


@customers_bp.get("/<customer_id>")
@require_login
@require_permission(PERMISSIONS.CUSTOMERS_READ)
def view_customer(customer_id):
    """Customer detail plus account statement for an optional date range."""
    customer = customers_service.get_customer(customer_id)
    start_date = arg("start_date")
    end_date = arg("end_date")
    try:
        statement = customers_service.get_customer_statement(customer_id, start_date, end_date)
    except ApiError as e:
        flash_api_error(e, "Failed to load customer statement")
        statement = None
    return render_template(
        "customers/detail.html",
        customer=customer,
        statement=statement or {},
        start_date=start_date or "",
        end_date=end_date or "",
    )


@customers_bp.route("/<customer_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.CUSTOMERS_UPDATE)
def edit_customer(customer_id):
    customer = customers_service.get_customer(customer_id)
    if request.method == "GET":
        return render_template("customers/form.html", customer=customer, values=customer, errors={})

    try:
        data = validate_form(request.form, CUSTOMER_POLICY, partial=True)
    except ValidationError as e:
        return render_template("customers/form.html", customer=customer, values=request.form, errors=e.errors), 400

    try:
        customers_service.update_customer(customer_id, data)
    except ApiError as e:
        flash_api_error(e, "Failed to update customer")
        return render_template("customers/form.html", customer=customer, values=request.form, errors={}), 400

    flash("Customer updated successfully", "success")
    return redirect(url_for("customers.view_customer", customer_id=customer_id))


@customers_bp.post("/<customer_id>/toggle-status")
@require_login
@require_permission(PERMISSIONS.CUSTOMERS_UPDATE)
def toggle_customer_status(customer_id):
    try:
        customer = customers_service.toggle_customer_status(customer_id)
    except ApiError as e:
        flash_api_error(e, "Failed to update customer status")
    else:
        state = "activated" if (customer or {}).get("isActive") else "deactivated"
        flash(f"Customer {state} successfully", "success")
    return redirect(url_for("customers.list_customers"))


@customers_bp.post("/<customer_id>/delete")
@require_login
@require_permission(PERMISSIONS.CUSTOMERS_DELETE)
def delete_customer(customer_id):
    try:
        customers_service.delete_customer(customer_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete customer")
        return redirect(url_for("customers.view_customer", customer_id=customer_id))
    flash("Customer deleted successfully", "success")
    return redirect(url_for("customers.list_customers"))
