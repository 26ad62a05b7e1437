# Overview: Payment pages; receipts, payment processing across invoices and payment methods.

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_login, require_permission
from ..models import PaymentMethodType
from ..permissions import PERMISSIONS
from ..services import payment_methods_service, payments_service
from ..services.allocation_service import PaymentAllocation
from ..services.billing_service import tax_inclusive_breakdown
from ..services.payment_methods_service import PaymentMethodInputError
from ..validation import FormPolicy, ValidationError, validate_form
from .documents import customer_choices, tax_rate
from .helpers import arg, flash_api_error, list_args, pagination_for

payments_bp = Blueprint("payments", __name__, url_prefix="/payments")

PAYMENT_METHOD_POLICY = FormPolicy(
    writable_fields=frozenset({"name", "type", "isActive"}),
    required_on_create=frozenset({"name", "type"}),
    boolean_fields=frozenset({"isActive"}),
)


@payments_bp.get("")
@require_login
@require_permission(PERMISSIONS.PAYMENTS_READ)
def list_receipts():
    """
    Query params:
    - search, customer_id, payment_method_id, start_date, end_date
    - page, limit
    """
    page, limit, search = list_args()
    filters = {
        "customer_id": arg("customer_id"),
        "payment_method_id": arg("payment_method_id"),
        "start_date": arg("start_date"),
        "end_date": arg("end_date"),
    }
    try:
        result = payments_service.list_receipts(page, limit, search, **filters)
        methods = payments_service.list_active_payment_methods()
    except ApiError as e:
        flash_api_error(e, "Failed to load receipts")
        result, methods = None, []
    return render_template(
        "payments/list.html",
        receipts=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        payment_methods=methods,
        search=search or "",
        filters=filters,
    )


@payments_bp.get("/receipts/<receipt_id>")
@require_login
@require_permission(PERMISSIONS.PAYMENTS_READ)
def view_receipt(receipt_id):
    """
    Receipt detail.

    Older receipts carry no tax split; it is derived from the tax-inclusive
    amount for display.
    """
    receipt = payments_service.get_receipt(receipt_id)
    if receipt.get("taxAmount") is None:
        before_tax, tax = tax_inclusive_breakdown(receipt.get("totalAmount"), tax_rate())
        receipt = {**receipt, "amountBeforeTax": before_tax, "taxAmount": tax}
    return render_template("payments/receipt.html", receipt=receipt)


@payments_bp.post("/receipts/<receipt_id>/delete")
@require_login
@require_permission(PERMISSIONS.PAYMENTS_DELETE)
def delete_receipt(receipt_id):
    try:
        payments_service.delete_receipt(receipt_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete receipt")
        return redirect(url_for("payments.view_receipt", receipt_id=receipt_id))
    flash("Receipt deleted successfully", "success")
    return redirect(url_for("payments.list_receipts"))


def _allocation_for(customer_id, preselected_invoice_id=None) -> PaymentAllocation:
    if not customer_id:
        return PaymentAllocation()
    try:
        invoices = payments_service.get_customer_outstanding_invoices(customer_id)
    except ApiError as e:
        flash_api_error(e, "Failed to load outstanding invoices")
        invoices = []
    return PaymentAllocation.from_outstanding(invoices, preselected_invoice_id)


def _render_process(allocation, values, errors, status=200):
    try:
        methods = payments_service.list_active_payment_methods()
    except ApiError as e:
        flash_api_error(e, "Failed to load payment methods")
        methods = []
    return render_template(
        "payments/process.html",
        allocation=allocation,
        customers=customer_choices(),
        payment_methods=methods,
        values=values,
        errors=errors,
    ), status


@payments_bp.route("/process", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.PAYMENTS_CREATE)
def process_payment():
    """
    Record one customer payment split across outstanding invoices.

    GET ?customer_id= loads that customer's outstanding invoices;
    ?invoice_id= additionally preselects one at its full balance.
    POST with action=refresh only re-renders (customer changed, select all).
    """
    if request.method == "GET":
        customer_id = arg("customer_id")
        allocation = _allocation_for(customer_id, arg("invoice_id"))
        return _render_process(allocation, {"customerId": customer_id or ""}, {})

    form = request.form
    customer_id = (form.get("customerId") or "").strip()
    payment_method_id = (form.get("paymentMethodId") or "").strip()
    values = {
        "customerId": customer_id,
        "paymentMethodId": payment_method_id,
        "referenceNumber": (form.get("referenceNumber") or "").strip(),
        "notes": (form.get("notes") or "").strip(),
    }

    allocation = _allocation_for(customer_id)
    amounts = {item.invoice_id: form.get(f"amount_{item.invoice_id}") for item in allocation.items}
    allocation.apply_form(form.getlist("invoice_ids"), amounts)

    action = form.get("action")
    if action == "toggle_all":
        allocation.toggle_all()
        return _render_process(allocation, values, {})
    if action == "refresh":
        return _render_process(allocation, values, {})

    errors = allocation.validate(customer_id, payment_method_id)
    if errors:
        return _render_process(allocation, values, errors, 400)

    payload = allocation.to_request(
        customer_id,
        payment_method_id,
        reference_number=values["referenceNumber"] or None,
        notes=values["notes"] or None,
    )
    try:
        result = payments_service.process_payment(payload)
    except ApiError as e:
        flash_api_error(e, "Failed to process payment")
        return _render_process(allocation, values, {}, 400)

    receipts = (result or {}).get("receipts") or []
    flash((result or {}).get("message") or "Payment processed successfully", "success")
    if len(receipts) == 1 and receipts[0].get("id"):
        return redirect(url_for("payments.view_receipt", receipt_id=receipts[0]["id"]))
    return redirect(url_for("payments.list_receipts"))


# -- Payment methods --


@payments_bp.get("/methods")
@require_login
@require_permission(PERMISSIONS.PAYMENTS_READ)
def list_payment_methods():
    try:
        methods = payment_methods_service.list_payment_methods(include_inactive=True)
    except ApiError as e:
        flash_api_error(e, "Failed to load payment methods")
        methods = []
    return render_template(
        "payments/methods.html",
        methods=methods,
        method_types=PaymentMethodType.ALL,
        values={"isActive": True},
        errors={},
    )


@payments_bp.post("/methods")
@require_login
@require_permission(PERMISSIONS.PAYMENTS_CREATE)
def create_payment_method():
    try:
        data = validate_form(request.form, PAYMENT_METHOD_POLICY, partial=False)
        payment_methods_service.create_payment_method(data["name"], data["type"], data["isActive"])
    except ValidationError as e:
        for message in e.errors.values():
            flash(message, "error")
    except PaymentMethodInputError as e:
        flash(str(e), "error")
    except ApiError as e:
        flash_api_error(e, "Failed to create payment method")
    else:
        flash("Payment method created successfully", "success")
    return redirect(url_for("payments.list_payment_methods"))


@payments_bp.route("/methods/<method_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.PAYMENTS_UPDATE)
def edit_payment_method(method_id):
    methods = payment_methods_service.list_payment_methods(include_inactive=True)
    method = next((m for m in methods if str(m.get("id")) == str(method_id)), None)
    if method is None:
        flash("Payment method not found", "error")
        return redirect(url_for("payments.list_payment_methods"))

    def render(values, errors, status=200):
        return render_template(
            "payments/method_form.html",
            method=method,
            method_types=PaymentMethodType.ALL,
            values=values,
            errors=errors,
        ), status

    if request.method == "GET":
        return render(method, {})

    try:
        data = validate_form(request.form, PAYMENT_METHOD_POLICY, partial=True)
        payment_methods_service.update_payment_method(method_id, data)
    except ValidationError as e:
        return render(request.form, e.errors, 400)
    except PaymentMethodInputError as e:
        return render(request.form, {"type": str(e)}, 400)
    except ApiError as e:
        flash_api_error(e, "Failed to update payment method")
        return render(request.form, {}, 400)

    flash("Payment method updated successfully", "success")
    return redirect(url_for("payments.list_payment_methods"))


@payments_bp.post("/methods/<method_id>/toggle-status")
@require_login
@require_permission(PERMISSIONS.PAYMENTS_UPDATE)
def toggle_payment_method_status(method_id):
    try:
        method = payment_methods_service.toggle_payment_method_status(method_id)
    except ApiError as e:
        flash_api_error(e, "Failed to update payment method status")
    else:
        state = "activated" if (method or {}).get("isActive") else "deactivated"
        flash(f"Payment method {state} successfully", "success")
    return redirect(url_for("payments.list_payment_methods"))


@payments_bp.post("/methods/<method_id>/delete")
@require_login
@require_permission(PERMISSIONS.PAYMENTS_DELETE)
def delete_payment_method(method_id):
    try:
        payment_methods_service.delete_payment_method(method_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete payment method")
    else:
        flash("Payment method deleted successfully", "success")
    return redirect(url_for("payments.list_payment_methods"))
