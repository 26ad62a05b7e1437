# Overview: Invoice pages; list with summary, compose, status changes, cancel and delete.

from flask import Blueprint, current_app, flash, jsonify, redirect, render_template, request, url_for

from ..api import ApiError, user_message
from ..decorators import require_login, require_permission
from ..models import InvoiceStatus
from ..permissions import PERMISSIONS
from ..services import invoices_service
from ..services.invoices_service import InvoiceInputError
from .documents import customer_choices, form_from_document, read_document_form, tax_rate, to_request
from .helpers import arg, flash_api_error, list_args, pagination_for

invoices_bp = Blueprint("invoices", __name__, url_prefix="/invoices")

HEADER_FIELDS = ("customerId", "dueDate", "paymentTerms", "notes")


def _render_editor(doc, invoice=None, status=200):
    return render_template(
        "documents/form.html",
        kind="invoice",
        document=invoice,
        doc=doc,
        customers=customer_choices(),
        header_fields=HEADER_FIELDS,
        search_url=url_for("invoices.search_products"),
        tax_rate=tax_rate(),
        debounce_ms=current_app.config["SEARCH_DEBOUNCE_MS"],
        cancel_url=url_for("invoices.list_invoices"),
    ), status


@invoices_bp.get("")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def list_invoices():
    """
    Query params:
    - search, customer_id, status, start_date, end_date
    - page, limit
    """
    page, limit, search = list_args()
    filters = {
        "customer_id": arg("customer_id"),
        "status": arg("status"),
        "start_date": arg("start_date"),
        "end_date": arg("end_date"),
    }
    try:
        result = invoices_service.list_invoices(page, limit, search, **filters)
        summary = invoices_service.get_invoice_summary(filters["start_date"], filters["end_date"])
    except ApiError as e:
        flash_api_error(e, "Failed to load invoices")
        result, summary = None, {}
    return render_template(
        "invoices/list.html",
        invoices=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        summary=summary,
        search=search or "",
        filters=filters,
        statuses=InvoiceStatus.ALL,
        customers=customer_choices(),
    )


@invoices_bp.get("/search-products")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def search_products():
    """JSON product search (with stock levels) behind the editor's search box."""
    search = arg("search")
    if not search:
        return jsonify([])
    try:
        return jsonify(invoices_service.search_products(search))
    except ApiError as e:
        return jsonify({"error": user_message(e, "Failed to search products")}), e.status_code or 502


@invoices_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.SALES_CREATE)
def create_invoice():
    if request.method == "GET":
        doc = read_document_form(request.args, HEADER_FIELDS)
        doc.errors = {}
        return _render_editor(doc)

    doc = read_document_form(request.form, HEADER_FIELDS)
    if doc.errors:
        return _render_editor(doc, status=400)

    try:
        created = invoices_service.create_invoice(to_request(doc))
    except ApiError as e:
        flash_api_error(e, "Failed to create invoice")
        return _render_editor(doc, status=400)

    flash("Invoice created successfully", "success")
    if isinstance(created, dict) and created.get("id"):
        return redirect(url_for("invoices.view_invoice", invoice_id=created["id"]))
    return redirect(url_for("invoices.list_invoices"))


@invoices_bp.get("/<invoice_id>")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def view_invoice(invoice_id):
    invoice = invoices_service.get_invoice(invoice_id)
    return render_template(
        "invoices/detail.html",
        invoice=invoice,
        next_statuses=InvoiceStatus.TRANSITIONS.get(invoice.get("status"), ()),
        InvoiceStatus=InvoiceStatus,
    )


@invoices_bp.route("/<invoice_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.SALES_UPDATE)
def edit_invoice(invoice_id):
    invoice = invoices_service.get_invoice(invoice_id)
    if request.method == "GET":
        return _render_editor(form_from_document(invoice, HEADER_FIELDS), invoice)

    doc = read_document_form(request.form, HEADER_FIELDS)
    if doc.errors:
        return _render_editor(doc, invoice, status=400)

    try:
        invoices_service.update_invoice(invoice_id, to_request(doc))
    except ApiError as e:
        flash_api_error(e, "Failed to update invoice")
        return _render_editor(doc, invoice, status=400)

    flash("Invoice updated successfully", "success")
    return redirect(url_for("invoices.view_invoice", invoice_id=invoice_id))


@invoices_bp.post("/<invoice_id>/status")
@require_login
@require_permission(PERMISSIONS.SALES_UPDATE)
def update_invoice_status(invoice_id):
    status = request.form.get("status") or ""
    try:
        invoices_service.update_invoice_status(invoice_id, status)
    except InvoiceInputError as e:
        flash(str(e), "error")
    except ApiError as e:
        flash_api_error(e, "Failed to update invoice status")
    else:
        flash(f"Invoice marked as {status.lower()}", "success")
    return redirect(url_for("invoices.view_invoice", invoice_id=invoice_id))


@invoices_bp.post("/<invoice_id>/cancel")
@require_login
@require_permission(PERMISSIONS.SALES_UPDATE)
def cancel_invoice(invoice_id):
    try:
        invoices_service.cancel_invoice(invoice_id)
    except ApiError as e:
        flash_api_error(e, "Failed to cancel invoice")
    else:
        flash("Invoice cancelled successfully", "success")
    return redirect(url_for("invoices.view_invoice", invoice_id=invoice_id))


@invoices_bp.post("/<invoice_id>/delete")
@require_login
@require_permission(PERMISSIONS.SALES_DELETE)
def delete_invoice(invoice_id):
    try:
        invoices_service.delete_invoice(invoice_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete invoice")
        return redirect(url_for("invoices.view_invoice", invoice_id=invoice_id))
    flash("Invoice deleted successfully", "success")
    return redirect(url_for("invoices.list_invoices"))
