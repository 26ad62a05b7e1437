# Overview: Quotation pages; list, compose, status changes, conversion to invoice and delete.

from flask import Blueprint, current_app, flash, jsonify, redirect, render_template, request, url_for

from ..api import ApiError, user_message
from ..decorators import require_login, require_permission
from ..models import QuotationStatus
from ..permissions import PERMISSIONS
from ..services import quotations_service
from ..services.quotations_service import QuotationInputError
from .documents import customer_choices, form_from_document, read_document_form, tax_rate, to_request
from .helpers import arg, flash_api_error, list_args, pagination_for

quotations_bp = Blueprint("quotations", __name__, url_prefix="/quotations")

HEADER_FIELDS = ("customerId", "validUntil", "notes")


def _render_editor(doc, quotation=None, status=200):
    return render_template(
        "documents/form.html",
        kind="quotation",
        document=quotation,
        doc=doc,
        customers=customer_choices(),
        header_fields=HEADER_FIELDS,
        search_url=url_for("quotations.search_products"),
        tax_rate=tax_rate(),
        debounce_ms=current_app.config["SEARCH_DEBOUNCE_MS"],
        cancel_url=url_for("quotations.list_quotations"),
    ), status


@quotations_bp.get("")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def list_quotations():
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
        result = quotations_service.list_quotations(page, limit, search, **filters)
    except ApiError as e:
        flash_api_error(e, "Failed to load quotations")
        result = None
    return render_template(
        "quotations/list.html",
        quotations=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        search=search or "",
        filters=filters,
        statuses=QuotationStatus.ALL,
        customers=customer_choices(),
    )


@quotations_bp.get("/search-products")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def search_products():
    """JSON product search behind the editor's debounced search box."""
    search = arg("search")
    if not search:
        return jsonify([])
    try:
        return jsonify(quotations_service.search_products(search))
    except ApiError as e:
        return jsonify({"error": user_message(e, "Failed to search products")}), e.status_code or 502


@quotations_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.SALES_CREATE)
def create_quotation():
    if request.method == "GET":
        doc = read_document_form(request.args, HEADER_FIELDS)
        doc.errors = {}
        return _render_editor(doc)

    doc = read_document_form(request.form, HEADER_FIELDS)
    if doc.errors:
        return _render_editor(doc, status=400)

    try:
        created = quotations_service.create_quotation(to_request(doc))
    except ApiError as e:
        flash_api_error(e, "Failed to create quotation")
        return _render_editor(doc, status=400)

    flash("Quotation created successfully", "success")
    if isinstance(created, dict) and created.get("id"):
        return redirect(url_for("quotations.view_quotation", quotation_id=created["id"]))
    return redirect(url_for("quotations.list_quotations"))


@quotations_bp.get("/<quotation_id>")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def view_quotation(quotation_id):
    quotation = quotations_service.get_quotation(quotation_id)
    return render_template(
        "quotations/detail.html",
        quotation=quotation,
        next_statuses=QuotationStatus.TRANSITIONS.get(quotation.get("status"), ()),
        QuotationStatus=QuotationStatus,
    )


@quotations_bp.route("/<quotation_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.SALES_UPDATE)
def edit_quotation(quotation_id):
    quotation = quotations_service.get_quotation(quotation_id)
    if request.method == "GET":
        return _render_editor(form_from_document(quotation, HEADER_FIELDS), quotation)

    doc = read_document_form(request.form, HEADER_FIELDS)
    if doc.errors:
        return _render_editor(doc, quotation, status=400)

    try:
        quotations_service.update_quotation(quotation_id, to_request(doc))
    except ApiError as e:
        flash_api_error(e, "Failed to update quotation")
        return _render_editor(doc, quotation, status=400)

    flash("Quotation updated successfully", "success")
    return redirect(url_for("quotations.view_quotation", quotation_id=quotation_id))


@quotations_bp.post("/<quotation_id>/status")
@require_login
@require_permission(PERMISSIONS.SALES_UPDATE)
def update_quotation_status(quotation_id):
    status = request.form.get("status") or ""
    try:
        quotations_service.update_quotation_status(quotation_id, status)
    except QuotationInputError as e:
        flash(str(e), "error")
    except ApiError as e:
        flash_api_error(e, "Failed to update quotation status")
    else:
        flash(f"Quotation marked as {status.lower()}", "success")
    return redirect(url_for("quotations.view_quotation", quotation_id=quotation_id))


@quotations_bp.post("/<quotation_id>/convert")
@require_login
@require_permission(PERMISSIONS.SALES_UPDATE)
def convert_to_invoice(quotation_id):
    try:
        invoice = quotations_service.convert_to_invoice(quotation_id)
    except ApiError as e:
        flash_api_error(e, "Failed to convert quotation to invoice")
        return redirect(url_for("quotations.view_quotation", quotation_id=quotation_id))

    number = (invoice or {}).get("invoiceNumber")
    flash(f"Quotation converted to invoice {number}" if number else "Quotation converted to invoice", "success")
    if isinstance(invoice, dict) and invoice.get("id"):
        return redirect(url_for("invoices.view_invoice", invoice_id=invoice["id"]))
    return redirect(url_for("invoices.list_invoices"))


@quotations_bp.post("/<quotation_id>/delete")
@require_login
@require_permission(PERMISSIONS.SALES_DELETE)
def delete_quotation(quotation_id):
    try:
        quotations_service.delete_quotation(quotation_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete quotation")
        return redirect(url_for("quotations.view_quotation", quotation_id=quotation_id))
    flash("Quotation deleted successfully", "success")
    return redirect(url_for("quotations.list_quotations"))
