# Overview: System settings page (business profile, tax rate, document numbering prefixes).

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_all_permissions, require_login, require_permission
from ..permissions import PERMISSIONS
from ..services import settings_service
from ..validation import FormPolicy, ValidationError, validate_form
from .helpers import flash_api_error

settings_bp = Blueprint("settings", __name__, url_prefix="/settings")

SETTINGS_POLICY = FormPolicy(
    writable_fields=frozenset({
        "businessName", "businessType", "taxNumber", "email", "phone",
        "addressLine1", "addressLine2", "city", "country", "defaultCurrency",
        "taxRate", "quotationPrefix", "invoicePrefix", "receiptPrefix", "logoUrl",
    }),
    required_on_create=frozenset({"businessName"}),
    numeric_fields=frozenset({"taxRate"}),
    email_fields=frozenset({"email"}),
    labels={"logoUrl": "Logo URL", "addressLine1": "Address line 1", "addressLine2": "Address line 2"},
)

DEFAULT_SETTINGS = {
    "country": "Kenya",
    "defaultCurrency": "KES",
    "taxRate": 16,
    "quotationPrefix": "QUO",
    "invoicePrefix": "INV",
    "receiptPrefix": "RCP",
}


def _check(data: dict) -> dict:
    errors = {}
    if "taxRate" in data and data["taxRate"] > 100:
        errors["taxRate"] = "Tax rate cannot exceed 100"
    for prefix in ("quotationPrefix", "invoicePrefix", "receiptPrefix"):
        if len(data.get(prefix) or "") > 10:
            errors[prefix] = "Prefix cannot be longer than 10 characters"
    return errors


def _render(current, values, errors, status=200):
    return render_template(
        "settings/system.html",
        settings=current,
        values=values,
        errors=errors,
    ), status


@settings_bp.get("")
@require_login
@require_permission(PERMISSIONS.USERS_READ)
def system_settings():
    current = settings_service.get_current_settings()
    return _render(current, current or DEFAULT_SETTINGS, {})


@settings_bp.post("")
@require_login
@require_permission(PERMISSIONS.USERS_UPDATE)
def save_settings():
    """Update the active settings, or create them when none exist yet."""
    current = settings_service.get_current_settings()

    try:
        data = validate_form(request.form, SETTINGS_POLICY, partial=current is not None)
    except ValidationError as e:
        return _render(current, request.form, e.errors, 400)
    errors = _check(data)
    if errors:
        return _render(current, request.form, errors, 400)

    try:
        if current:
            settings_service.update_settings(current["id"], data)
        else:
            settings_service.create_settings(data)
    except ApiError as e:
        flash_api_error(e, "Failed to save settings")
        return _render(current, request.form, {}, 400)

    flash("Settings saved successfully", "success")
    return redirect(url_for("settings.system_settings"))


@settings_bp.get("/history")
@require_login
@require_permission(PERMISSIONS.USERS_READ)
def settings_history():
    """Every saved settings record, newest first, with the active one marked."""
    try:
        records = settings_service.list_all_settings()
    except ApiError as e:
        flash_api_error(e, "Failed to load settings history")
        records = []
    records = sorted(records, key=lambda r: r.get("updatedAt") or "", reverse=True)
    return render_template("settings/history.html", records=records)


@settings_bp.post("/<settings_id>/delete")
@require_login
@require_all_permissions(PERMISSIONS.USERS_UPDATE, PERMISSIONS.USERS_DELETE)
def delete_settings(settings_id):
    try:
        settings_service.delete_settings(settings_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete settings")
    else:
        flash("Settings record deleted", "success")
    return redirect(url_for("settings.settings_history"))
