# Overview: User administration pages (list, create, edit, status toggle, password reset, delete).

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_login, require_permission
from ..permissions import PERMISSIONS
from ..services import roles_service, users_service
from ..validation import FormPolicy, ValidationError, validate_form
from .auth import MIN_PASSWORD_LENGTH
from .helpers import flash_api_error, list_args, pagination_for

users_bp = Blueprint("users", __name__, url_prefix="/users")

USER_CREATE_POLICY = FormPolicy(
    writable_fields=frozenset({"username", "email", "password", "firstName", "lastName", "phone", "roleId"}),
    required_on_create=frozenset({"username", "email", "password", "firstName", "lastName", "roleId"}),
    email_fields=frozenset({"email"}),
    labels={"roleId": "Role"},
)

# Passwords are changed through reset-password, never through an edit
USER_UPDATE_POLICY = FormPolicy(
    writable_fields=frozenset({"username", "email", "firstName", "lastName", "phone", "roleId"}),
    required_on_create=frozenset({"username", "email", "firstName", "lastName", "roleId"}),
    email_fields=frozenset({"email"}),
    labels={"roleId": "Role"},
)

ROLE_PICKER_LIMIT = 100


def _roles():
    try:
        return roles_service.list_roles(page=1, limit=ROLE_PICKER_LIMIT).items
    except ApiError as e:
        flash_api_error(e, "Failed to load roles")
        return []


def _render_form(user, values, errors, status=200):
    return render_template("users/form.html", user=user, roles=_roles(), values=values, errors=errors), status


@users_bp.get("")
@require_login
@require_permission(PERMISSIONS.USERS_READ)
def list_users():
    page, limit, search = list_args()
    try:
        result = users_service.list_users(page, limit, search)
    except ApiError as e:
        flash_api_error(e, "Failed to load users")
        result = None
    return render_template(
        "users/list.html",
        users=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        search=search or "",
    )


@users_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.USERS_CREATE)
def create_user():
    if request.method == "GET":
        return _render_form(None, {}, {})

    try:
        data = validate_form(request.form, USER_CREATE_POLICY, partial=False)
    except ValidationError as e:
        return _render_form(None, request.form, e.errors, 400)
    if len(data["password"]) < MIN_PASSWORD_LENGTH:
        return _render_form(None, request.form, {
            "password": f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        }, 400)

    try:
        users_service.create_user(data)
    except ApiError as e:
        flash_api_error(e, "Failed to create user")
        return _render_form(None, request.form, {}, 400)

    flash("User created successfully", "success")
    return redirect(url_for("users.list_users"))


@users_bp.route("/<user_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.USERS_UPDATE)
def edit_user(user_id):
    user = users_service.get_user(user_id)
    if request.method == "GET":
        values = dict(user)
        values["roleId"] = (user.get("role") or {}).get("id") or user.get("roleId") or ""
        return _render_form(user, values, {})

    try:
        data = validate_form(request.form, USER_UPDATE_POLICY, partial=True)
    except ValidationError as e:
        return _render_form(user, request.form, e.errors, 400)

    try:
        users_service.update_user(user_id, data)
    except ApiError as e:
        flash_api_error(e, "Failed to update user")
        return _render_form(user, request.form, {}, 400)

    flash("User updated successfully", "success")
    return redirect(url_for("users.list_users"))


@users_bp.post("/<user_id>/toggle-status")
@require_login
@require_permission(PERMISSIONS.USERS_UPDATE)
def toggle_user_status(user_id):
    try:
        user = users_service.toggle_user_status(user_id)
    except ApiError as e:
        flash_api_error(e, "Failed to update user status")
    else:
        state = "activated" if (user or {}).get("isActive") else "deactivated"
        flash(f"User {state} successfully", "success")
    return redirect(url_for("users.list_users"))


@users_bp.route("/<user_id>/reset-password", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.USERS_UPDATE)
def reset_password(user_id):
    user = users_service.get_user(user_id)
    if request.method == "GET":
        return render_template("users/reset_password.html", user=user, errors={})

    new_password = request.form.get("newPassword") or ""
    errors = {}
    if len(new_password) < MIN_PASSWORD_LENGTH:
        errors["newPassword"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if new_password != (request.form.get("confirmPassword") or ""):
        errors["confirmPassword"] = "Passwords do not match"
    if errors:
        return render_template("users/reset_password.html", user=user, errors=errors), 400

    try:
        users_service.reset_password(user_id, new_password)
    except ApiError as e:
        flash_api_error(e, "Failed to reset password")
        return render_template("users/reset_password.html", user=user, errors={}), 400

    flash("Password reset successfully", "success")
    return redirect(url_for("users.list_users"))


@users_bp.post("/<user_id>/delete")
@require_login
@require_permission(PERMISSIONS.USERS_DELETE)
def delete_user(user_id):
    try:
        users_service.delete_user(user_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete user")
    else:
        flash("User deleted successfully", "success")
    return redirect(url_for("users.list_users"))
