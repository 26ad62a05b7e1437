# Overview: Sign-in, sign-out and the signed-in user's profile page.

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from .. import session as auth_session
from ..api import ApiError, ApiAuthenticationError, user_message
from ..decorators import require_login
from ..permissions import WILDCARD, PermissionModule, get_module_permissions
from ..services import auth_service
from .helpers import flash_api_error, safe_next

auth_bp = Blueprint("auth", __name__)

MIN_PASSWORD_LENGTH = 6


def _access_summary():
    """Granted actions per module; None when the user holds the wildcard."""
    permissions = auth_session.get_permissions()
    if WILDCARD in permissions:
        return None
    return {
        module: [code.split(".", 1)[1] for code in get_module_permissions(permissions, module)]
        for module in PermissionModule.ALL
    }


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    """
    Login page.

    On success the token and user profile go into the session and the
    browser returns to ?next= (or the dashboard).
    """
    if request.method == "GET":
        if auth_session.is_authenticated():
            return redirect(safe_next(url_for("dashboard.index")))
        return render_template("auth/login.html", email="")

    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""
    errors = {}
    if not email:
        errors["email"] = "Email is required"
    if not password:
        errors["password"] = "Password is required"
    if errors:
        return render_template("auth/login.html", email=email, errors=errors), 400

    try:
        result = auth_service.login(email, password)
    except ApiAuthenticationError as e:
        current_app.logger.info("Failed login for %s", email)
        flash(user_message(e, "Invalid email or password"), "error")
        return render_template("auth/login.html", email=email), 401
    except ApiError as e:
        flash(user_message(e, "Login failed. Please try again."), "error")
        return render_template("auth/login.html", email=email), 400

    token = (result or {}).get("access_token")
    user = (result or {}).get("user")
    if not token or not isinstance(user, dict):
        current_app.logger.warning("Login response for %s had no token or user", email)
        flash("Login failed. Please try again.", "error")
        return render_template("auth/login.html", email=email), 502

    auth_session.save_login(token, user)
    current_app.logger.info("User %s signed in", email)
    flash(f"Welcome back, {auth_session.display_name(user)}!", "success")
    return redirect(safe_next(url_for("dashboard.index")))


@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    auth_session.clear()
    flash("You have been signed out.", "info")
    return redirect(url_for("auth.login"))


@auth_bp.get("/settings/profile")
@require_login
def profile():
    """Fresh profile from the API; keeps the stored copy in sync."""
    try:
        profile_data = auth_service.get_profile()
    except ApiError as e:
        flash_api_error(e, "Failed to load profile")
        profile_data = auth_session.get_current_user()
    else:
        if isinstance(profile_data, dict):
            auth_session.refresh_user(profile_data)
    return render_template(
        "auth/profile.html",
        profile=profile_data or {},
        access=_access_summary(),
        errors={},
    )


@auth_bp.post("/settings/profile/password")
@require_login
def change_password():
    current = request.form.get("currentPassword") or ""
    new = request.form.get("newPassword") or ""
    confirm = request.form.get("confirmPassword") or ""

    errors = {}
    if not current:
        errors["currentPassword"] = "Current password is required"
    if len(new) < MIN_PASSWORD_LENGTH:
        errors["newPassword"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if new != confirm:
        errors["confirmPassword"] = "Passwords do not match"
    if errors:
        return render_template(
            "auth/profile.html",
            profile=auth_session.get_current_user() or {},
            access=_access_summary(),
            errors=errors,
        ), 400

    try:
        auth_service.change_password(current, new)
    except ApiAuthenticationError as e:
        # a wrong current password comes back as 401; do not end the session
        flash(user_message(e, "Current password is incorrect"), "error")
        return redirect(url_for("auth.profile"))
    except ApiError as e:
        flash_api_error(e, "Failed to change password")
        return redirect(url_for("auth.profile"))

    flash("Password changed successfully", "success")
    return redirect(url_for("auth.profile"))
