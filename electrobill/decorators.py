# Overview: Login and permission decorators for console pages.

from functools import wraps

from flask import current_app, redirect, render_template, request, url_for

from . import session as auth_session
from .permissions import check_multiple_permissions


def require_login(f):
    """
    Require a stored session (token + user profile).

    Unauthenticated visitors are redirected to the login page with the
    requested path in ?next= so they land back where they started.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not auth_session.is_authenticated():
            return redirect(url_for("auth.login", next=request.full_path.rstrip("?")))
        return f(*args, **kwargs)

    return decorated_function


def require_permission(*permission_codes, require_all=False):
    """
    Render the guarded page only if the user's permissions match.

    By default any one of the codes is enough; with require_all the user
    must hold every code. Failures render the Access Denied page (403).
    Must be applied under @require_login.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not auth_session.is_authenticated():
                return redirect(url_for("auth.login", next=request.full_path.rstrip("?")))

            user_permissions = auth_session.get_permissions()
            if not check_multiple_permissions(user_permissions, permission_codes, require_all=require_all):
                current_app.logger.info(
                    "Access denied to %s: requires %s of %s",
                    request.path,
                    "all" if require_all else "any",
                    ", ".join(permission_codes),
                )
                return render_template(
                    "forbidden.html",
                    required_permissions=list(permission_codes),
                    require_all=require_all,
                ), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_any_permission(*permission_codes):
    """Require any of the specified permissions."""
    return require_permission(*permission_codes, require_all=False)


def require_all_permissions(*permission_codes):
    """Require all of the specified permissions."""
    return require_permission(*permission_codes, require_all=True)
