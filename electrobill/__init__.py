# electrobill/__init__.py
import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from .config import Config
from .extensions import api
from .api import (
    ApiError,
    ApiAuthenticationError,
    ApiPermissionError,
    ApiNotFoundError,
    ApiUnavailableError,
)


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please sign in again."


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)
    if not any(getattr(h, "_electrobill", False) for h in app.logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._electrobill = True
        app.logger.addHandler(handler)


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    _configure_logging(app)

    # Initialize extensions
    api.init_app(app)

    # Register blueprints
    from .routes.auth import auth_bp
    from .routes.dashboard import dashboard_bp
    from .routes.customers import customers_bp
    from .routes.products import products_bp
    from .routes.categories import categories_bp
    from .routes.brands import brands_bp
    from .routes.inventory import inventory_bp
    from .routes.batches import batches_bp
    from .routes.quotations import quotations_bp
    from .routes.invoices import invoices_bp
    from .routes.payments import payments_bp
    from .routes.transactions import transactions_bp
    from .routes.users import users_bp
    from .routes.roles import roles_bp
    from .routes.settings import settings_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(brands_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(batches_bp)
    app.register_blueprint(quotations_bp)
    app.register_blueprint(invoices_bp)
    app.register_blueprint(payments_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(roles_bp)
    app.register_blueprint(settings_bp)

    _register_template_helpers(app)
    _register_error_handlers(app)

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app


def _register_template_helpers(app: Flask) -> None:
    from . import session as auth_session
    from .formatting import register_filters
    from .navigation import visible_navigation
    from .permissions import PERMISSIONS, check_multiple_permissions
    from .routes.helpers import page_url

    register_filters(app)
    app.jinja_env.globals["page_url"] = page_url

    @app.context_processor
    def inject_auth():
        user = auth_session.get_current_user()
        permissions = auth_session.get_permissions()

        def has_permission(*codes, require_all=False):
            return check_multiple_permissions(permissions, codes, require_all=require_all)

        return {
            "current_user": user,
            "current_user_name": auth_session.display_name(user),
            "has_permission": has_permission,
            "navigation": visible_navigation(permissions) if user else [],
            "PERMISSIONS": PERMISSIONS,
        }


def _register_error_handlers(app: Flask) -> None:
    from . import session as auth_session

    @app.errorhandler(ApiAuthenticationError)
    def handle_expired_session(exc):
        # 401 from the API: token is gone or expired
        auth_session.clear()
        flash(SESSION_EXPIRED_MESSAGE, "error")
        return redirect(url_for("auth.login", next=request.full_path.rstrip("?")))

    @app.errorhandler(ApiPermissionError)
    def handle_api_forbidden(exc):
        return render_template("forbidden.html", required_permissions=[], message=exc.message), 403

    @app.errorhandler(ApiNotFoundError)
    def handle_api_not_found(exc):
        return render_template(
            "error.html",
            title="Not Found",
            message=exc.message or "The requested record was not found.",
        ), 404

    @app.errorhandler(ApiUnavailableError)
    def handle_api_unavailable(exc):
        return render_template("error.html", title="Service Unavailable", message=exc.message), 502

    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        app.logger.error("Unhandled API error on %s: %s", request.path, exc)
        return render_template(
            "error.html",
            title="Something went wrong",
            message=exc.message or "The billing service returned an error.",
        ), 502
