# Overview: Landing redirect and the dashboard overview page.

from flask import Blueprint, redirect, render_template, url_for

from ..api import ApiError
from ..decorators import require_login
from ..services import dashboard_service
from .helpers import arg, flash_api_error

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.get("/")
def home():
    return redirect(url_for("dashboard.index"))


@dashboard_bp.get("/dashboard")
@require_login
def index():
    """
    Overview metrics for an optional date range.

    Query params:
    - start_date, end_date: YYYY-MM-DD (optional)
    """
    start_date = arg("start_date")
    end_date = arg("end_date")
    try:
        overview = dashboard_service.get_overview(start_date, end_date)
    except ApiError as e:
        flash_api_error(e, "Failed to load dashboard data")
        overview = {}
    return render_template(
        "dashboard/index.html",
        overview=overview,
        start_date=start_date or "",
        end_date=end_date or "",
    )
