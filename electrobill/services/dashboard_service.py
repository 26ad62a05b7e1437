# Overview: Dashboard overview call.

from ..api import endpoints
from ..extensions import api


def get_overview(start_date=None, end_date=None) -> dict:
    """Sales, payment, customer and inventory metrics plus recent activity."""
    return api.get(endpoints.DASHBOARD.OVERVIEW, params={
        "startDate": start_date,
        "endDate": end_date,
    }) or {}
