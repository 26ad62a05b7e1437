# Overview: System settings calls (business profile, tax rate, document prefixes).

from ..api import ApiNotFoundError, endpoints
from ..extensions import api
from ..models import unwrap


def get_current_settings() -> dict | None:
    """Active settings, or None when the business has not been set up yet."""
    try:
        return unwrap(api.get(endpoints.SETTINGS.BASE))
    except ApiNotFoundError:
        return None


def list_all_settings() -> list:
    return unwrap(api.get(endpoints.SETTINGS.ALL)) or []


def create_settings(data: dict) -> dict:
    return unwrap(api.post(endpoints.SETTINGS.BASE, json=data))


def update_settings(settings_id, data: dict) -> dict:
    return unwrap(api.patch(endpoints.SETTINGS.by_id(settings_id), json=data))


def delete_settings(settings_id):
    return api.delete(endpoints.SETTINGS.by_id(settings_id))
