# Overview: User account calls.

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult


def list_users(page=1, limit=10, search=None) -> PaginatedResult:
    payload = api.get(endpoints.USERS.BASE, params={"page": page, "limit": limit, "search": search})
    return PaginatedResult.from_payload(payload)


def get_user(user_id) -> dict:
    return api.get(endpoints.USERS.by_id(user_id))


def create_user(data: dict) -> dict:
    return api.post(endpoints.USERS.BASE, json=data)


def update_user(user_id, data: dict) -> dict:
    return api.patch(endpoints.USERS.by_id(user_id), json=data)


def delete_user(user_id):
    return api.delete(endpoints.USERS.by_id(user_id))


def toggle_user_status(user_id) -> dict:
    return api.patch(endpoints.USERS.toggle_status(user_id))


def reset_password(user_id, new_password: str):
    return api.patch(endpoints.USERS.reset_password(user_id), json={"newPassword": new_password})
