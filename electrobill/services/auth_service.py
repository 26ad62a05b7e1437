# Overview: Authentication calls against the billing API.

from ..api import endpoints
from ..extensions import api


def login(email: str, password: str) -> dict:
    """
    Exchange credentials for a bearer token.

    Returns {"access_token": ..., "user": {..., "permissions": [...]}}.
    Sent without any stored token.
    """
    return api.post(endpoints.AUTH.LOGIN, json={"email": email, "password": password}, token="")


def get_profile() -> dict:
    return api.get(endpoints.AUTH.PROFILE)


def change_password(current_password: str, new_password: str) -> dict:
    return api.patch(endpoints.AUTH.CHANGE_PASSWORD, json={
        "currentPassword": current_password,
        "newPassword": new_password,
    })
