# Overview: Auth session store; keeps the bearer token and user profile under fixed session keys.

from __future__ import annotations

import json
from typing import Any

from flask import has_request_context, session


AUTH_TOKEN_KEY = "auth_token"
USER_DATA_KEY = "user_data"


def save_login(token: str, user: dict) -> None:
    """Persist the login response (token + user profile)."""
    session[AUTH_TOKEN_KEY] = token
    session[USER_DATA_KEY] = json.dumps(user)
    session.permanent = True


def refresh_user(profile: dict) -> None:
    """Merge a fresh /auth/profile response into the stored user."""
    user = get_current_user() or {}
    user.update(profile)
    session[USER_DATA_KEY] = json.dumps(user)


def clear() -> None:
    session.pop(AUTH_TOKEN_KEY, None)
    session.pop(USER_DATA_KEY, None)


def get_token() -> str | None:
    if not has_request_context():
        return None
    return session.get(AUTH_TOKEN_KEY)


def get_current_user() -> dict[str, Any] | None:
    """
    Stored user profile, or None.

    A user entry that cannot be parsed clears both keys so the browser is
    sent back to the login page instead of looping on a broken session.
    """
    if not has_request_context():
        return None
    raw = session.get(USER_DATA_KEY)
    if not raw:
        return None
    try:
        user = json.loads(raw)
    except (TypeError, ValueError):
        clear()
        return None
    if not isinstance(user, dict):
        clear()
        return None
    return user


def is_authenticated() -> bool:
    return bool(get_token()) and get_current_user() is not None


def get_permissions() -> list[str]:
    user = get_current_user()
    if not user:
        return []
    return list(user.get("permissions") or [])


def display_name(user: dict | None) -> str:
    if not user:
        return ""
    name = " ".join(p for p in (user.get("firstName"), user.get("lastName")) if p)
    return name or user.get("username") or user.get("email") or ""
