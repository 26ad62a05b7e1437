# Overview: Shared helpers for page handlers (list arguments, flashing API failures).

from urllib.parse import urlparse

from flask import current_app, flash, request, url_for

from ..api import ApiError, ApiAuthenticationError, ApiUnavailableError, user_message
from ..pagination import Pagination, parse_page_args


def list_args():
    """(page, limit, search) from the query string."""
    page, limit = parse_page_args(request.args, current_app.config["DEFAULT_PAGE_SIZE"])
    search = (request.args.get("search") or "").strip() or None
    return page, limit, search


def flag_arg(name: str) -> bool | None:
    """Checkbox-style query flag: True when set, None (not sent) otherwise."""
    value = (request.args.get(name) or "").lower()
    return True if value in ("1", "true", "on", "yes") else None


def arg(name: str) -> str | None:
    return (request.args.get(name) or "").strip() or None


def pagination_for(result) -> Pagination:
    return Pagination.from_meta(result.meta)


def flash_api_error(exc: ApiError, fallback: str) -> None:
    """
    Flash the server message (or the fallback) for a failed mutation.

    Expired sessions and an unreachable API are re-raised for the app-wide
    handlers.
    """
    if isinstance(exc, (ApiAuthenticationError, ApiUnavailableError)):
        raise exc
    current_app.logger.info("%s: %s", fallback, exc)
    flash(user_message(exc, fallback), "error")


def safe_next(default: str) -> str:
    """The ?next= target when it stays on this site, else default."""
    target = request.values.get("next") or ""
    parsed = urlparse(target)
    if target.startswith("/") and not target.startswith("//") and not parsed.netloc:
        return target
    return default


def page_url(page: int) -> str:
    """Current URL with ?page= replaced; used by the pager strip."""
    args = request.args.to_dict()
    args["page"] = page
    return url_for(request.endpoint, **{**(request.view_args or {}), **args})
