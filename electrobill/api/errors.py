# Overview: Exceptions raised by the billing API client and helpers to turn them into user messages.

from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    """Raised when the billing API answers with an HTTP error."""

    def __init__(self, message: str | None, status_code: int | None = None, payload: Any = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message or f"API request failed with status {status_code}")


class ApiAuthenticationError(ApiError):
    """401: token missing, invalid or expired."""


class ApiPermissionError(ApiError):
    """403: the backend refused the operation for this user."""


class ApiNotFoundError(ApiError):
    """404: the requested resource does not exist."""


class ApiUnavailableError(ApiError):
    """The API could not be reached at all (DNS, connect, timeout)."""


_STATUS_ERRORS = {
    401: ApiAuthenticationError,
    403: ApiPermissionError,
    404: ApiNotFoundError,
}


def extract_error_message(response: httpx.Response) -> str | None:
    """
    Pull the human readable message out of an error response.

    The backend answers with {"message": ..., "error": ..., "statusCode": ...};
    validation failures send "message" as a list of strings.
    """
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    message = data.get("message")
    if isinstance(message, list):
        parts = [str(m) for m in message if m]
        if parts:
            return ", ".join(parts)
    elif message:
        return str(message)

    error = data.get("error")
    if error:
        return str(error)
    return None


def error_from_response(response: httpx.Response) -> ApiError:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    error_cls = _STATUS_ERRORS.get(response.status_code, ApiError)
    return error_cls(
        extract_error_message(response),
        status_code=response.status_code,
        payload=payload,
    )


def user_message(exc: Exception, fallback: str) -> str:
    """Server-provided message when there is one, otherwise the per-action fallback."""
    if isinstance(exc, ApiError) and exc.message:
        return exc.message
    return fallback
