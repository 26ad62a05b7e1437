# Overview: Billing API access layer (HTTP client, endpoint catalogue, errors).

from .client import ApiClient
from .errors import (
    ApiError,
    ApiAuthenticationError,
    ApiPermissionError,
    ApiNotFoundError,
    ApiUnavailableError,
    extract_error_message,
    user_message,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiAuthenticationError",
    "ApiPermissionError",
    "ApiNotFoundError",
    "ApiUnavailableError",
    "extract_error_message",
    "user_message",
]
