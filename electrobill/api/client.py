# Overview: Shared httpx client for the billing API; attaches the bearer token and maps failures to ApiError.

from __future__ import annotations

from typing import Any

import httpx
from flask import current_app, g

from ..session import get_token
from .errors import ApiUnavailableError, error_from_response


UNREACHABLE_MESSAGE = "Unable to reach the billing service. Please try again."


class ApiClient:
    """
    Flask extension wrapping one httpx.Client per application context.

    Every request carries the session's bearer token (unless an explicit
    token is passed). Requests are fire-once: failures raise and are never
    retried.
    """

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault("API_BASE_URL", "http://localhost:3000/api")
        app.config.setdefault("API_TIMEOUT_SECONDS", 30.0)
        app.config.setdefault("API_TRANSPORT", None)
        app.extensions["electrobill_api"] = self
        app.teardown_appcontext(self._close_http)

    def _http(self) -> httpx.Client:
        client = g.get("_electrobill_http")
        if client is None:
            config = current_app.config
            client = httpx.Client(
                base_url=config["API_BASE_URL"].rstrip("/"),
                timeout=httpx.Timeout(config["API_TIMEOUT_SECONDS"]),
                transport=config.get("API_TRANSPORT"),
                headers={"Accept": "application/json"},
            )
            g._electrobill_http = client
        return client

    @staticmethod
    def _close_http(exc=None):
        client = g.pop("_electrobill_http", None)
        if client is not None:
            client.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
        token: str | None = None,
    ) -> Any:
        headers = {}
        bearer = token if token is not None else get_token()
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"

        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        current_app.logger.debug("API %s %s params=%s", method, path, params)
        try:
            response = self._http().request(
                method,
                path,
                params=params or None,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            current_app.logger.warning("API %s %s unreachable: %s", method, path, exc)
            raise ApiUnavailableError(UNREACHABLE_MESSAGE) from exc

        if response.is_error:
            error = error_from_response(response)
            current_app.logger.warning(
                "API %s %s failed with %s: %s",
                method, path, response.status_code, error.message,
            )
            raise error

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path: str, params: dict | None = None, **kwargs) -> Any:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, json=json, **kwargs)

    def patch(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)
