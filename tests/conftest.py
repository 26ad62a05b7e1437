# ElectroBill Console Test Suite - Shared Configuration and Fixtures
#
# This module provides:
# - A fake billing API served through httpx.MockTransport
# - Application and test client fixtures
# - Session helpers for signing in with a given permission set

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from electrobill import create_app
from electrobill.session import AUTH_TOKEN_KEY, USER_DATA_KEY


API_BASE_URL = "http://billing.test/api"
API_PREFIX = "/api"
TEST_TOKEN = "test-token"


# =============================================================================
# FAKE BILLING API
# =============================================================================

class FakeBackend:
    """
    Canned responses keyed by (METHOD, path), with every request recorded.

    Paths are registered without the /api prefix, the same way the endpoint
    catalogue spells them. A body may be a callable taking the
    httpx.Request, for responses that depend on what was sent. Unknown
    routes answer 404 like the real API does.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> "FakeBackend":
        self.routes[(method.upper(), path)] = (status, body)
        return self

    def fail(self, method: str, path: str, status: int, message: Any = "Request failed") -> "FakeBackend":
        return self.add(method, path, {"message": message, "error": "Error", "statusCode": status}, status)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]

        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(
                404,
                json={"message": f"Cannot {request.method} {path}", "error": "Not Found", "statusCode": 404},
            )

        status, body = route
        if callable(body):
            body = body(request)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        full = API_PREFIX + path
        return [r for r in self.requests if r.method == method.upper() and r.url.path == full]

    def last(self, method: str, path: str) -> httpx.Request:
        calls = self.calls(method, path)
        assert calls, f"expected a {method} {path} call; got {[(r.method, r.url.path) for r in self.requests]}"
        return calls[-1]


def body_of(request: httpx.Request) -> Any:
    """JSON body of a recorded request."""
    return json.loads(request.content) if request.content else None


def page_of(rows: list, total: Optional[int] = None, page: int = 1, limit: int = 10) -> dict:
    """A {data, meta} list envelope."""
    total = len(rows) if total is None else total
    return {
        "data": rows,
        "meta": {"total": total, "page": page, "limit": limit, "totalPages": max(1, -(-total // limit))},
    }


# =============================================================================
# APP FIXTURES
# =============================================================================

@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def app(backend):
    """Application wired to the fake billing API."""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "API_BASE_URL": API_BASE_URL,
        "API_TRANSPORT": backend.transport,
        "LOG_LEVEL": "WARNING",
    })
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


# =============================================================================
# AUTH HELPERS
# =============================================================================

def make_user(permissions=("*",), **overrides) -> Dict[str, Any]:
    user = {
        "id": "user-1",
        "email": "admin@electrobill.test",
        "username": "admin",
        "firstName": "Ada",
        "lastName": "Wanjiru",
        "role": {"id": "role-1", "name": "Administrator"},
        "permissions": list(permissions),
    }
    user.update(overrides)
    return user


def login_as(client, permissions=("*",), **overrides) -> Dict[str, Any]:
    """Put a signed-in user straight into the session cookie."""
    user = make_user(permissions, **overrides)
    with client.session_transaction() as sess:
        sess[AUTH_TOKEN_KEY] = TEST_TOKEN
        sess[USER_DATA_KEY] = json.dumps(user)
    return user


@pytest.fixture()
def admin_client(client):
    """Test client signed in with the '*' wildcard."""
    login_as(client)
    return client


@pytest.fixture()
def login(client) -> Callable[..., Dict[str, Any]]:
    """login(permissions=[...]) signs the shared client in with those permissions."""
    def _login(permissions=("*",), **overrides):
        return login_as(client, permissions, **overrides)
    return _login


def flashes(client) -> List[Tuple[str, str]]:
    """Pending flash messages as (category, message) pairs."""
    with client.session_transaction() as sess:
        return list(sess.get("_flashes", []))
