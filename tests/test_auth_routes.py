"""
Authentication and page gating tests.

Covers:
- sign in / sign out against the billing API
- redirect to the login page (with ?next=) for anonymous visitors
- Access Denied for missing permissions
- app-wide handling of API failures (expired session, 403, 404, unreachable)
"""

import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from electrobill.session import AUTH_TOKEN_KEY, USER_DATA_KEY

from .conftest import body_of, flashes, login_as, make_user, page_of


def next_param(response):
    return parse_qs(urlparse(response.headers["Location"]).query).get("next", [None])[0]


# =============================================================================
# LOGIN / LOGOUT
# =============================================================================

class TestLogin:

    def test_login_page(self, client):
        response = client.get("/login")

        assert response.status_code == 200
        assert b"Sign in to ElectroBill" in response.data

    @pytest.mark.smoke
    @pytest.mark.auth
    def test_successful_login_stores_token_and_user(self, client, backend):
        user = make_user(["sales.read"])
        backend.add("POST", "/auth/login", {"access_token": "jwt-123", "user": user})

        response = client.post("/login", data={"email": " admin@electrobill.test ", "password": "secret"})

        assert response.status_code == 302
        assert urlparse(response.headers["Location"]).path == "/dashboard"

        sent = backend.last("POST", "/auth/login")
        assert body_of(sent) == {"email": "admin@electrobill.test", "password": "secret"}
        assert "Authorization" not in sent.headers

        with client.session_transaction() as sess:
            assert sess[AUTH_TOKEN_KEY] == "jwt-123"
            assert json.loads(sess[USER_DATA_KEY])["permissions"] == ["sales.read"]

    def test_login_returns_to_next(self, client, backend):
        backend.add("POST", "/auth/login", {"access_token": "jwt", "user": make_user()})

        response = client.post("/login?next=/invoices?status=SENT", data={"email": "a@b.co", "password": "pw"})

        assert response.headers["Location"] == "/invoices?status=SENT"

    @pytest.mark.parametrize("target", ["https://evil.example/steal", "//evil.example"])
    def test_login_ignores_offsite_next(self, client, backend, target):
        backend.add("POST", "/auth/login", {"access_token": "jwt", "user": make_user()})

        response = client.post("/login", query_string={"next": target}, data={"email": "a@b.co", "password": "pw"})

        assert urlparse(response.headers["Location"]).path == "/dashboard"
        assert "evil" not in response.headers["Location"]

    @pytest.mark.auth
    def test_wrong_credentials(self, client, backend):
        backend.add("POST", "/auth/login", {"statusCode": 401}, status=401)

        response = client.post("/login", data={"email": "a@b.co", "password": "wrong"})

        assert response.status_code == 401
        assert b"Invalid email or password" in response.data
        with client.session_transaction() as sess:
            assert AUTH_TOKEN_KEY not in sess

    def test_server_message_is_shown(self, client, backend):
        backend.fail("POST", "/auth/login", 401, "Account is deactivated")

        response = client.post("/login", data={"email": "a@b.co", "password": "pw"})

        assert b"Account is deactivated" in response.data

    def test_missing_fields(self, client, backend):
        response = client.post("/login", data={"email": "", "password": ""})

        assert response.status_code == 400
        assert b"Email is required" in response.data
        assert b"Password is required" in response.data
        assert backend.requests == []

    def test_response_without_token(self, client, backend):
        backend.add("POST", "/auth/login", {"user": make_user()})

        response = client.post("/login", data={"email": "a@b.co", "password": "pw"})

        assert response.status_code == 502

    def test_signed_in_user_skips_login_page(self, admin_client):
        response = admin_client.get("/login")

        assert response.status_code == 302

    def test_logout_clears_session(self, admin_client):
        response = admin_client.post("/logout")

        assert response.status_code == 302
        assert urlparse(response.headers["Location"]).path == "/login"
        with admin_client.session_transaction() as sess:
            assert AUTH_TOKEN_KEY not in sess
            assert USER_DATA_KEY not in sess


class TestProfile:

    def test_change_password_validation(self, admin_client, backend):
        response = admin_client.post("/settings/profile/password", data={
            "currentPassword": "old",
            "newPassword": "abc",
            "confirmPassword": "abd",
        })

        assert response.status_code == 400
        assert b"Password must be at least 6 characters" in response.data
        assert b"Passwords do not match" in response.data
        assert backend.calls("PATCH", "/auth/change-password") == []

    def test_wrong_current_password_keeps_session(self, admin_client, backend):
        backend.fail("PATCH", "/auth/change-password", 401, "Current password is incorrect")

        response = admin_client.post("/settings/profile/password", data={
            "currentPassword": "nope",
            "newPassword": "secret123",
            "confirmPassword": "secret123",
        })

        assert urlparse(response.headers["Location"]).path == "/settings/profile"
        assert ("error", "Current password is incorrect") in flashes(admin_client)
        with admin_client.session_transaction() as sess:
            assert sess[AUTH_TOKEN_KEY]


# =============================================================================
# GATING
# =============================================================================

class TestGating:

    @pytest.mark.smoke
    @pytest.mark.auth
    @pytest.mark.parametrize("path", ["/dashboard", "/customers", "/invoices/new", "/payments/process"])
    def test_anonymous_is_sent_to_login(self, client, backend, path):
        response = client.get(path)

        assert response.status_code == 302
        assert urlparse(response.headers["Location"]).path == "/login"
        assert next_param(response) == path
        assert backend.requests == []

    def test_next_keeps_query_string(self, client):
        response = client.get("/invoices?status=OVERDUE")

        assert next_param(response) == "/invoices?status=OVERDUE"

    @pytest.mark.auth
    def test_missing_permission_is_denied(self, client, backend):
        login_as(client, ["sales.read"])

        response = client.get("/customers")

        assert response.status_code == 403
        assert b"Access Denied" in response.data
        assert b"customers.read" in response.data
        assert backend.requests == []

    def test_read_permission_does_not_allow_create(self, client, backend):
        login_as(client, ["sales.read", "customers.read"])

        assert client.get("/quotations/new").status_code == 403
        assert client.post("/invoices/i1/cancel").status_code == 403
        assert backend.requests == []

    def test_broken_user_entry_logs_out(self, client):
        with client.session_transaction() as sess:
            sess[AUTH_TOKEN_KEY] = "tok"
            sess[USER_DATA_KEY] = "{not json"

        response = client.get("/dashboard")

        assert urlparse(response.headers["Location"]).path == "/login"
        with client.session_transaction() as sess:
            assert AUTH_TOKEN_KEY not in sess

    def test_navigation_follows_permissions(self, client, backend):
        login_as(client, ["sales.read"])
        backend.add("GET", "/dashboard/overview", {})

        html = client.get("/dashboard").get_data(as_text=True)

        assert 'href="/invoices"' in html
        assert 'href="/customers"' not in html


# =============================================================================
# API FAILURES
# =============================================================================

class TestApiFailures:

    @pytest.mark.smoke
    def test_expired_token_ends_session(self, admin_client, backend):
        backend.fail("GET", "/customers", 401, "Unauthorized")

        response = admin_client.get("/customers?page=2")

        assert response.status_code == 302
        assert urlparse(response.headers["Location"]).path == "/login"
        assert next_param(response) == "/customers?page=2"
        assert ("error", "Your session has expired. Please sign in again.") in flashes(admin_client)
        with admin_client.session_transaction() as sess:
            assert AUTH_TOKEN_KEY not in sess
            assert USER_DATA_KEY not in sess

    def test_backend_forbidden(self, admin_client, backend):
        backend.fail("GET", "/customers/c1", 403, "Forbidden resource")

        response = admin_client.get("/customers/c1")

        assert response.status_code == 403
        assert b"Forbidden resource" in response.data

    def test_missing_record(self, admin_client, backend):
        backend.fail("GET", "/invoices/i404", 404, "Invoice not found")

        response = admin_client.get("/invoices/i404")

        assert response.status_code == 404
        assert b"Invoice not found" in response.data

    def test_unreachable_api(self, admin_client, backend):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        backend.add("GET", "/dashboard/overview", refuse)

        response = admin_client.get("/dashboard")

        assert response.status_code == 502
        assert b"Unable to reach the billing service" in response.data

    def test_list_failure_is_flashed(self, admin_client, backend):
        backend.fail("GET", "/customers", 500, "Database timeout")

        response = admin_client.get("/customers")

        assert response.status_code == 200
        assert b"Database timeout" in response.data
        assert b"No customers found" in response.data

    def test_list_failure_without_message_uses_fallback(self, admin_client, backend):
        backend.add("GET", "/customers", {"statusCode": 500}, status=500)

        response = admin_client.get("/customers")

        assert b"Failed to load customers" in response.data


def test_home_redirects_to_dashboard(client):
    response = client.get("/")

    assert urlparse(response.headers["Location"]).path == "/dashboard"


def test_page_with_data(admin_client, backend):
    backend.add("GET", "/customers", page_of([
        {"id": "c1", "customerCode": "CUS-001", "businessName": "Kamau Electricals", "phone": "0700", "isActive": True},
    ]))

    response = admin_client.get("/customers")

    assert response.status_code == 200
    assert b"Kamau Electricals" in response.data


def test_profile_lists_access_per_module(client, backend):
    login_as(client, ["sales.read", "sales.create", "customers.read"])
    backend.add("GET", "/auth/profile", make_user(["sales.read", "sales.create", "customers.read"]))

    html = client.get("/settings/profile").get_data(as_text=True)

    assert "<tr><th>Sales</th><td>read, create</td></tr>" in html
    assert "<tr><th>Payments</th><td>No access</td></tr>" in html
