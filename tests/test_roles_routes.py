"""Role and permission page tests."""

import pytest

from .conftest import body_of, flashes, login_as


PERMISSION_ROWS = [
    {"id": "1", "name": "sales.read", "module": "sales", "action": "read", "description": "View sales"},
    {"id": "2", "name": "sales.create", "module": "sales", "action": "create", "description": "Create sales"},
    {"id": "3", "name": "users.read", "module": "users", "action": "read", "description": "View users"},
]


class TestPermissionCatalog:

    def test_all_permissions_grouped(self, admin_client, backend):
        backend.add("GET", "/permissions", {"data": PERMISSION_ROWS})

        html = admin_client.get("/roles/permissions").get_data(as_text=True)

        assert "<h2>Sales</h2>" in html
        assert "<h2>Users</h2>" in html
        assert "<code>sales.create</code>" in html

    def test_single_module(self, admin_client, backend):
        backend.add("GET", "/permissions/modules/sales", PERMISSION_ROWS[:2])

        html = admin_client.get("/roles/permissions?module=sales").get_data(as_text=True)

        assert "<code>sales.read</code>" in html
        assert "<code>users.read</code>" not in html
        assert backend.calls("GET", "/permissions") == []

    def test_needs_users_read(self, client, backend):
        login_as(client, ["sales.read"])

        assert client.get("/roles/permissions").status_code == 403


class TestRolePermissions:

    @pytest.mark.smoke
    def test_create_role_with_permissions(self, admin_client, backend):
        backend.add("POST", "/roles", {"id": "r9", "name": "Cashier"})

        response = admin_client.post("/roles/new", data={
            "name": "Cashier",
            "description": "",
            "permission_ids": ["2", "1"],
        })

        assert response.headers["Location"] == "/roles"
        assert body_of(backend.last("POST", "/roles")) == {"name": "Cashier", "permissionIds": ["1", "2"]}
        assert ("success", "Role created successfully") in flashes(admin_client)

    def test_assign_replaces_permission_set(self, admin_client, backend):
        backend.add("GET", "/roles/r1", {"id": "r1", "name": "Cashier", "permissions": []})
        backend.add("PATCH", "/roles/r1/permissions", {"id": "r1"})

        response = admin_client.post("/roles/r1/permissions", data={"permission_ids": ["3", "1", "3"]})

        assert response.headers["Location"] == "/roles/r1"
        assert body_of(backend.last("PATCH", "/roles/r1/permissions")) == {"permissionIds": ["1", "3"]}

    def test_manage_form_ticks_granted(self, admin_client, backend):
        backend.add("GET", "/roles/r1", {
            "id": "r1",
            "name": "Cashier",
            "permissions": [{"permission": PERMISSION_ROWS[0]}],
        })
        backend.add("GET", "/permissions", PERMISSION_ROWS)

        html = admin_client.get("/roles/r1/permissions").get_data(as_text=True)

        assert 'value="1" checked' in html
        assert 'value="2" >' in html
