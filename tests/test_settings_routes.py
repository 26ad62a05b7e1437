"""System settings page tests (users.read to view, users.update to save)."""

import pytest

from .conftest import body_of, flashes, login_as


SETTINGS = {
    "id": "s1",
    "businessName": "ElectroBill Traders",
    "taxRate": "16.00",
    "defaultCurrency": "KES",
    "invoicePrefix": "INV",
}


class TestSettingsPage:

    def test_view_only_user_gets_disabled_form(self, client, backend):
        login_as(client, ["users.read"])
        backend.add("GET", "/settings", SETTINGS)

        html = client.get("/settings").get_data(as_text=True)

        assert "ElectroBill Traders" in html
        assert "<fieldset disabled>" in html
        assert "Save settings" not in html

    def test_defaults_when_not_set_up(self, admin_client, backend):
        backend.fail("GET", "/settings", 404, "No active settings found")

        html = admin_client.get("/settings").get_data(as_text=True)

        assert "No settings have been saved yet" in html
        assert 'value="QUO"' in html

    def test_view_only_user_cannot_save(self, client, backend):
        login_as(client, ["users.read"])

        response = client.post("/settings", data={"businessName": "X"})

        assert response.status_code == 403
        assert backend.requests == []


class TestSaveSettings:

    @pytest.mark.smoke
    def test_update_existing(self, admin_client, backend):
        backend.add("GET", "/settings", SETTINGS)
        backend.add("PATCH", "/settings/s1", {"data": SETTINGS, "message": "Settings updated"})

        response = admin_client.post("/settings", data={"taxRate": "14", "invoicePrefix": "FKT"})

        assert response.headers["Location"] == "/settings"
        assert body_of(backend.last("PATCH", "/settings/s1")) == {"taxRate": 14.0, "invoicePrefix": "FKT"}
        assert ("success", "Settings saved successfully") in flashes(admin_client)

    def test_create_when_missing(self, admin_client, backend):
        backend.fail("GET", "/settings", 404, "No active settings found")
        backend.add("POST", "/settings", {"data": {"id": "s2"}})

        response = admin_client.post("/settings", data={"businessName": "Kamau Electricals", "taxRate": "16"})

        assert response.status_code == 302
        assert body_of(backend.last("POST", "/settings")) == {"businessName": "Kamau Electricals", "taxRate": 16.0}

    def test_create_requires_business_name(self, admin_client, backend):
        backend.fail("GET", "/settings", 404, "No active settings found")

        response = admin_client.post("/settings", data={"taxRate": "16"})

        assert response.status_code == 400
        assert b"Business name is required" in response.data
        assert backend.calls("POST", "/settings") == []

    @pytest.mark.parametrize("field,value,message", [
        ("taxRate", "150", b"Tax rate cannot exceed 100"),
        ("receiptPrefix", "RECEIPT-NUMBER", b"Prefix cannot be longer than 10 characters"),
    ])
    def test_rejected_values(self, admin_client, backend, field, value, message):
        backend.add("GET", "/settings", SETTINGS)

        response = admin_client.post("/settings", data={field: value})

        assert response.status_code == 400
        assert message in response.data
        assert backend.calls("PATCH", "/settings/s1") == []


class TestSettingsHistory:

    def test_history_lists_records_newest_first(self, admin_client, backend):
        backend.add("GET", "/settings/all", [
            {**SETTINGS, "id": "s0", "businessName": "Old Name", "isActive": False, "updatedAt": "2023-01-01T00:00:00Z"},
            {**SETTINGS, "isActive": True, "updatedAt": "2024-03-01T00:00:00Z"},
        ])

        html = admin_client.get("/settings/history").get_data(as_text=True)

        assert html.index("ElectroBill Traders") < html.index("Old Name")
        assert "/settings/s0/delete" in html
        assert "/settings/s1/delete" not in html

    def test_delete_needs_update_and_delete(self, client, backend):
        login_as(client, ["users.update"])

        response = client.post("/settings/s0/delete")

        assert response.status_code == 403
        assert backend.requests == []

    def test_delete(self, admin_client, backend):
        backend.add("DELETE", "/settings/s0", {"message": "Settings deleted"})

        response = admin_client.post("/settings/s0/delete")

        assert response.headers["Location"] == "/settings/history"
        assert ("success", "Settings record deleted") in flashes(admin_client)

    def test_active_record_cannot_be_deleted(self, admin_client, backend):
        backend.fail("DELETE", "/settings/s1", 400, "Cannot delete active settings")

        admin_client.post("/settings/s1/delete")

        assert ("error", "Cannot delete active settings") in flashes(admin_client)
