"""
Permission gating tests.

Gating is presentation only (the billing API enforces the same rules), but
every page and sidebar entry relies on these checks.
"""

import pytest

from electrobill.navigation import NAVIGATION, visible_navigation
from electrobill.permissions import (
    PERMISSIONS,
    PERMISSION_DEFINITIONS,
    PermissionModule,
    check_multiple_permissions,
    check_permission,
    get_all_permission_codes,
    get_module_permissions,
    get_permission_definition,
    get_permissions_by_module,
    has_any_permission,
    validate_permission_code,
)


class TestCheckPermission:

    @pytest.mark.smoke
    def test_exact_match(self):
        assert check_permission(["sales.read"], "sales.read") is True
        assert check_permission(["sales.read"], "sales.create") is False

    def test_wildcard_grants_everything(self):
        assert check_permission(["*"], "users.delete") is True

    def test_no_permissions(self):
        assert check_permission(None, "sales.read") is False
        assert check_permission([], "sales.read") is False


class TestCheckMultiple:

    @pytest.mark.parametrize("granted,required,require_all,expected", [
        (["sales.read"], ["sales.read", "sales.create"], False, True),
        (["sales.read"], ["sales.read", "sales.create"], True, False),
        (["sales.read", "sales.create"], ["sales.read", "sales.create"], True, True),
        ([], ["sales.read"], False, False),
        (["*"], ["sales.read", "users.update"], True, True),
        ([], [], False, True),
        ([], [], True, True),
    ])
    def test_any_and_all(self, granted, required, require_all, expected):
        assert check_multiple_permissions(granted, required, require_all=require_all) is expected

    def test_has_any_permission(self):
        assert has_any_permission(["payments.read"], ["sales.read", "payments.read"]) is True
        assert has_any_permission(["payments.read"], ["sales.read"]) is False


class TestDefinitions:

    def test_every_code_is_module_dot_action(self):
        for code, _name, _description, module in PERMISSION_DEFINITIONS:
            prefix, action = code.split(".")
            assert prefix == module
            assert module in PermissionModule.ALL
            assert action in ("create", "read", "update", "delete")

    def test_codes_are_unique(self):
        codes = get_all_permission_codes()
        assert len(codes) == len(set(codes))

    def test_constants_are_known_codes(self):
        for name in ("USERS_READ", "CUSTOMERS_CREATE", "SALES_UPDATE", "PAYMENTS_DELETE"):
            assert validate_permission_code(getattr(PERMISSIONS, name))

    def test_by_module(self):
        codes = [perm[0] for perm in get_permissions_by_module("sales")]
        assert codes == ["sales.create", "sales.read", "sales.update", "sales.delete"]

    def test_module_subset_of_user_permissions(self):
        granted = ["sales.read", "customers.read", "sales.create"]
        assert get_module_permissions(granted, "sales") == ["sales.read", "sales.create"]

    def test_definition_lookup(self):
        assert get_permission_definition("customers.read")["module"] == "customers"
        assert get_permission_definition("nope.read") is None
        assert validate_permission_code("nope.read") is False


class TestNavigation:
    """Sidebar entries the user can see."""

    def test_wildcard_sees_everything(self):
        assert visible_navigation(["*"]) == list(NAVIGATION)

    def test_entries_without_permission_are_always_shown(self):
        names = [item.name for item in visible_navigation([])]
        assert names == ["Dashboard", "Settings"]

    def test_sales_read_shows_sales_pages(self):
        names = [item.name for item in visible_navigation(["sales.read"])]
        assert names == ["Dashboard", "Quotations", "Invoices", "Transactions", "Settings"]
