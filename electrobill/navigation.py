# Overview: Sidebar navigation entries, filtered by the signed-in user's permissions.

from dataclasses import dataclass

from .permissions import PERMISSIONS, check_permission


@dataclass(frozen=True)
class NavItem:
    name: str
    endpoint: str
    permission: str | None = None


NAVIGATION = (
    NavItem("Dashboard", "dashboard.index"),
    NavItem("Customers", "customers.list_customers", PERMISSIONS.CUSTOMERS_READ),
    NavItem("Products", "products.list_products", PERMISSIONS.PRODUCTS_READ),
    NavItem("Inventory", "inventory.list_inventory", PERMISSIONS.INVENTORY_READ),
    NavItem("Quotations", "quotations.list_quotations", PERMISSIONS.SALES_READ),
    NavItem("Invoices", "invoices.list_invoices", PERMISSIONS.SALES_READ),
    NavItem("Payments", "payments.list_receipts", PERMISSIONS.PAYMENTS_READ),
    NavItem("Transactions", "transactions.list_transactions", PERMISSIONS.SALES_READ),
    NavItem("Users", "users.list_users", PERMISSIONS.USERS_READ),
    NavItem("Settings", "auth.profile"),
)


def visible_navigation(user_permissions):
    """Entries with no permission are always shown."""
    return [
        item for item in NAVIGATION
        if item.permission is None or check_permission(user_permissions, item.permission)
    ]
