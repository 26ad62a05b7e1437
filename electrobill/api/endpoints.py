# Overview: Central catalogue of billing API paths, one namespace per resource.

from urllib.parse import quote


def _seg(value) -> str:
    return quote(str(value), safe="")


class AUTH:
    LOGIN = "/auth/login"
    PROFILE = "/auth/profile"
    CHANGE_PASSWORD = "/auth/change-password"


class USERS:
    BASE = "/users"

    @staticmethod
    def by_id(user_id):
        return f"/users/{_seg(user_id)}"

    @staticmethod
    def toggle_status(user_id):
        return f"/users/{_seg(user_id)}/toggle-status"

    @staticmethod
    def reset_password(user_id):
        return f"/users/{_seg(user_id)}/reset-password"


class CUSTOMERS:
    BASE = "/customers"
    OUTSTANDING_BALANCE = "/customers/outstanding-balance"
    TOP_CUSTOMERS = "/customers/top-customers"

    @staticmethod
    def by_id(customer_id):
        return f"/customers/{_seg(customer_id)}"

    @staticmethod
    def toggle_status(customer_id):
        return f"/customers/{_seg(customer_id)}/toggle-status"

    @staticmethod
    def statement(customer_id):
        return f"/customers/{_seg(customer_id)}/statement"


class PRODUCTS:
    BASE = "/products"
    LOW_STOCK = "/products/low-stock"

    @staticmethod
    def by_id(product_id):
        return f"/products/{_seg(product_id)}"

    @staticmethod
    def by_sku(sku):
        return f"/products/sku/{_seg(sku)}"

    @staticmethod
    def toggle_status(product_id):
        return f"/products/{_seg(product_id)}/toggle-status"


class CATEGORIES:
    BASE = "/product-categories"
    HIERARCHY = "/product-categories/hierarchy"

    @staticmethod
    def by_id(category_id):
        return f"/product-categories/{_seg(category_id)}"

    @staticmethod
    def toggle_status(category_id):
        return f"/product-categories/{_seg(category_id)}/toggle-status"


class BRANDS:
    BASE = "/brands"

    @staticmethod
    def by_id(brand_id):
        return f"/brands/{_seg(brand_id)}"

    @staticmethod
    def toggle_status(brand_id):
        return f"/brands/{_seg(brand_id)}/toggle-status"


class INVENTORY:
    BASE = "/inventory"
    SUMMARY = "/inventory/summary"
    LOCATIONS = "/inventory/locations"
    LOW_STOCK = "/inventory/low-stock"

    @staticmethod
    def by_id(inventory_id):
        return f"/inventory/{_seg(inventory_id)}"

    @staticmethod
    def by_product(product_id):
        return f"/inventory/product/{_seg(product_id)}"

    @staticmethod
    def adjust_stock(inventory_id):
        return f"/inventory/{_seg(inventory_id)}/adjust-stock"


class PRODUCT_BATCHES:
    BASE = "/product-batches"
    EXPIRING = "/product-batches/expiring"

    @staticmethod
    def by_id(batch_id):
        return f"/product-batches/{_seg(batch_id)}"

    @staticmethod
    def fifo(product_id, quantity):
        return f"/product-batches/fifo/{_seg(product_id)}/{_seg(quantity)}"

    @staticmethod
    def adjust_stock(batch_id):
        return f"/product-batches/{_seg(batch_id)}/adjust-stock"


class PAYMENTS:
    PAYMENT_METHODS = "/payments/payment-methods"
    PROCESS = "/payments/process"
    RECEIPTS = "/payments/receipts"

    @staticmethod
    def receipt_by_id(receipt_id):
        return f"/payments/receipts/{_seg(receipt_id)}"

    @staticmethod
    def customer_outstanding(customer_id):
        return f"/payments/customers/{_seg(customer_id)}/outstanding-invoices"


class PAYMENT_METHODS:
    BASE = "/payment-methods"

    @staticmethod
    def by_id(method_id):
        return f"/payment-methods/{_seg(method_id)}"

    @staticmethod
    def toggle_status(method_id):
        return f"/payment-methods/{_seg(method_id)}/toggle-status"


class TRANSACTIONS:
    BASE = "/transactions"
    SUMMARY = "/transactions/summary"

    @staticmethod
    def by_id(transaction_id):
        return f"/transactions/{_seg(transaction_id)}"

    @staticmethod
    def customer_statement(customer_id):
        return f"/transactions/customers/{_seg(customer_id)}/statement"


class ROLES:
    BASE = "/roles"

    @staticmethod
    def by_id(role_id):
        return f"/roles/{_seg(role_id)}"

    @staticmethod
    def permissions(role_id):
        return f"/roles/{_seg(role_id)}/permissions"


class PERMISSIONS:
    BASE = "/permissions"

    @staticmethod
    def by_module(module):
        return f"/permissions/modules/{_seg(module)}"


class QUOTATIONS:
    BASE = "/quotations"
    SEARCH_PRODUCTS = "/quotations/search-products"

    @staticmethod
    def by_id(quotation_id):
        return f"/quotations/{_seg(quotation_id)}"

    @staticmethod
    def status(quotation_id):
        return f"/quotations/{_seg(quotation_id)}/status"

    @staticmethod
    def convert_to_invoice(quotation_id):
        return f"/quotations/{_seg(quotation_id)}/convert-to-invoice"


class INVOICES:
    BASE = "/invoices"
    SUMMARY = "/invoices/summary"
    SEARCH_PRODUCTS = "/invoices/search-products"

    @staticmethod
    def by_id(invoice_id):
        return f"/invoices/{_seg(invoice_id)}"

    @staticmethod
    def status(invoice_id):
        return f"/invoices/{_seg(invoice_id)}/status"

    @staticmethod
    def cancel(invoice_id):
        return f"/invoices/{_seg(invoice_id)}/cancel"


class DASHBOARD:
    OVERVIEW = "/dashboard/overview"


class SETTINGS:
    BASE = "/settings"
    ALL = "/settings/all"

    @staticmethod
    def by_id(settings_id):
        return f"/settings/{_seg(settings_id)}"


API_ENDPOINTS = {
    "AUTH": AUTH,
    "USERS": USERS,
    "CUSTOMERS": CUSTOMERS,
    "PRODUCTS": PRODUCTS,
    "CATEGORIES": CATEGORIES,
    "BRANDS": BRANDS,
    "INVENTORY": INVENTORY,
    "PRODUCT_BATCHES": PRODUCT_BATCHES,
    "PAYMENTS": PAYMENTS,
    "PAYMENT_METHODS": PAYMENT_METHODS,
    "TRANSACTIONS": TRANSACTIONS,
    "ROLES": ROLES,
    "PERMISSIONS": PERMISSIONS,
    "QUOTATIONS": QUOTATIONS,
    "INVOICES": INVOICES,
    "DASHBOARD": DASHBOARD,
    "SETTINGS": SETTINGS,
}


def iter_fixed_paths():
    """Yield (resource, name, path) for every non-parameterized endpoint."""
    for resource, namespace in API_ENDPOINTS.items():
        for name, value in vars(namespace).items():
            if name.isupper() and isinstance(value, str):
                yield resource, name, value
