# Overview: All permission definitions organized by module.
# Each permission is defined as: (code, name, description, module)

from .categories import PermissionModule


# -- USERS --

USER_PERMISSIONS = [
    ("users.create", "Create Users", "Create user accounts and reset passwords", PermissionModule.USERS),
    ("users.read", "View Users", "View users, roles and system settings", PermissionModule.USERS),
    ("users.update", "Update Users", "Edit users, roles and system settings", PermissionModule.USERS),
    ("users.delete", "Delete Users", "Delete users and roles", PermissionModule.USERS),
]


# -- CUSTOMERS --

CUSTOMER_PERMISSIONS = [
    ("customers.create", "Create Customers", "Register new customers", PermissionModule.CUSTOMERS),
    ("customers.read", "View Customers", "View customers and statements", PermissionModule.CUSTOMERS),
    ("customers.update", "Update Customers", "Edit customers and toggle their status", PermissionModule.CUSTOMERS),
    ("customers.delete", "Delete Customers", "Delete customers", PermissionModule.CUSTOMERS),
]


# -- PRODUCTS --

PRODUCT_PERMISSIONS = [
    ("products.create", "Create Products", "Create products, categories and brands", PermissionModule.PRODUCTS),
    ("products.read", "View Products", "View products, categories and brands", PermissionModule.PRODUCTS),
    ("products.update", "Update Products", "Edit products, categories and brands", PermissionModule.PRODUCTS),
    ("products.delete", "Delete Products", "Delete products, categories and brands", PermissionModule.PRODUCTS),
]


# -- INVENTORY --

INVENTORY_PERMISSIONS = [
    ("inventory.create", "Create Stock", "Receive product batches", PermissionModule.INVENTORY),
    ("inventory.read", "View Inventory", "View stock levels, batches and expiries", PermissionModule.INVENTORY),
    ("inventory.update", "Adjust Inventory", "Adjust stock and edit batches", PermissionModule.INVENTORY),
    ("inventory.delete", "Delete Stock", "Delete product batches", PermissionModule.INVENTORY),
]


# -- SALES (quotations, invoices, transactions) --

SALES_PERMISSIONS = [
    ("sales.create", "Create Sales", "Create quotations and invoices", PermissionModule.SALES),
    ("sales.read", "View Sales", "View quotations, invoices and transactions", PermissionModule.SALES),
    ("sales.update", "Update Sales", "Edit documents, change status, convert quotations", PermissionModule.SALES),
    ("sales.delete", "Delete Sales", "Delete or cancel quotations and invoices", PermissionModule.SALES),
]


# -- PAYMENTS --

PAYMENT_PERMISSIONS = [
    ("payments.create", "Process Payments", "Record customer payments", PermissionModule.PAYMENTS),
    ("payments.read", "View Payments", "View receipts and payment methods", PermissionModule.PAYMENTS),
    ("payments.update", "Update Payments", "Manage payment methods", PermissionModule.PAYMENTS),
    ("payments.delete", "Delete Payments", "Delete receipts and payment methods", PermissionModule.PAYMENTS),
]


PERMISSION_DEFINITIONS = (
    USER_PERMISSIONS
    + CUSTOMER_PERMISSIONS
    + PRODUCT_PERMISSIONS
    + INVENTORY_PERMISSIONS
    + SALES_PERMISSIONS
    + PAYMENT_PERMISSIONS
)


class PERMISSIONS:
    """Named constants for use in decorators and templates."""
    USERS_CREATE = "users.create"
    USERS_READ = "users.read"
    USERS_UPDATE = "users.update"
    USERS_DELETE = "users.delete"

    CUSTOMERS_CREATE = "customers.create"
    CUSTOMERS_READ = "customers.read"
    CUSTOMERS_UPDATE = "customers.update"
    CUSTOMERS_DELETE = "customers.delete"

    PRODUCTS_CREATE = "products.create"
    PRODUCTS_READ = "products.read"
    PRODUCTS_UPDATE = "products.update"
    PRODUCTS_DELETE = "products.delete"

    INVENTORY_CREATE = "inventory.create"
    INVENTORY_READ = "inventory.read"
    INVENTORY_UPDATE = "inventory.update"
    INVENTORY_DELETE = "inventory.delete"

    SALES_CREATE = "sales.create"
    SALES_READ = "sales.read"
    SALES_UPDATE = "sales.update"
    SALES_DELETE = "sales.delete"

    PAYMENTS_CREATE = "payments.create"
    PAYMENTS_READ = "payments.read"
    PAYMENTS_UPDATE = "payments.update"
    PAYMENTS_DELETE = "payments.delete"
