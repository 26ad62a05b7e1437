# Overview: Permission modules and actions; a permission string is "<module>.<action>".


class PermissionModule:
    """Modules that permissions are grouped under."""
    USERS = "users"
    CUSTOMERS = "customers"
    PRODUCTS = "products"
    INVENTORY = "inventory"
    SALES = "sales"
    PAYMENTS = "payments"

    ALL = (USERS, CUSTOMERS, PRODUCTS, INVENTORY, SALES, PAYMENTS)


class PermissionAction:
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

    ALL = (CREATE, READ, UPDATE, DELETE)


WILDCARD = "*"
