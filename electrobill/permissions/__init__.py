# Overview: Permission system package.
# Re-exports all public APIs for convenient imports.

from .categories import PermissionModule, PermissionAction, WILDCARD
from .definitions import (
    PERMISSIONS,
    PERMISSION_DEFINITIONS,
    USER_PERMISSIONS,
    CUSTOMER_PERMISSIONS,
    PRODUCT_PERMISSIONS,
    INVENTORY_PERMISSIONS,
    SALES_PERMISSIONS,
    PAYMENT_PERMISSIONS,
)
from .helpers import (
    check_permission,
    check_multiple_permissions,
    has_any_permission,
    get_module_permissions,
    get_all_permission_codes,
    get_permissions_by_module,
    get_permission_definition,
    validate_permission_code,
)

__all__ = [
    "PermissionModule",
    "PermissionAction",
    "WILDCARD",
    "PERMISSIONS",
    "PERMISSION_DEFINITIONS",
    "USER_PERMISSIONS",
    "CUSTOMER_PERMISSIONS",
    "PRODUCT_PERMISSIONS",
    "INVENTORY_PERMISSIONS",
    "SALES_PERMISSIONS",
    "PAYMENT_PERMISSIONS",
    "check_permission",
    "check_multiple_permissions",
    "has_any_permission",
    "get_module_permissions",
    "get_all_permission_codes",
    "get_permissions_by_module",
    "get_permission_definition",
    "validate_permission_code",
]
