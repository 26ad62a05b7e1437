# Overview: Permission checks used for route and UI gating, plus definition lookups.
#
# Gating here is presentation only; the billing API enforces the same
# permissions on every call.

from .categories import WILDCARD
from .definitions import PERMISSION_DEFINITIONS


def check_permission(user_permissions, required_permission):
    """True if the user holds the permission or the '*' wildcard."""
    perms = set(user_permissions or ())
    return required_permission in perms or WILDCARD in perms


def check_multiple_permissions(user_permissions, required_permissions, require_all=False):
    """
    Any-of check by default; all-of when require_all is set.

    An empty requirement list grants access.
    """
    required = list(required_permissions or ())
    if not required:
        return True
    if require_all:
        return all(check_permission(user_permissions, p) for p in required)
    return any(check_permission(user_permissions, p) for p in required)


def has_any_permission(user_permissions, permissions):
    return any(check_permission(user_permissions, p) for p in permissions)


def get_module_permissions(user_permissions, module):
    """The subset of the user's permissions that belong to a module."""
    module_codes = {perm[0] for perm in get_permissions_by_module(module)}
    return [p for p in (user_permissions or ()) if p in module_codes]


def get_all_permission_codes():
    """Get list of all permission codes."""
    return [perm[0] for perm in PERMISSION_DEFINITIONS]


def get_permissions_by_module(module):
    """Get all permissions in a module."""
    return [perm for perm in PERMISSION_DEFINITIONS if perm[3] == module]


def get_permission_definition(code):
    """Get full definition for a permission code."""
    for perm in PERMISSION_DEFINITIONS:
        if perm[0] == code:
            return {
                "code": perm[0],
                "name": perm[1],
                "description": perm[2],
                "module": perm[3],
            }
    return None


def validate_permission_code(code):
    """Check if a permission code is valid."""
    return code in get_all_permission_codes()
