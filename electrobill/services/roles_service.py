# Overview: Role and permission catalogue calls.

from ..api import endpoints
from ..extensions import api
from ..models import PaginatedResult


def list_roles(page=1, limit=10, search=None) -> PaginatedResult:
    payload = api.get(endpoints.ROLES.BASE, params={"page": page, "limit": limit, "search": search})
    return PaginatedResult.from_payload(payload)


def get_role(role_id) -> dict:
    return api.get(endpoints.ROLES.by_id(role_id))


def create_role(data: dict) -> dict:
    return api.post(endpoints.ROLES.BASE, json=data)


def update_role(role_id, data: dict) -> dict:
    return api.patch(endpoints.ROLES.by_id(role_id), json=data)


def delete_role(role_id):
    return api.delete(endpoints.ROLES.by_id(role_id))


def assign_permissions(role_id, permission_ids) -> dict:
    return api.patch(endpoints.ROLES.permissions(role_id), json={"permissionIds": list(permission_ids)})


def list_permissions(module=None):
    """
    All permissions the backend knows about, optionally for one module.

    Returned as the API sends it: a list, or {data: [...]} on newer builds.
    """
    payload = api.get(endpoints.PERMISSIONS.BASE, params={"module": module})
    if isinstance(payload, dict):
        return payload.get("data") or []
    return payload or []


def list_permissions_by_module(module) -> list:
    payload = api.get(endpoints.PERMISSIONS.by_module(module))
    if isinstance(payload, dict):
        return payload.get("data") or []
    return payload or []


def group_by_module(permissions) -> dict[str, list]:
    grouped: dict[str, list] = {}
    for perm in permissions:
        module = perm.get("module") or (perm.get("name") or "").split(".", 1)[0] or "other"
        grouped.setdefault(module, []).append(perm)
    return dict(sorted(grouped.items()))


def role_permission_ids(role: dict) -> set[str]:
    """Permission ids currently granted to a role, across the API's two shapes."""
    ids = set()
    for entry in role.get("permissions") or []:
        if isinstance(entry, dict):
            perm = entry.get("permission") or entry
            if perm.get("id") is not None:
                ids.add(str(perm["id"]))
        else:
            ids.add(str(entry))
    return ids
