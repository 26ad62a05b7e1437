# Overview: Role pages (list, create, edit, manage permissions, delete).

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..api import ApiError
from ..decorators import require_login, require_permission
from ..permissions import PERMISSIONS, PermissionModule
from ..services import roles_service
from ..validation import FormPolicy, ValidationError, validate_form
from .helpers import arg, flash_api_error, list_args, pagination_for

roles_bp = Blueprint("roles", __name__, url_prefix="/roles")

ROLE_POLICY = FormPolicy(
    writable_fields=frozenset({"name", "description"}),
    required_on_create=frozenset({"name"}),
)


def _permission_groups():
    try:
        return roles_service.group_by_module(roles_service.list_permissions())
    except ApiError as e:
        flash_api_error(e, "Failed to load permissions")
        return {}


@roles_bp.get("")
@require_login
@require_permission(PERMISSIONS.USERS_READ)
def list_roles():
    page, limit, search = list_args()
    try:
        result = roles_service.list_roles(page, limit, search)
    except ApiError as e:
        flash_api_error(e, "Failed to load roles")
        result = None
    return render_template(
        "roles/list.html",
        roles=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        search=search or "",
    )


@roles_bp.get("/permissions")
@require_login
@require_permission(PERMISSIONS.USERS_READ)
def permission_catalog():
    """Every permission the backend defines, optionally narrowed to ?module=."""
    module = arg("module")
    try:
        if module:
            permissions = roles_service.list_permissions_by_module(module)
        else:
            permissions = roles_service.list_permissions()
    except ApiError as e:
        flash_api_error(e, "Failed to load permissions")
        permissions = []
    return render_template(
        "roles/catalog.html",
        permission_groups=roles_service.group_by_module(permissions),
        module=module or "",
        modules=PermissionModule.ALL,
    )


@roles_bp.route("/new", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.USERS_CREATE)
def create_role():
    """New role; permissions ticked here are sent as permissionIds."""
    def render(values, errors, selected, status=200):
        return render_template(
            "roles/form.html",
            role=None,
            values=values,
            errors=errors,
            permission_groups=_permission_groups(),
            selected_ids=selected,
        ), status

    if request.method == "GET":
        return render({}, {}, set())

    selected = set(request.form.getlist("permission_ids"))
    try:
        data = validate_form(request.form, ROLE_POLICY, partial=False)
    except ValidationError as e:
        return render(request.form, e.errors, selected, 400)
    if selected:
        data["permissionIds"] = sorted(selected)

    try:
        roles_service.create_role(data)
    except ApiError as e:
        flash_api_error(e, "Failed to create role")
        return render(request.form, {}, selected, 400)

    flash("Role created successfully", "success")
    return redirect(url_for("roles.list_roles"))


@roles_bp.get("/<role_id>")
@require_login
@require_permission(PERMISSIONS.USERS_READ)
def view_role(role_id):
    role = roles_service.get_role(role_id)
    granted = roles_service.role_permission_ids(role)
    groups = {
        module: [p for p in perms if str(p.get("id")) in granted]
        for module, perms in _permission_groups().items()
    }
    return render_template("roles/detail.html", role=role, permission_groups={m: p for m, p in groups.items() if p})


@roles_bp.route("/<role_id>/edit", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.USERS_UPDATE)
def edit_role(role_id):
    role = roles_service.get_role(role_id)
    if request.method == "GET":
        return render_template("roles/form.html", role=role, values=role, errors={}, permission_groups=None)

    try:
        data = validate_form(request.form, ROLE_POLICY, partial=True)
    except ValidationError as e:
        return render_template(
            "roles/form.html", role=role, values=request.form, errors=e.errors, permission_groups=None,
        ), 400

    try:
        roles_service.update_role(role_id, data)
    except ApiError as e:
        flash_api_error(e, "Failed to update role")
        return render_template(
            "roles/form.html", role=role, values=request.form, errors={}, permission_groups=None,
        ), 400

    flash("Role updated successfully", "success")
    return redirect(url_for("roles.view_role", role_id=role_id))


@roles_bp.route("/<role_id>/permissions", methods=["GET", "POST"])
@require_login
@require_permission(PERMISSIONS.USERS_UPDATE)
def manage_permissions(role_id):
    """Replace the role's permission set with the ticked boxes."""
    role = roles_service.get_role(role_id)
    if request.method == "GET":
        return render_template(
            "roles/permissions.html",
            role=role,
            permission_groups=_permission_groups(),
            selected_ids=roles_service.role_permission_ids(role),
        )

    selected = request.form.getlist("permission_ids")
    try:
        roles_service.assign_permissions(role_id, sorted(set(selected)))
    except ApiError as e:
        flash_api_error(e, "Failed to update permissions")
        return render_template(
            "roles/permissions.html",
            role=role,
            permission_groups=_permission_groups(),
            selected_ids=set(selected),
        ), 400

    flash("Permissions updated successfully", "success")
    return redirect(url_for("roles.view_role", role_id=role_id))


@roles_bp.post("/<role_id>/delete")
@require_login
@require_permission(PERMISSIONS.USERS_DELETE)
def delete_role(role_id):
    try:
        roles_service.delete_role(role_id)
    except ApiError as e:
        flash_api_error(e, "Failed to delete role")
        return redirect(url_for("roles.view_role", role_id=role_id))
    flash("Role deleted successfully", "success")
    return redirect(url_for("roles.list_roles"))
