# Overview: Flask CLI command groups for API inspection and permission checks.

# electrobill/cli.py
# Commands Legend:
# Prereqs:
# - Set FLASK_APP=electrobill (or run through `flask --app electrobill`).
#
# API inspection:
# - flask api endpoints
#   Print the billing API endpoint catalogue.
# - flask api ping [--token TOKEN]
#   Call GET /settings and report whether the billing API answers.
#
# Permission inspection:
# - flask perms list [--module sales]
#   List permission definitions, optionally for one module.
# - flask perms check sales.read customers.read --require sales.create [--all]
#   Evaluate the page gating rule offline for a set of granted permissions.

import click
from flask import current_app
from flask.cli import with_appcontext

from .api import ApiError, ApiAuthenticationError, endpoints
from .extensions import api
from .permissions import (
    PERMISSION_DEFINITIONS,
    check_multiple_permissions,
    get_permissions_by_module,
    validate_permission_code,
)


@click.group('api')
def api_group():
    """Billing API inspection commands."""


@api_group.command('endpoints')
def list_endpoints_cli():
    """Print the endpoint catalogue."""
    for resource, name, path in endpoints.iter_fixed_paths():
        click.echo(f"{resource + '.' + name:<36} {path}")


@api_group.command('ping')
@click.option('--token', default=None, help='Bearer token to send')
@with_appcontext
def ping_cli(token):
    """Check that the billing API is reachable."""
    base_url = current_app.config["API_BASE_URL"]
    try:
        api.get(endpoints.SETTINGS.BASE, token=token or "")
    except ApiAuthenticationError:
        # reachable, just not signed in
        click.echo(f"PASS {base_url} is reachable (authentication required)")
        return
    except ApiError as e:
        if e.status_code is None:
            click.echo(f"FAIL {base_url} is unreachable: {e.message}")
            raise SystemExit(1)
        click.echo(f"PASS {base_url} is reachable (HTTP {e.status_code}: {e.message})")
        return
    click.echo(f"PASS {base_url} is reachable")


@click.group('perms')
def perms_group():
    """Permission inspection commands."""


@perms_group.command('list')
@click.option('--module', help='Filter by module (users, customers, products, inventory, sales, payments)')
def list_permissions_cli(module):
    """List permission definitions, optionally filtered by module."""
    if module:
        definitions = get_permissions_by_module(module)
        if not definitions:
            click.echo(f"FAIL Unknown module '{module}'")
            return
    else:
        definitions = PERMISSION_DEFINITIONS

    click.echo(f"{'Code':<22} {'Name':<22} {'Description'}")
    click.echo("-"*80)
    for code, name, description, _module in definitions:
        click.echo(f"{code:<22} {name:<22} {description}")
    click.echo(f"\n Total: {len(definitions)} permissions\n")


@perms_group.command('check')
@click.argument('granted', nargs=-1)
@click.option('--require', 'required', multiple=True, required=True, help='Permission the page requires (repeatable)')
@click.option('--all', 'require_all', is_flag=True, help='Require every --require code instead of any')
def check_permission_cli(granted, required, require_all):
    """Check whether a set of granted permissions passes a page's gate."""
    for code in required:
        if not validate_permission_code(code):
            click.echo(f"WARN  '{code}' is not a known permission")

    if check_multiple_permissions(list(granted), list(required), require_all=require_all):
        click.echo(f"PASS Access granted ({'all' if require_all else 'any'} of {', '.join(required)})")
    else:
        click.echo(f"FAIL Access denied ({'all' if require_all else 'any'} of {', '.join(required)})")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(api_group)
    app.cli.add_command(perms_group)
