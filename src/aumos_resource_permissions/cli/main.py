"""CLI entry point for aumos-resource-permissions.

Invoked as::

    resource-perm [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m aumos_resource_permissions.cli.main

Commands
--------
- canonicalize  Print the canonical form of an HTTP actions string
- check         Check a request against a YAML grant file
- implies       Compare two permissions in both directions
- validate      Validate a YAML grant file and list its permissions
- version       Show version information
"""
from __future__ import annotations

import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from aumos_resource_permissions.permissions.http_methods import MethodSet
from aumos_resource_permissions.permissions.permission_loader import (
    PermissionConfigError,
    PermissionLoader,
)
from aumos_resource_permissions.permissions.resource_permission import (
    ResourcePermission,
)
from aumos_resource_permissions.permissions.url_pattern import MalformedSpecError

console = Console()
err_console = Console(stderr=True)

_DEFAULT_CONFIG = Path("permissions.yaml")


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="aumos-resource-permissions")
def cli() -> None:
    """Resource Permissions CLI — URL pattern and HTTP method permission tools."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from aumos_resource_permissions import __version__

    console.print(
        Panel(
            f"[bold]aumos-resource-permissions[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Web resource permissions: URL pattern specs and HTTP method sets.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# canonicalize
# ---------------------------------------------------------------------------


@cli.command(name="canonicalize")
@click.argument("actions", required=False, default=None)
def canonicalize_command(actions: str | None) -> None:
    """Print the canonical form of an ACTIONS string."""
    methods = MethodSet.parse(actions)
    console.print(str(methods), markup=False)


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(exists=True),
    help="Path to a YAML grant file.",
)
@click.option("--name", "-n", required=True, help="Requested resource, e.g. /admin/users.")
@click.option("--method", "-m", default=None, help="HTTP method of the request.")
def check_command(config_path: str, name: str, method: str | None) -> None:
    """Check whether any granted permission covers a request."""
    try:
        grants = PermissionLoader().load(config_path)
        result = grants.check(name, method)
    except (PermissionConfigError, MalformedSpecError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    if result.allowed:
        status_str = "[green]ALLOWED[/green]"
    else:
        status_str = "[red]DENIED[/red]"
    console.print(Panel(status_str, title="Permission Check Result", border_style="blue"))

    if result.matched_permission is not None:
        console.print(
            f"  Granted by: [bold cyan]{result.matched_permission.name}[/bold cyan] "
            f"({result.matched_permission.methods})",
            highlight=False,
        )

    sys.exit(0 if result.allowed else 1)


# ---------------------------------------------------------------------------
# implies
# ---------------------------------------------------------------------------


@cli.command(name="implies")
@click.argument("granted")
@click.argument("requested")
@click.option("--granted-actions", default=None, help="Actions of the granted permission.")
@click.option("--requested-actions", default=None, help="Actions of the requested permission.")
def implies_command(
    granted: str,
    requested: str,
    granted_actions: str | None,
    requested_actions: str | None,
) -> None:
    """Compare a GRANTED permission with a REQUESTED one."""
    try:
        granted_perm = ResourcePermission(granted, granted_actions)
        requested_perm = ResourcePermission(requested, requested_actions)
    except MalformedSpecError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    table = Table(title="Implication", box=box.SIMPLE)
    table.add_column("Relation", style="cyan")
    table.add_column("Result")
    table.add_row("granted implies requested", _yes_no(granted_perm.implies(requested_perm)))
    table.add_row("requested implies granted", _yes_no(requested_perm.implies(granted_perm)))
    table.add_row("equal", _yes_no(granted_perm == requested_perm))
    console.print(table)

    sys.exit(0 if granted_perm.implies(requested_perm) else 1)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(exists=True),
    help="Path to a YAML grant file.",
)
def validate_command(config_path: str) -> None:
    """Validate a YAML grant file and list its permissions."""
    try:
        grants = PermissionLoader(strict=True).load(config_path)
    except PermissionConfigError as exc:
        console.print(Panel(f"[red]INVALID[/red]  {exc}", title="Validation", border_style="red"))
        sys.exit(1)

    console.print(
        Panel(
            f"[green]VALID[/green]  {len(grants)} permission(s)",
            title="Validation",
            border_style="green",
        )
    )
    table = Table(title="Granted Permissions", box=box.SIMPLE)
    table.add_column("Name", style="cyan")
    table.add_column("Methods", style="magenta")
    for permission in grants:
        table.add_row(permission.name, str(permission.methods))
    console.print(table)


def _yes_no(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


if __name__ == "__main__":
    cli()
