"""CLI entry point for permission-tree.

Invoked as::

    permtree [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m permission_tree.cli.main

Commands
--------
- validate   Check statements against the permission grammar
- build      Merge the blocks of a config file and print the effective statements
- check      Authorize a requested statement against a config file
- version    Show version information
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable, TypeVar, cast

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

F = TypeVar("F", bound=Callable[..., object])

_DEFAULT_CONFIG = Path("permissions.yaml")

# Deny statements start with "-", so they must reach the command as
# arguments. Commands taking statements therefore have no short options.
_STATEMENT_ARGS: dict[str, object] = {"ignore_unknown_options": True}


def _config_option(*short_names: str) -> Callable[[F], F]:
    return click.option(
        "--config",
        *short_names,
        "config_path",
        default=str(_DEFAULT_CONFIG),
        show_default=True,
        type=click.Path(exists=True, dir_okay=False),
        help="Path to the permission blocks YAML file.",
    )


_strict_option = click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Reject unknown keys and invalid statements in the config.",
)


def _load_blocks(config_path: str, strict: bool) -> list[list[str]]:
    from permission_tree.loader.block_loader import BlockLoader, PermissionConfigError

    try:
        config = BlockLoader(strict=strict).load(config_path)
    except PermissionConfigError as exc:
        err_console.print(f"[red]Invalid config:[/red] {escape(str(exc))}")
        sys.exit(2)
    return config.statement_blocks()


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="permission-tree")
def cli() -> None:
    """Permission tree CLI — validate, merge and evaluate permission statements."""


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from permission_tree import __version__

    console.print(
        Panel(
            f"[bold]permission-tree[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Grant/deny permission statements merged into an authorization tree.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@cli.command(name="validate", context_settings=_STATEMENT_ARGS)
@click.argument("statements", nargs=-1, required=True)
def validate_command(statements: tuple[str, ...]) -> None:
    """Check STATEMENTS against the permission grammar."""
    from permission_tree.statements.grammar import validate_permission

    table = Table(title="Statement Validation", box=box.SIMPLE)
    table.add_column("Statement", style="cyan")
    table.add_column("Result")

    invalid = 0
    for statement in statements:
        if validate_permission(statement):
            table.add_row(escape(statement), "[green]VALID[/green]")
        else:
            invalid += 1
            table.add_row(escape(statement), "[red]INVALID[/red]")

    console.print(table)
    sys.exit(1 if invalid else 0)


# ---------------------------------------------------------------------------
# build
# ---------------------------------------------------------------------------


@cli.command(name="build")
@_config_option("-c")
@_strict_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the tree as JSON.")
def build_command(config_path: str, strict: bool, as_json: bool) -> None:
    """Merge the configured blocks and print the effective statements."""
    from permission_tree.tree.builder import parse_permissions
    from permission_tree.tree.serializer import stringify_permissions

    tree = parse_permissions(_load_blocks(config_path, strict))

    if as_json:
        click.echo(json.dumps(tree, indent=2))
        return

    statements = stringify_permissions(tree)
    if not statements:
        console.print("[yellow]No effective permissions.[/yellow]")
        return

    table = Table(title="Effective Permissions", box=box.SIMPLE)
    table.add_column("Statement", style="cyan")
    for statement in statements:
        style = "green" if statement.startswith("+") else "red"
        table.add_row(f"[{style}]{statement}[/{style}]")
    console.print(table)
    console.print(f"  Apps: [cyan]{len(tree)}[/cyan]  Statements: [cyan]{len(statements)}[/cyan]")


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check", context_settings=_STATEMENT_ARGS)
@click.argument("requested")
@_config_option()
@_strict_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the decision as JSON.")
def check_command(requested: str, config_path: str, strict: bool, as_json: bool) -> None:
    """Authorize the REQUESTED statement against the configured blocks."""
    from permission_tree.authorization.authorizer import AuthorizationResult, authorize
    from permission_tree.tree.builder import parse_permissions

    tree = parse_permissions(_load_blocks(config_path, strict))
    result = cast(AuthorizationResult, authorize(tree, requested, verbose=True))

    if as_json:
        click.echo(json.dumps(result.to_dict()))
    elif not result.ok:
        err_console.print(f"[red]Error:[/red] {result.error}: {escape(requested)}")
    else:
        status_str = "[green]AUTHORIZED[/green]" if result.authorized else "[red]DENIED[/red]"
        console.print(Panel(status_str, title="Authorization Result", border_style="blue"))
        console.print(f"  Requested: [bold]{escape(requested)}[/bold]")
        console.print(f"  Message: {escape(str(result.message))}")

    if not result.ok:
        sys.exit(2)
    sys.exit(0 if result.authorized else 1)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
