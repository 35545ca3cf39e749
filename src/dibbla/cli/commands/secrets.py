"""Dibbla secrets commands - global and per-deployment secrets."""

import sys
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ...core.secrets import delete_secret, get_secret, list_secrets, set_secret
from ..utils.session import (
    cli_icon,
    confirm,
    console,
    error_icon,
    get_client,
    handle_errors,
    ok_icon,
)


def _scope_label(deployment: Optional[str]) -> str:
    return f"deployment '{deployment}'" if deployment else "global"


def list_command(
    deployment: Optional[str] = typer.Option(
        None,
        "--deployment",
        "-d",
        help="List secrets for this deployment only (omit for global)",
    ),
):
    """List secrets, global or for one deployment."""
    console.print(f"{cli_icon('🌱', '[>]')} Retrieving secrets...\n")

    with handle_errors("Failed to list secrets"):
        result = list_secrets(get_client(), deployment)

    scope = escape(_scope_label(deployment))
    if not result.secrets:
        console.print(f"No secrets found ({scope}).")
        return

    console.print(f"Found {result.total} secret(s) ({scope}):\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("NAME", style="bold")
    table.add_column("DEPLOYMENT")
    table.add_column("UPDATED")

    for secret in result.secrets:
        table.add_row(
            escape(secret.name),
            escape(secret.deployment_alias or "(global)"),
            escape(secret.updated_at or ""),
        )

    console.print(table)


def _read_stdin() -> str:
    return sys.stdin.read().strip()


def set_command(
    name: str = typer.Argument(..., help="Secret name"),
    value: Optional[str] = typer.Argument(
        None, help="Secret value; read from stdin when omitted"
    ),
    deployment: Optional[str] = typer.Option(
        None,
        "--deployment",
        "-d",
        help="Attach secret to this deployment (omit for global)",
    ),
):
    """
    Create or update a secret.

    Examples:
      dibbla secrets set DATABASE_URL postgres://...
      cat key.pem | dibbla secrets set TLS_KEY -d myapp
    """
    if value is None:
        try:
            value = _read_stdin()
        except OSError as e:
            console.print(
                f"[red]{error_icon()} Failed to read stdin:[/red] {escape(str(e))}"
            )
            raise typer.Exit(1)

    if not value:
        console.print(
            f"[red]{error_icon()} Error:[/red] secret value is required "
            "(provide as second argument or via stdin)"
        )
        raise typer.Exit(1)

    console.print(f"{cli_icon('🌱', '[>]')} Setting secret '{escape(name)}'...\n")

    with handle_errors("Failed to set secret"):
        result = set_secret(get_client(), name, value, deployment)

    console.print(f"{ok_icon()} {escape(result.message)}")
    console.print(f"  Secret: {escape(result.secret.name)}")
    if result.secret.deployment_alias:
        console.print(f"  Deployment: {escape(result.secret.deployment_alias)}")


def get_command(
    name: str = typer.Argument(..., help="Secret name"),
    deployment: Optional[str] = typer.Option(
        None, "--deployment", "-d", help="Get deployment-scoped secret"
    ),
):
    """Print a secret's value to stdout."""
    with handle_errors("Failed to get secret"):
        secret = get_secret(get_client(), name, deployment)

    # plain echo so the value is never parsed as markup
    typer.echo(secret.value, nl=not secret.value.endswith("\n"))


def delete_command(
    name: str = typer.Argument(..., help="Secret name"),
    deployment: Optional[str] = typer.Option(
        None, "--deployment", "-d", help="Delete deployment-scoped secret"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Delete a secret."""
    scope = _scope_label(deployment)
    console.print(
        f"{cli_icon('🗑️', '[DEL]')} Attempting to delete secret "
        f"'{escape(name)}' ({escape(scope)})...\n"
    )

    with handle_errors("Failed to delete secret"):
        client = get_client()

        if not yes and not confirm(
            f"Are you sure you want to delete secret '{name}' ({scope})?"
        ):
            console.print("Deletion cancelled.")
            raise typer.Exit(0)

        result = delete_secret(client, name, deployment)

    console.print(f"{ok_icon()} {escape(result.message)}")
