"""Dibbla apps commands - list, delete and update deployed applications."""

from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from ...core.api.models import DeploymentUpdate
from ...core.apps import delete_app, list_apps, update_app
from ...core.utils.env import parse_env_pairs
from ..utils.session import (
    cli_icon,
    confirm,
    console,
    error_icon,
    get_client,
    handle_errors,
    ok_icon,
    spinner,
)


def list_command():
    """Show all applications deployed to the platform."""
    console.print(f"{cli_icon('🌱', '[>]')} Retrieving Dibbla applications...\n")

    with handle_errors("Failed to list applications"):
        deployments = list_apps(get_client())

    if not deployments.deployments:
        console.print("No applications deployed yet.")
        return

    console.print(f"Found {deployments.total} applications:\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("ALIAS", style="bold")
    table.add_column("URL", overflow="fold")
    table.add_column("STATUS")
    table.add_column("LAST DEPLOYED")

    for dep in deployments.deployments:
        table.add_row(
            escape(dep.alias),
            escape(dep.url),
            _styled_status(dep.status),
            escape(dep.deployed_at or "N/A"),
        )

    console.print(table)


def _styled_status(status: str) -> str:
    colors = {"running": "green", "failed": "red", "stopped": "dim"}
    color = colors.get(status)
    text = escape(status)
    return f"[{color}]{text}[/{color}]" if color else text


def delete_command(
    alias: str = typer.Argument(..., help="Alias of the application to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Delete an application from the platform."""
    console.print(
        f"{cli_icon('🗑️', '[DEL]')} Attempting to delete application '{escape(alias)}'...\n"
    )

    with handle_errors(f"Failed to delete application '{escape(alias)}'"):
        client = get_client()

        if not yes and not confirm(
            f"Are you sure you want to delete '{alias}'? This action cannot be undone."
        ):
            console.print("Deletion cancelled.")
            raise typer.Exit(0)

        with spinner("Deleting..."):
            result = delete_app(client, alias)

    console.print(f"{ok_icon()} {escape(result.message)}")


def update_command(
    alias: str = typer.Argument(..., help="Alias of the deployment to update"),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="Set env var KEY=value (repeatable)"
    ),
    replicas: Optional[int] = typer.Option(
        None, "--replicas", help="Desired number of replicas"
    ),
    cpu: Optional[str] = typer.Option(
        None, "--cpu", help="CPU request/limit (e.g. 500m, 1)"
    ),
    memory: Optional[str] = typer.Option(
        None, "--memory", help="Memory request/limit (e.g. 256Mi, 512Mi)"
    ),
    port: Optional[int] = typer.Option(None, "--port", help="Container port (1-65535)"),
):
    """
    Update an existing deployment (env vars, replicas, cpu, memory, port).

    Examples:
      dibbla apps update myapp -e NODE_ENV=production
      dibbla apps update myapp --replicas 3
      dibbla apps update myapp --cpu 500m --memory 512Mi --port 3000
    """
    try:
        update = DeploymentUpdate(
            environment_variables=parse_env_pairs(env) or None,
            replicas=replicas,
            cpu=cpu or None,
            memory=memory or None,
            port=port,
        )
    except ValidationError as e:
        message = e.errors()[0]["msg"].removeprefix("Value error, ")
        console.print(f"[red]{error_icon()} Error:[/red] {escape(message)}")
        raise typer.Exit(1)

    if update.is_empty:
        console.print(
            f"[red]{error_icon()} Error:[/red] specify at least one of "
            "--env (-e), --replicas, --cpu, --memory, or --port\n"
        )
        console.print("Examples:")
        console.print("  dibbla apps update myapp -e NODE_ENV=production")
        console.print("  dibbla apps update myapp --replicas 3")
        console.print("  dibbla apps update myapp --cpu 500m --memory 512Mi --port 3000")
        raise typer.Exit(1)

    with handle_errors("Update failed"):
        client = get_client()
        console.print(
            f"{cli_icon('✏️', '[UPDATE]')} Updating deployment '{escape(alias)}'...\n"
        )
        deployment = update_app(client, alias, update)

    console.print(f"{ok_icon()} Deployment updated successfully.\n")
    console.print(f"   Alias:  {escape(deployment.alias)}")
    console.print(f"   URL:    {escape(deployment.url)}")
    console.print(f"   Status: {escape(deployment.status)}")
    if deployment.health_check is not None:
        health = deployment.health_check
        console.print(f"   Health: {escape(health.status)} ({health.response_time_ms}ms)")
