"""Dibbla db commands - managed databases, dumps and restores."""

from contextlib import nullcontext
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ...core.databases import (
    create_database,
    delete_database,
    dump_database_to_file,
    list_databases,
    restore_database,
)
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


def list_command(
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print database names, one per line (for scripting)",
    ),
):
    """List managed databases."""
    if not quiet:
        console.print(f"{cli_icon('🌱', '[>]')} Retrieving databases...\n")

    with handle_errors("Failed to list databases"):
        result = list_databases(get_client())

    if not result.databases:
        if not quiet:
            console.print("No databases found.")
        return

    if quiet:
        for name in result.databases:
            typer.echo(name)
        return

    console.print(f"Found {result.total} database(s):\n")
    for name in result.databases:
        console.print(f"   {escape(name)}")


def create_command(
    name: Optional[str] = typer.Argument(None, help="Name of the database to create"),
    name_option: Optional[str] = typer.Option(
        None, "--name", help="Name of the database to create"
    ),
):
    """
    Create a managed database.

    Examples:
      dibbla db create mydb
      dibbla db create --name mydb
    """
    name = name or name_option
    if not name:
        console.print(
            f"[red]{error_icon()} Error:[/red] database name is required "
            "(use argument or --name)"
        )
        raise typer.Exit(1)

    console.print(f"{cli_icon('🌱', '[>]')} Creating database '{escape(name)}'...\n")

    with handle_errors("Failed to create database"):
        result = create_database(get_client(), name)

    console.print(f"{ok_icon()} {escape(result.message)}")
    console.print(f"  Database: {escape(result.database)}")


def delete_command(
    name: str = typer.Argument(..., help="Name of the database to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress progress and success output (errors only)",
    ),
):
    """Delete a managed database."""
    if not quiet:
        console.print(
            f"{cli_icon('🗑️', '[DEL]')} Attempting to delete database '{escape(name)}'...\n"
        )

    with handle_errors(f"Failed to delete database '{escape(name)}'"):
        client = get_client()

        if not yes and not confirm(
            f"Are you sure you want to delete database '{name}'? "
            "This action cannot be undone."
        ):
            if not quiet:
                console.print("Deletion cancelled.")
            raise typer.Exit(0)

        with nullcontext() if quiet else spinner("Deleting..."):
            result = delete_database(client, name)

    if not quiet:
        console.print(f"{ok_icon()} {escape(result.message)}")


def dump_command(
    name: str = typer.Argument(..., help="Name of the database to dump"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file path (default: <name>.dump)"
    ),
):
    """Download a dump of a managed database."""
    destination = output or Path(f"{name}.dump")
    console.print(
        f"{cli_icon('🌱', '[>]')} Dumping database '{escape(name)}' "
        f"to {escape(str(destination))}...\n"
    )

    with handle_errors("Failed to dump database"):
        client = get_client()
        with spinner("Dumping..."):
            dump_database_to_file(client, name, destination)

    console.print(f"{ok_icon()} Dump saved to {escape(str(destination.resolve()))}")


def restore_command(
    name: str = typer.Argument(..., help="Name of the database to restore into"),
    file: Path = typer.Option(
        ..., "--file", "-f", help="Path to the dump file to restore (required)"
    ),
):
    """Restore a managed database from a dump file."""
    console.print(
        f"{cli_icon('🌱', '[>]')} Restoring database '{escape(name)}' "
        f"from {escape(str(file))}...\n"
    )

    with handle_errors("Failed to restore database"):
        client = get_client()
        with spinner("Restoring..."):
            result = restore_database(client, name, file)

    console.print(f"{ok_icon()} {escape(result.message)}")
