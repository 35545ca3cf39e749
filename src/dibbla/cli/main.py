"""Main CLI entry point for the Dibbla CLI."""

import logging

import typer
from rich.console import Console
from rich.panel import Panel

from .. import get_version
from ..logger import setup_logging
from .commands import apps, db, deploy, secrets

console = Console()

# command: dibbla
app = typer.Typer(
    name="dibbla",
    help="Dibbla CLI - deploy and manage applications on the Dibbla platform",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# command: dibbla <command>
app.command("deploy")(deploy.deploy_command)

# command: dibbla apps *
apps_app = typer.Typer(
    name="apps",
    help="List and manage deployed applications",
    no_args_is_help=True,
)
apps_app.command("list")(apps.list_command)
apps_app.command("delete")(apps.delete_command)
apps_app.command("update")(apps.update_command)
app.add_typer(apps_app, name="apps")

# command: dibbla secrets *
secrets_app = typer.Typer(
    name="secrets",
    help="Manage secrets (global or per-deployment)",
    no_args_is_help=True,
)
secrets_app.command("list")(secrets.list_command)
secrets_app.command("set")(secrets.set_command)
secrets_app.command("get")(secrets.get_command)
secrets_app.command("delete")(secrets.delete_command)
app.add_typer(secrets_app, name="secrets")

# command: dibbla db *
db_app = typer.Typer(
    name="db",
    help="List, create, delete, dump and restore managed databases",
    no_args_is_help=True,
)
db_app.command("list")(db.list_command)
db_app.command("create")(db.create_command)
db_app.command("delete")(db.delete_command)
db_app.command("dump")(db.dump_command)
db_app.command("restore")(db.restore_command)
app.add_typer(db_app, name="db")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
):
    """Dibbla CLI - deploy and manage applications on the Dibbla platform."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    if version:
        console.print(f"dibbla version {get_version()}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            Panel(
                "[bold blue]Dibbla CLI[/bold blue]\n\n"
                "Deploy containerized applications to the Dibbla platform.\n\n"
                "Use [bold]dibbla --help[/bold] to see available commands.",
                title="Welcome",
                expand=False,
            )
        )


if __name__ == "__main__":
    app()
