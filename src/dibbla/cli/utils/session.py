"""Shared plumbing for CLI commands: settings, client, errors, prompts."""

import logging
from contextlib import contextmanager
from typing import Iterator

import questionary
import typer
from rich.console import Console
from rich.markup import escape

from ...config import Settings, load_settings
from ...core.api.client import PlatformClient
from ...core.exceptions import DibblaError
from ...core.utils.platform import icon
from ...core.utils.progress import ProgressSignal

log = logging.getLogger(__name__)

console = Console()


def get_settings() -> Settings:
    return load_settings()


def get_client(settings: Settings | None = None) -> PlatformClient:
    """Build an API client, failing early when no token is configured."""
    settings = settings or get_settings()
    return PlatformClient(settings.api_url, settings.require_token())


def cli_icon(emoji: str, fallback: str) -> str:
    """Icon escaped for Rich markup; ASCII fallbacks look like tags."""
    return escape(icon(emoji, fallback))


def error_icon() -> str:
    return cli_icon("❌", "[X]")


def ok_icon() -> str:
    return cli_icon("✅", "[OK]")


@contextmanager
def handle_errors(action: str) -> Iterator[None]:
    """
    Turn Dibbla errors into a red message and exit code 1.

    Args:
        action: Prefix for the message, e.g. "Deployment failed"
    """
    try:
        yield
    except DibblaError as e:
        log.debug(f"{action}: {type(e).__name__}", exc_info=True)
        console.print(f"[red]{error_icon()} {action}:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        raise typer.Exit(1)


def confirm(message: str) -> bool:
    """Ask a yes/no question; Ctrl-C counts as no."""
    try:
        return bool(questionary.confirm(message, default=True).ask())
    except KeyboardInterrupt:
        return False


def spinner(message: str) -> ProgressSignal:
    return ProgressSignal(message, console=console)
