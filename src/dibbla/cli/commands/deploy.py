"""Dibbla deploy command - package a directory and deploy it."""

from typing import List, Optional

import typer
from rich.markup import escape

from ...core.api.models import DeploymentRecord
from ...core.deploy import TransferOptions, run_deployment
from ...core.exceptions import ArchiveError
from ...core.packaging import Archive
from ..utils.session import (
    cli_icon,
    console,
    get_settings,
    handle_errors,
    ok_icon,
    spinner,
)


def deploy_command(
    path: str = typer.Argument(".", help="Directory to deploy"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Force redeploy if alias already exists"
    ),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="Set env var KEY=value (repeatable)"
    ),
    cpu: Optional[str] = typer.Option(None, "--cpu", help="CPU request (e.g. 500m)"),
    memory: Optional[str] = typer.Option(
        None, "--memory", help="Memory request (e.g. 512Mi)"
    ),
    port: Optional[str] = typer.Option(
        None, "--port", help="Container port (e.g. 3000)"
    ),
):
    """
    Deploy an application to dibbla.app.

    Your application will be available at https://<alias>.dibbla.app

    Set DIBBLA_API_TOKEN in your environment or .env file. Optionally set
    DIBBLA_API_URL to use a different API endpoint.

    Examples:
      dibbla deploy              # Deploy current directory
      dibbla deploy ./myapp      # Deploy specific directory
      dibbla deploy --force      # Force redeploy existing alias
      dibbla deploy --cpu 500m --memory 512Mi --port 3000
      dibbla deploy -e NODE_ENV=production -e LOG_LEVEL=info
    """
    console.print(f"{cli_icon('🚀', '>>')} Dibbla Deploy\n")

    with handle_errors("Deployment failed"):
        settings = get_settings()
        options = TransferOptions(
            source=path,
            api_url=settings.api_url,
            api_token=settings.require_token(),
            force=force,
            env=tuple(env or ()),
            cpu=cpu or None,
            memory=memory or None,
            port=port or None,
        )
        if not options.source.is_dir():
            raise ArchiveError(f"Directory not found: {options.source}")

        console.print(f"{cli_icon('📁', '[DIR]')} Deploying: {escape(str(options.source))}")
        console.print(f"{cli_icon('🌐', '[NET]')} API: {escape(settings.api_url)}")
        if force:
            console.print(
                f"{cli_icon('⚠️', '[!]')} Force mode: will overwrite existing deployment"
            )
        console.print()

        console.print(f"{cli_icon('📦', '[PKG]')} Creating archive...")
        result = run_deployment(
            options, progress=spinner("Deploying..."), on_packaged=_show_archive
        )

    _display_deployment(result.deployment)


def _show_archive(archive: Archive) -> None:
    console.print(
        f"   {len(archive.entries)} entries, {_format_size(archive.size)} compressed"
    )
    console.print(f"{cli_icon('☁️', '[CLOUD]')} Uploading and deploying...\n")


def _format_size(size: int) -> str:
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _display_deployment(deployment: DeploymentRecord) -> None:
    console.print(f"{ok_icon()} Deployment successful!\n")
    console.print(f"   URL:    {deployment.url}")
    console.print(f"   Alias:  {deployment.alias}")
    console.print(f"   Status: {deployment.status}")
    console.print(f"   ID:     {deployment.id}")

    health = deployment.health_check
    if health is not None:
        console.print(f"   Health: {health.status} ({health.response_time_ms}ms)")
