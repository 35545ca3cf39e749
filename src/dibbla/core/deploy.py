"""
Deployment pipeline: package a project directory and upload it.

Stages run strictly in order and each one either returns or raises:

    resolve path -> filtered walk -> tar.gz in memory -> size check
    -> multipart encode -> authenticated POST /deployments -> interpret

Nothing touches the network until the archive has passed the size check.
"""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from .api.client import PlatformClient
from .api.models import DeploymentRecord, DeployResponse
from .packaging import Archive, ArchiveBuilder, SizeGuard
from .utils.env import env_pairs_to_json
from .utils.progress import ProgressSignal

log = logging.getLogger(__name__)

# The platform may build the container image before it answers
DEPLOY_TIMEOUT_SECONDS = 600.0

ARCHIVE_FIELD = "archive"
ARCHIVE_FILENAME = "app.tar.gz"
ARCHIVE_CONTENT_TYPE = "application/gzip"


class TransferOptions(BaseModel):
    """Inputs for one deploy invocation. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    source: Path
    api_url: str
    api_token: str
    force: bool = False
    env: Tuple[str, ...] = ()
    cpu: Optional[str] = None
    memory: Optional[str] = None
    port: Optional[str] = None

    @field_validator("source", mode="before")
    @classmethod
    def _resolve_source(cls, value) -> Path:
        return Path(value or ".").resolve()

    @property
    def app_name(self) -> str:
        """Derived from the project directory name; never prompted for."""
        return self.source.name

    def form_fields(self) -> Dict[str, Optional[str]]:
        """Scalar multipart fields; None marks a field that must not be sent."""
        return {
            "force": "true" if self.force else None,
            "app_name": self.app_name or None,
            "env_vars": env_pairs_to_json(self.env),
            "cpu": self.cpu,
            "memory": self.memory,
            "port": self.port,
        }


@dataclass(frozen=True)
class DeploymentResult:
    deployment: DeploymentRecord
    archive_size: int
    entry_count: int


class DeployPipeline:
    """Runs the deploy stages with injectable collaborators."""

    def __init__(
        self,
        builder: Optional[ArchiveBuilder] = None,
        guard: Optional[SizeGuard] = None,
        client: Optional[PlatformClient] = None,
    ):
        self.builder = builder or ArchiveBuilder()
        self.guard = guard or SizeGuard()
        self.client = client

    def package(self, options: TransferOptions) -> Archive:
        """Build the archive and enforce the size ceiling."""
        log.info(f"Packaging {options.source}")
        archive = self.builder.build(options.source)
        self.guard.enforce(archive)
        log.info(f"Archive ready: {len(archive.entries)} entries, {archive.size} bytes")
        return archive

    def upload(self, archive: Archive, options: TransferOptions) -> DeploymentRecord:
        """Send the archive and return the platform's deployment record."""
        client = self.client or PlatformClient(options.api_url, options.api_token)
        response = client.upload(
            ["deployments"],
            DeployResponse,
            files={
                ARCHIVE_FIELD: (ARCHIVE_FILENAME, archive.data, ARCHIVE_CONTENT_TYPE)
            },
            fields=options.form_fields(),
            expected=(200, 201),
            timeout=DEPLOY_TIMEOUT_SECONDS,
        )
        return response.deployment

    def run(
        self,
        options: TransferOptions,
        progress: Optional[ProgressSignal] = None,
        on_packaged: Optional[Callable[[Archive], None]] = None,
    ) -> DeploymentResult:
        archive = self.package(options)
        if on_packaged is not None:
            on_packaged(archive)
        with progress if progress is not None else nullcontext():
            deployment = self.upload(archive, options)
        return DeploymentResult(
            deployment=deployment,
            archive_size=archive.size,
            entry_count=len(archive.entries),
        )


def run_deployment(
    options: TransferOptions,
    *,
    client: Optional[PlatformClient] = None,
    progress: Optional[ProgressSignal] = None,
    on_packaged: Optional[Callable[[Archive], None]] = None,
) -> DeploymentResult:
    """
    Package ``options.source`` and deploy it.

    Args:
        options: Deploy inputs
        client: API client override; built from options when omitted
        progress: Spinner shown only while the upload is in flight
        on_packaged: Called with the archive once it passes the size check

    Returns:
        DeploymentResult with the platform's record of the deployment

    Raises:
        ArchiveError: The project could not be read
        ArchiveTooLargeError: The archive exceeds a size ceiling
        TransportError: The request failed or the response was unreadable
        APIError: The platform rejected the deployment
    """
    return DeployPipeline(client=client).run(
        options, progress=progress, on_packaged=on_packaged
    )
