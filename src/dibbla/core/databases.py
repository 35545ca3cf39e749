"""
Managed databases: CRUD plus dump and restore.

Restore reuses the multipart upload path of deploys with a single ``dump``
file part; dump streams a binary body into a local file.
"""

import logging
from pathlib import Path
from typing import IO, Union

from .api.client import PlatformClient
from .api.models import DatabaseList, DatabaseResult, DeleteResult
from .exceptions import DibblaError, LocalFileError

log = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 60.0
DUMP_TIMEOUT_SECONDS = 300.0


def list_databases(client: PlatformClient) -> DatabaseList:
    return client.request(
        "GET", ["databases"], DatabaseList, timeout=REQUEST_TIMEOUT_SECONDS
    )


def create_database(client: PlatformClient, name: str) -> DatabaseResult:
    return client.request(
        "POST",
        ["databases"],
        DatabaseResult,
        json={"name": name},
        expected=(201,),
        timeout=REQUEST_TIMEOUT_SECONDS,
    )


def delete_database(client: PlatformClient, name: str) -> DeleteResult:
    return client.request(
        "DELETE",
        ["databases", name],
        DeleteResult,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )


def restore_database(
    client: PlatformClient, name: str, dump_path: Union[str, Path]
) -> DatabaseResult:
    """
    Upload a dump file and restore it into ``name``.

    Raises:
        LocalFileError: The dump file cannot be read
    """
    dump_path = Path(dump_path)
    try:
        data = dump_path.read_bytes()
    except OSError as e:
        raise LocalFileError(f"failed to open dump file: {e}", str(dump_path)) from e

    log.info(f"Restoring {name} from {dump_path} ({len(data)} bytes)")
    return client.upload(
        ["databases", name, "restore"],
        DatabaseResult,
        files={"dump": ("dump", data, "application/octet-stream")},
        timeout=REQUEST_TIMEOUT_SECONDS,
    )


def dump_database(client: PlatformClient, name: str, sink: IO[bytes]) -> int:
    """Stream a dump of ``name`` into ``sink``; returns bytes written."""
    return client.download(
        ["databases", name, "dump"], sink, timeout=DUMP_TIMEOUT_SECONDS
    )


def dump_database_to_file(
    client: PlatformClient, name: str, destination: Union[str, Path]
) -> int:
    """
    Download a dump of ``name`` into ``destination``.

    The file is removed again if the download fails, so a failed dump never
    leaves a truncated file behind.

    Raises:
        LocalFileError: The destination cannot be written
    """
    destination = Path(destination)
    try:
        sink = destination.open("wb")
    except OSError as e:
        raise LocalFileError(
            f"failed to create output file: {e}", str(destination)
        ) from e

    try:
        with sink:
            return dump_database(client, name, sink)
    except (DibblaError, OSError) as e:
        destination.unlink(missing_ok=True)
        if isinstance(e, OSError):
            raise LocalFileError(
                f"failed to write dump: {e}", str(destination)
            ) from e
        raise
