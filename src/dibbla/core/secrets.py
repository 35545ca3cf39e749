"""Secrets, either global or scoped to one deployment."""

from typing import Optional

from .api.client import PlatformClient
from .api.models import DeleteResult, Secret, SecretCreateResult, SecretList

REQUEST_TIMEOUT_SECONDS = 30.0


def _scope(deployment: Optional[str]) -> dict:
    return {"deployment": deployment} if deployment else {}


def list_secrets(client: PlatformClient, deployment: Optional[str] = None) -> SecretList:
    """List global secrets, or those of ``deployment`` when given."""
    return client.request(
        "GET",
        ["secrets"],
        SecretList,
        params=_scope(deployment),
        timeout=REQUEST_TIMEOUT_SECONDS,
    )


def set_secret(
    client: PlatformClient,
    name: str,
    value: str,
    deployment: Optional[str] = None,
) -> SecretCreateResult:
    """Create or replace a secret."""
    payload = {"name": name, "value": value}
    if deployment:
        payload["deployment_alias"] = deployment
    return client.request(
        "POST",
        ["secrets"],
        SecretCreateResult,
        json=payload,
        expected=(201,),
        timeout=REQUEST_TIMEOUT_SECONDS,
    )


def get_secret(
    client: PlatformClient, name: str, deployment: Optional[str] = None
) -> Secret:
    return client.request(
        "GET",
        ["secrets", name],
        Secret,
        params=_scope(deployment),
        timeout=REQUEST_TIMEOUT_SECONDS,
    )


def delete_secret(
    client: PlatformClient, name: str, deployment: Optional[str] = None
) -> DeleteResult:
    return client.request(
        "DELETE",
        ["secrets", name],
        DeleteResult,
        params=_scope(deployment),
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
