"""Deployed application management: list, delete and update."""

import logging

from .api.client import PlatformClient
from .api.models import DeleteResult, DeploymentList, DeploymentRecord, DeploymentUpdate
from .exceptions import InvalidRequestError

log = logging.getLogger(__name__)

LIST_TIMEOUT_SECONDS = 10.0
DELETE_TIMEOUT_SECONDS = 10.0
UPDATE_TIMEOUT_SECONDS = 30.0


def list_apps(client: PlatformClient) -> DeploymentList:
    return client.request(
        "GET", ["deployments"], DeploymentList, timeout=LIST_TIMEOUT_SECONDS
    )


def delete_app(client: PlatformClient, alias: str) -> DeleteResult:
    return client.request(
        "DELETE",
        ["deployments", alias],
        DeleteResult,
        timeout=DELETE_TIMEOUT_SECONDS,
    )


def update_app(
    client: PlatformClient, alias: str, update: DeploymentUpdate
) -> DeploymentRecord:
    """
    Change settings of an existing deployment.

    Args:
        client: API client
        alias: Deployment alias
        update: Fields to change; absent fields are left as they are

    Returns:
        The updated deployment record

    Raises:
        InvalidRequestError: ``update`` carries no fields
    """
    payload = update.to_payload()
    if not payload:
        raise InvalidRequestError(
            "specify at least one of environment variables, replicas, cpu, memory or port"
        )

    log.debug(f"Updating {alias} with fields: {sorted(payload)}")
    return client.request(
        "PUT",
        ["deployments", alias],
        DeploymentRecord,
        json=payload,
        timeout=UPDATE_TIMEOUT_SECONDS,
    )
