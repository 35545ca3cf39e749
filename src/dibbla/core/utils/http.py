"""HTTP utilities for Dibbla API communication."""

from typing import Optional

import httpx

from .user_agent import get_user_agent

DEFAULT_TIMEOUT = 30.0


def get_authenticated_httpx_client(
    api_token: Optional[str],
    timeout: Optional[float] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create an httpx Client with Dibbla authentication.

    Includes the Authorization header when a token is given, so every call
    site shares one place that decides how credentials travel.

    Args:
        api_token: Bearer token. No Authorization header when empty.
        timeout: Request timeout in seconds. Defaults to 30.0.
        transport: Optional transport override (used by tests).

    Returns:
        Configured httpx.Client

    Example:
        with get_authenticated_httpx_client(token, timeout=600.0) as client:
            response = client.post(url, files=files, data=fields)
    """
    headers = {
        "Accept": "application/json",
        "User-Agent": get_user_agent(),
    }
    if api_token:
        headers["Authorization"] = f"Bearer {api_token}"

    timeout_config = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.Client(timeout=timeout_config, headers=headers, transport=transport)
