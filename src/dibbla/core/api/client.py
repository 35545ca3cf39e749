"""
Generic authenticated transfer against the Dibbla REST API.

Deploy uploads, database restores and dumps, and the plain JSON calls for
apps and secrets all go through PlatformClient. Callers choose the scalar
fields, the success model and the timeout; request building and error
interpretation live here once.
"""

import logging
from typing import IO, Any, Dict, Iterable, Mapping, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from ..exceptions import TransportError
from ..utils.http import DEFAULT_TIMEOUT, get_authenticated_httpx_client
from .responses import interpret_response, parse_error

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# (filename, content, content type)
FilePart = tuple[str, Any, str]


def encode_form_fields(fields: Mapping[str, Optional[str]]) -> Dict[str, str]:
    """Drop absent fields so the server never sees an explicitly empty value."""
    return {name: value for name, value in fields.items() if value}


class PlatformClient:
    """Authenticated request/response round trips against the platform API."""

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str],
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_token = api_token
        self._transport = transport

    def url(self, *segments: str) -> str:
        """Join path segments onto the base URL, escaping each one."""
        path = "/".join(quote(str(segment), safe="") for segment in segments)
        return f"{self.api_url}/{path}"

    def _client(self, timeout: Optional[float]) -> httpx.Client:
        return get_authenticated_httpx_client(
            self.api_token, timeout=timeout, transport=self._transport
        )

    def request(
        self,
        method: str,
        segments: Iterable[str],
        model: Type[ModelT],
        *,
        expected: Iterable[int] = (200,),
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        json: Optional[dict] = None,
        params: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, FilePart]] = None,
        data: Optional[Mapping[str, str]] = None,
    ) -> ModelT:
        """
        Send one request and interpret its response.

        Args:
            method: HTTP method
            segments: Path segments below the base URL
            model: Pydantic model for the success body
            expected: Status codes treated as success
            timeout: Request timeout in seconds
            json: JSON request body
            params: Query parameters; empty values are dropped
            files: Multipart file parts
            data: Multipart text parts

        Returns:
            Validated success model

        Raises:
            TransportError: Connection failure, timeout or unreadable body
            APIError: Non-success status from the API
        """
        url = self.url(*segments)
        query = {k: v for k, v in (params or {}).items() if v}

        log.info(f"{method} {url}")
        try:
            with self._client(timeout) as client:
                response = client.request(
                    method,
                    url,
                    json=json,
                    params=query or None,
                    files=files,
                    data=data,
                )
        except httpx.TimeoutException as e:
            raise TransportError(f"request timed out after {timeout}s", e)
        except httpx.HTTPError as e:
            raise TransportError("request failed", e)

        log.debug(f"{method} {url} -> {response.status_code}")
        return interpret_response(
            response.status_code, response.content, model, expected=expected
        )

    def upload(
        self,
        segments: Iterable[str],
        model: Type[ModelT],
        *,
        files: Mapping[str, FilePart],
        fields: Optional[Mapping[str, Optional[str]]] = None,
        expected: Iterable[int] = (200,),
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> ModelT:
        """POST a multipart body of file parts plus the present text fields."""
        return self.request(
            "POST",
            segments,
            model,
            expected=expected,
            timeout=timeout,
            files=files,
            data=encode_form_fields(fields or {}),
        )

    def download(
        self,
        segments: Iterable[str],
        sink: IO[bytes],
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> int:
        """
        Stream a binary response body into ``sink``.

        Args:
            segments: Path segments below the base URL
            sink: Writable binary file object
            timeout: Request timeout in seconds

        Returns:
            Number of bytes written

        Raises:
            TransportError: Connection failure, timeout or interrupted stream
            APIError: Non-200 status; the body is read and interpreted
        """
        url = self.url(*segments)
        written = 0

        log.info(f"GET {url} (download)")
        try:
            with self._client(timeout) as client:
                with client.stream(
                    "GET", url, headers={"Accept": "application/octet-stream"}
                ) as response:
                    if response.status_code != 200:
                        raise parse_error(response.status_code, response.read())
                    for chunk in response.iter_bytes():
                        sink.write(chunk)
                        written += len(chunk)
        except httpx.TimeoutException as e:
            raise TransportError(f"download timed out after {timeout}s", e)
        except httpx.HTTPError as e:
            raise TransportError("download failed", e)

        log.debug(f"Downloaded {written} bytes from {url}")
        return written
