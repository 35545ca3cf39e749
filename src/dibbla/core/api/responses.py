"""Classification of API responses into typed results or structured errors."""

import logging
from typing import Iterable, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..exceptions import APIError, TransportError
from .models import ErrorResponse

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SUCCESS_STATUSES = (200, 201)


def _as_text(body: Union[bytes, str]) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def parse_error(status_code: int, body: Union[bytes, str]) -> APIError:
    """
    Build an APIError from a failure response.

    The structured ``{"status": ..., "error": {...}}`` shape is used when the
    body matches it. Anything else is surfaced as the raw status and body so
    no reason is invented that the server did not send.

    Args:
        status_code: HTTP status of the response
        body: Raw response body

    Returns:
        APIError ready to be raised
    """
    text = _as_text(body)
    try:
        parsed = ErrorResponse.model_validate_json(text)
    except ValidationError:
        log.debug(f"Unstructured error body for status {status_code}")
        return APIError(status_code, text)
    return APIError(status_code, text, parsed.error)


def interpret_response(
    status_code: int,
    body: Union[bytes, str],
    model: Type[ModelT],
    expected: Iterable[int] = SUCCESS_STATUSES,
) -> ModelT:
    """
    Decode a response body into ``model`` or raise the matching error.

    Args:
        status_code: HTTP status of the response
        body: Raw response body
        model: Pydantic model describing the success body
        expected: Status codes treated as success

    Returns:
        Validated instance of ``model``

    Raises:
        APIError: Status is not in ``expected``
        TransportError: Success status but the body is not the expected JSON
    """
    if status_code not in tuple(expected):
        raise parse_error(status_code, body)

    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise TransportError(f"failed to parse response (status {status_code})", e)
