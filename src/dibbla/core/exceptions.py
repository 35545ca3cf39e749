"""Custom exceptions for the Dibbla CLI.

Every failure a command can hit is raised as a DibblaError subclass so the
CLI layer can print the most specific message available and exit non-zero.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .api.models import ErrorDetail


class DibblaError(Exception):
    """Base exception for all Dibbla CLI errors."""

    pass


class MissingAPITokenError(DibblaError):
    """Raised when DIBBLA_API_TOKEN is missing from the environment and .env file."""

    def __init__(self, message: Optional[str] = None):
        if message is None:
            message = self._default_message()
        super().__init__(message)

    @staticmethod
    def _default_message() -> str:
        return """DIBBLA_API_TOKEN is required

Set your API token in one of these ways:
  1. Create a .env file with: DIBBLA_API_TOKEN=your_token
  2. Export environment variable: export DIBBLA_API_TOKEN=your_token

Get your API token at: https://app.dibbla.com/settings/api-tokens"""


class LocalFileError(DibblaError):
    """Raised when a local file or directory cannot be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class ArchiveError(LocalFileError):
    """Raised when the project directory cannot be read into an archive."""

    pass


class ArchiveTooLargeError(DibblaError):
    """Raised when an archive exceeds its byte ceiling.

    The check runs before any network request is made.
    """

    def __init__(self, size: int, limit: int, compressed: bool = True):
        self.size = size
        self.limit = limit
        self.compressed = compressed
        mb = 1024 * 1024
        if compressed:
            message = f"archive size ({size // mb} MB) exceeds {limit // mb} MB limit"
        else:
            message = (
                f"uncompressed project size (over {size // mb} MB) "
                f"exceeds {limit // mb} MB limit"
            )
        super().__init__(message)


class InvalidRequestError(DibblaError):
    """Raised when a request is rejected locally before anything is sent."""

    pass


class TransportError(DibblaError):
    """Raised when a request cannot complete or its response cannot be read."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class APIError(DibblaError):
    """Raised when the API answers with a non-success status.

    When the body carries a structured error, ``detail`` holds it and the
    message is rendered from it. Otherwise the raw status and body are
    reported verbatim.
    """

    def __init__(
        self,
        status_code: int,
        raw_body: str,
        detail: Optional["ErrorDetail"] = None,
    ):
        self.status_code = status_code
        self.raw_body = raw_body
        self.detail = detail
        super().__init__(self._render())

    @property
    def code(self) -> Optional[str]:
        return self.detail.code if self.detail else None

    def _render(self) -> str:
        if self.detail is None:
            return f"API request failed with status {self.status_code}: {self.raw_body}"

        lines = [f"{self.detail.code}: {self.detail.message}"]
        for issue in self.detail.details:
            line = f"{issue.field}: {issue.error}"
            if issue.suggestion:
                line += f" ({issue.suggestion})"
            lines.append(line)
        if self.detail.request_id:
            lines.append(f"Request ID: {self.detail.request_id}")
        if self.detail.documentation:
            lines.append(f"Documentation: {self.detail.documentation}")
        return "\n".join(lines)
