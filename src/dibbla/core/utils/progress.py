"""
Single-line spinner shown while a blocking request is in flight.

Drawn with a transient ``rich`` status: ``stop()`` joins the refresh thread
and erases the line, so the caller can write as soon as it returns.
"""

from typing import Optional

from rich.console import Console
from rich.status import Status

from .platform import supports_unicode


def default_spinner() -> str:
    return "dots" if supports_unicode() else "line"


class ProgressSignal:
    """
    Animated progress indicator for one blocking call.

    Example:
        with ProgressSignal("Deploying...", console=console):
            result = client.upload(...)
    """

    def __init__(
        self,
        message: str,
        *,
        console: Optional[Console] = None,
        spinner: Optional[str] = None,
        enabled: Optional[bool] = None,
    ):
        self.message = message
        self.console = console if console is not None else Console(stderr=True)
        self.spinner = spinner or default_spinner()
        self.enabled = self.console.is_terminal if enabled is None else enabled
        self._status: Optional[Status] = None

    @property
    def running(self) -> bool:
        return self._status is not None

    def start(self) -> None:
        if not self.enabled or self._status is not None:
            return
        self._status = self.console.status(self.message, spinner=self.spinner)
        self._status.start()

    def stop(self) -> None:
        """Stop the animation and erase the line."""
        if self._status is None:
            return
        status, self._status = self._status, None
        status.stop()

    def __enter__(self) -> "ProgressSignal":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
