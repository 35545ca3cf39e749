"""Authenticated access to the Dibbla platform API."""

from .client import PlatformClient
from .responses import interpret_response

__all__ = ["PlatformClient", "interpret_response"]
