"""Dibbla CLI - scaffold and deploy projects to the Dibbla platform."""

from importlib import metadata


def get_version() -> str:
    """Get the package version from metadata."""
    try:
        return metadata.version("dibbla-cli")
    except metadata.PackageNotFoundError:
        return "unknown"


__version__ = get_version()
