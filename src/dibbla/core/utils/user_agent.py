"""User-Agent utilities for Dibbla HTTP clients."""

import platform

from ... import get_version


def get_user_agent() -> str:
    """
    Generate the User-Agent string sent with every API request.

    Format: dibbla-cli/<version> (<OS> <release>; <arch>) Language/Python <python_version>
    Example: dibbla-cli/0.3.0 (Linux 6.8.0-49-generic; x86_64) Language/Python 3.12.4
    """
    system = platform.system()
    release = platform.release()
    machine = platform.machine()
    python_version = platform.python_version()

    return f"dibbla-cli/{get_version()} ({system} {release}; {machine}) Language/Python {python_version}"
