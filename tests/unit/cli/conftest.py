"""Shared fixtures for CLI command tests."""

import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def authed(mock_env_vars):
    """Environment with an API token configured."""
    return mock_env_vars
