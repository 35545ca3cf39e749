"""
Test configuration and fixtures for dibbla-cli tests.

Provides shared fixtures for:
- Environment variable management
- Sample project trees
- Mock API transports
"""

import json
import os
from pathlib import Path
from typing import Callable, Dict, List

import httpx
import pytest

from dibbla.core.api.client import PlatformClient

TEST_API_URL = "https://api.test.dibbla.app"
TEST_API_TOKEN = "test-token-123"
ISOLATED_VARS = ("DIBBLA_API_TOKEN", "DIBBLA_API_URL", "DIBBLA_RICH_LOGS", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory):
    """Keep host DIBBLA_* variables and any local .env out of every test.

    load_dotenv writes straight into os.environ, so values a test loads from
    a .env file are removed again afterwards.
    """
    for name in ISOLATED_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))

    yield

    for name in ISOLATED_VARS:
        os.environ.pop(name, None)


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> Dict[str, str]:
    """Provide patched environment variables for tests.

    Returns:
        Dictionary of environment variables set.
    """
    env_vars = {
        "DIBBLA_API_TOKEN": TEST_API_TOKEN,
        "DIBBLA_API_URL": TEST_API_URL,
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Provide a project directory with files that must and must not ship.

    Layout:
    - app.go, go.mod, static/index.html (kept)
    - .git/HEAD, node_modules/pkg/index.js, id_rsa, server.key (excluded)
    """
    project = tmp_path / "myapp"
    project.mkdir()
    (project / "app.go").write_text("package main\n")
    (project / "go.mod").write_text("module myapp\n")
    (project / "static").mkdir()
    (project / "static" / "index.html").write_text("<h1>hi</h1>\n")

    (project / ".git").mkdir()
    (project / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (project / "node_modules" / "pkg").mkdir(parents=True)
    (project / "node_modules" / "pkg" / "index.js").write_text("module.exports = 1\n")
    (project / "id_rsa").write_text("PRIVATE KEY\n")
    (project / "server.key").write_text("PRIVATE KEY\n")

    return project


class RecordingTransport:
    """httpx.MockTransport wrapper that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def json_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def make_client() -> Callable[..., tuple]:
    """Build a PlatformClient wired to a recording mock transport.

    Returns:
        Factory taking a request handler and returning (client, recorder).
    """

    def factory(handler, token: str = TEST_API_TOKEN):
        recorder = RecordingTransport(handler)
        client = PlatformClient(TEST_API_URL, token, transport=recorder.transport)
        return client, recorder

    return factory


@pytest.fixture
def deployment_payload() -> Dict:
    """Deployment record as the platform returns it."""
    return {
        "id": "dep-123",
        "alias": "myapp",
        "url": "https://myapp.dibbla.app",
        "status": "running",
        "created_at": "2025-01-01T10:00:00Z",
        "updated_at": "2025-01-01T10:01:00Z",
        "deployed_at": "2025-01-01T10:01:00Z",
        "health_check": {
            "status": "healthy",
            "checked_at": "2025-01-01T10:01:05Z",
            "response_time_ms": 42,
            "failure_count": 0,
        },
    }


@pytest.fixture
def json_reply() -> Callable[[int, object], httpx.Response]:
    """Provide a builder for JSON responses served by mock transports."""
    return json_response
