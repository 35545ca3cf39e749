"""Integration tests for the complete 'dibbla deploy' workflow.

Tests the full path from the command line to the wire:
- Project walk with exclusions
- Multipart request to the platform
- Success and structured error rendering
"""

import io
import json
import tarfile
from functools import partial
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from dibbla.cli.main import app
from dibbla.core.api.client import PlatformClient


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def served():
    """Requests seen by the mock platform, plus the reply it should give."""
    state = {"requests": [], "reply": None}

    def handler(request: httpx.Request) -> httpx.Response:
        request.read()
        state["requests"].append(request)
        return state["reply"]

    state["transport"] = httpx.MockTransport(handler)
    return state


@pytest.fixture
def platform(served):
    """Route every PlatformClient the CLI builds through the mock platform."""
    factory = partial(PlatformClient, transport=served["transport"])
    with patch("dibbla.core.deploy.PlatformClient", factory), patch(
        "dibbla.cli.utils.session.PlatformClient", factory
    ):
        yield served


def _reply(status_code, payload):
    return httpx.Response(status_code, content=json.dumps(payload).encode())


def _archive_names(request: httpx.Request) -> list:
    boundary = request.headers["Content-Type"].split("boundary=")[1].encode()
    for part in request.content.split(b"--" + boundary):
        if b'name="archive"' in part:
            body = part.partition(b"\r\n\r\n")[2][: -len(b"\r\n")]
            with tarfile.open(fileobj=io.BytesIO(body), mode="r:gz") as tar:
                return tar.getnames()
    raise AssertionError("no archive part in request")


class TestDeployFlow:
    def test_first_deployment(
        self, runner, mock_env_vars, platform, sample_project, deployment_payload
    ):
        platform["reply"] = _reply(
            201, {"status": "success", "deployment": deployment_payload}
        )

        result = runner.invoke(
            app, ["deploy", str(sample_project), "-e", "NODE_ENV=production"]
        )

        assert result.exit_code == 0, result.output
        assert "https://myapp.dibbla.app" in result.output

        [request] = platform["requests"]
        assert str(request.url) == "https://api.test.dibbla.app/deployments"
        assert request.headers["Authorization"] == "Bearer test-token-123"
        assert b'{"NODE_ENV": "production"}' in request.content
        assert _archive_names(request) == [
            "app.go",
            "go.mod",
            "static",
            "static/index.html",
        ]

    def test_validation_failure_is_rendered(
        self, runner, mock_env_vars, platform, sample_project
    ):
        platform["reply"] = _reply(
            422,
            {
                "status": "error",
                "error": {
                    "code": "VALIDATION_FAILED",
                    "message": "invalid port",
                    "details": [{"field": "port", "error": "out of range"}],
                },
            },
        )

        result = runner.invoke(app, ["deploy", str(sample_project), "--port", "0"])

        assert result.exit_code == 1
        assert "VALIDATION_FAILED: invalid port" in result.output
        assert "port: out of range" in result.output

    def test_unstructured_failure_is_rendered(
        self, runner, mock_env_vars, platform, sample_project
    ):
        platform["reply"] = httpx.Response(502, content=b"Bad Gateway")

        result = runner.invoke(app, ["deploy", str(sample_project)])

        assert result.exit_code == 1
        assert "502" in result.output
        assert "Bad Gateway" in result.output


class TestDatabaseFlow:
    def test_dump_writes_file(self, runner, mock_env_vars, platform, tmp_path):
        platform["reply"] = httpx.Response(200, content=b"PGDMP\x00\x01")
        target = tmp_path / "main.dump"

        result = runner.invoke(app, ["db", "dump", "main", "-o", str(target)])

        assert result.exit_code == 0, result.output
        assert target.read_bytes() == b"PGDMP\x00\x01"
        assert platform["requests"][0].url.path == "/databases/main/dump"

    def test_failed_dump_leaves_no_file(self, runner, mock_env_vars, platform, tmp_path):
        platform["reply"] = _reply(
            404, {"status": "error", "error": {"code": "NOT_FOUND", "message": "no db"}}
        )
        target = tmp_path / "main.dump"

        result = runner.invoke(app, ["db", "dump", "main", "-o", str(target)])

        assert result.exit_code == 1
        assert "NOT_FOUND: no db" in result.output
        assert not target.exists()
