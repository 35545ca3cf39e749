"""Tests for managed database calls, dumps and restores."""

import json

import httpx
import pytest

from dibbla.core.databases import (
    create_database,
    delete_database,
    dump_database_to_file,
    list_databases,
    restore_database,
)
from dibbla.core.exceptions import APIError, LocalFileError, TransportError


class TestDatabaseCrud:
    def test_list(self, make_client, json_reply):
        client, recorder = make_client(
            lambda request: json_reply(200, {"databases": ["main", "audit"], "total": 2})
        )

        result = list_databases(client)

        assert result.databases == ["main", "audit"]
        assert recorder.last.url.path == "/databases"

    def test_create(self, make_client, json_reply):
        client, recorder = make_client(
            lambda request: json_reply(
                201, {"status": "success", "message": "created", "database": "main"}
            )
        )

        result = create_database(client, "main")

        assert result.database == "main"
        assert json.loads(recorder.last.content) == {"name": "main"}

    def test_delete(self, make_client, json_reply):
        client, recorder = make_client(
            lambda request: json_reply(200, {"message": "Database main deleted"})
        )

        delete_database(client, "main")

        assert recorder.last.method == "DELETE"
        assert recorder.last.url.path == "/databases/main"


class TestRestore:
    def test_uploads_dump_part(self, make_client, json_reply, tmp_path):
        dump = tmp_path / "main.dump"
        dump.write_bytes(b"PGDMP restore me")
        client, recorder = make_client(
            lambda request: json_reply(200, {"message": "restored", "database": "main"})
        )

        result = restore_database(client, "main", dump)

        request = recorder.last
        assert result.message == "restored"
        assert request.url.path == "/databases/main/restore"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="dump"; filename="dump"' in request.content
        assert b"PGDMP restore me" in request.content

    def test_missing_dump_file(self, make_client, json_reply, tmp_path):
        client, recorder = make_client(lambda request: json_reply(200, {}))

        with pytest.raises(LocalFileError, match="failed to open dump file"):
            restore_database(client, "main", tmp_path / "missing.dump")

        assert recorder.requests == []


class TestDump:
    def test_writes_file(self, make_client, tmp_path):
        client, _ = make_client(lambda request: httpx.Response(200, content=b"PGDMP data"))
        destination = tmp_path / "main.dump"

        written = dump_database_to_file(client, "main", destination)

        assert written == len(b"PGDMP data")
        assert destination.read_bytes() == b"PGDMP data"

    def test_api_error_removes_partial_file(self, make_client, json_reply, tmp_path):
        client, _ = make_client(
            lambda request: json_reply(
                404, {"status": "error", "error": {"code": "NOT_FOUND", "message": "no db"}}
            )
        )
        destination = tmp_path / "main.dump"

        with pytest.raises(APIError):
            dump_database_to_file(client, "main", destination)

        assert not destination.exists()

    def test_transport_error_removes_partial_file(self, make_client, tmp_path):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client, _ = make_client(handler)
        destination = tmp_path / "main.dump"

        with pytest.raises(TransportError):
            dump_database_to_file(client, "main", destination)

        assert not destination.exists()

    def test_unwritable_destination(self, make_client, tmp_path):
        client, recorder = make_client(lambda request: httpx.Response(200, content=b"x"))

        with pytest.raises(LocalFileError, match="failed to create output file"):
            dump_database_to_file(client, "main", tmp_path / "no-such-dir" / "main.dump")

        assert recorder.requests == []
