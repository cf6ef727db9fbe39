"""Tests for the HTTP endpoints."""

import logging

import pytest

from archive_sandbox.config import WORKDIR_ENV
from archive_sandbox.service import ArchiveService
from tests.helpers import BAAR_CONTENT

try:
    from fastapi.testclient import TestClient

    from archive_sandbox.api.main import create_app

    API_AVAILABLE = True
except ImportError:
    API_AVAILABLE = False
    TestClient = None


@pytest.fixture
def client(workdir):
    if not API_AVAILABLE:
        pytest.skip("FastAPI not installed")
    return TestClient(create_app(ArchiveService(workdir, max_extract_size=1024)))


@pytest.mark.skipif(not API_AVAILABLE, reason="FastAPI not installed")
class TestToolEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_tools(self, client):
        names = [tool["name"] for tool in client.get("/tools").json()["tools"]]
        assert names == ["list_archive_files", "extract_archive_files"]

    def test_list(self, client):
        response = client.post("/tools/list_archive_files", json={"path": "test.tar.gz", "limit": 2})

        assert response.status_code == 200
        assert response.json() == {
            "total_files": 3,
            "filtered_files": 3,
            "displayed_files": 2,
            "files": [
                {"name": "foo/", "size": 0, "permissions": "-rwxr-xr-x"},
                {"name": "foo/baar.txt", "size": 27, "permissions": "-rw-r--r--"},
            ],
        }

    def test_list_with_filters(self, client):
        response = client.post(
            "/tools/list_archive_files",
            json={"path": "test.zip", "depth": 0, "include": "foo/", "exclude": "txt"},
        )
        data = response.json()
        assert data["filtered_files"] == 2
        assert [f["name"] for f in data["files"]] == ["foo/", "foo/bazz"]

    def test_extract(self, client):
        response = client.post(
            "/tools/extract_archive_files",
            json={"path": "test.zip", "files": ["foo/baar.txt", "foo/nope"]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "files": [
                {
                    "name": "foo/baar.txt",
                    "size": 27,
                    "permissions": "-rw-r--r--",
                    "content": BAAR_CONTENT,
                }
            ]
        }

    def test_session_header_is_logged(self, client, caplog):
        with caplog.at_level(logging.DEBUG, logger="archive_sandbox"):
            client.post(
                "/tools/list_archive_files",
                json={"path": "test.zip"},
                headers={"X-Session-Id": "session-42"},
            )
        assert any("session=session-42" in record.getMessage() for record in caplog.records)


@pytest.mark.skipif(not API_AVAILABLE, reason="FastAPI not installed")
class TestErrorResponses:
    @pytest.mark.parametrize(
        "endpoint, body, status, kind",
        [
            ("list_archive_files", {"path": "../test.zip"}, 403, "outside_sandbox"),
            ("list_archive_files", {"path": "missing.zip"}, 404, "unresolvable_path"),
            ("list_archive_files", {"path": "test.tar.gz", "include": "("}, 422, "invalid_pattern"),
            ("list_archive_files", {"path": "garbage.zip"}, 422, "open_failed"),
            ("list_archive_files", {"path": "truncated.tar.gz"}, 422, "malformed_archive"),
            ("extract_archive_files", {"path": "README", "files": ["a"]}, 415, "unsupported_format"),
        ],
    )
    def test_error_mapping(self, client, workdir, endpoint, body, status, kind):
        (workdir.parent / "test.zip").write_bytes(b"")
        (workdir / "README").write_text("not an archive")

        response = client.post(f"/tools/{endpoint}", json=body)

        assert response.status_code == status
        assert response.json()["error"] == kind
        assert response.json()["detail"]

    def test_file_too_large(self, workdir):
        if not API_AVAILABLE:
            pytest.skip("FastAPI not installed")
        client = TestClient(create_app(ArchiveService(workdir, max_extract_size=20)))
        response = client.post(
            "/tools/extract_archive_files",
            json={"path": "test.tar.xz", "files": ["foo/baar.txt"]},
        )

        assert response.status_code == 413
        assert "foo/baar.txt is too large to extract: 27 bytes" in response.json()["detail"]

    def test_negative_limit_is_rejected(self, client):
        response = client.post("/tools/list_archive_files", json={"path": "test.zip", "limit": -1})
        assert response.status_code == 422

    def test_missing_path_field(self, client):
        response = client.post("/tools/extract_archive_files", json={"files": ["a"]})
        assert response.status_code == 422


@pytest.mark.skipif(not API_AVAILABLE, reason="FastAPI not installed")
class TestAppFactory:
    def test_import_does_not_read_environment(self, tmp_path, monkeypatch):
        import importlib

        import archive_sandbox.api.main as api_main

        monkeypatch.setenv(WORKDIR_ENV, str(tmp_path / "does-not-exist"))
        importlib.reload(api_main)
        assert not hasattr(api_main, "app")

    def test_factory_reads_environment(self, workdir, monkeypatch):
        monkeypatch.setenv(WORKDIR_ENV, str(workdir))
        client = TestClient(create_app())

        response = client.post("/tools/list_archive_files", json={"path": "test.zip", "depth": 1})
        assert response.json()["files"][0]["name"] == "foo/"
