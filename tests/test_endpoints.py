"""Tests for the chunk service HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from common.constants import KIB
from chunkservice.main import app
from chunkservice.service_locator import set_chunk_service
from storage.registry import ProviderRegistry
from chunkservice.services.chunk_service import ChunkService


@pytest.fixture
def client(service):
    set_chunk_service(service)
    with TestClient(app) as test_client:
        yield test_client
    set_chunk_service(None)


@pytest.fixture
def chunked(client, make_file):
    source = make_file(10 * KIB, "doc.bin")
    response = client.post("/files", json={"source_path": str(source)})
    assert response.status_code == 201
    return source, response.json()


class TestHealth:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy", "service": "chunkservice"}

    def test_ready_reports_providers(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["ready"] is True
        assert data["database"] == "ok"
        assert {p["name"] for p in data["providers"]} == {"FileSystem", "Database"}

    def test_ready_without_providers(self, test_db):
        set_chunk_service(ChunkService(ProviderRegistry()))
        try:
            with TestClient(app) as test_client:
                response = test_client.get("/ready")
        finally:
            set_chunk_service(None)

        assert response.status_code == 503
        assert response.json()["ready"] is False

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"


class TestChunkEndpoint:
    def test_chunk_file(self, chunked):
        source, data = chunked

        assert data["success"] is True
        assert data["file_name"] == "doc.bin"
        assert data["size"] == 10 * KIB
        assert data["total_chunks"] == 2
        assert len(data["checksum"]) == 64
        assert data["processing_time_ms"] >= 0
        assert data["request_id"]

    def test_missing_source(self, client, tmp_path):
        response = client.post("/files", json={"source_path": str(tmp_path / "missing.bin")})

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_empty_source(self, client, make_file):
        response = client.post("/files", json={"source_path": str(make_file(0))})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_blank_path_fails_validation(self, client):
        response = client.post("/files", json={"source_path": ""})

        assert response.status_code == 422

    def test_no_providers(self, test_db, make_file):
        set_chunk_service(ChunkService(ProviderRegistry()))
        try:
            with TestClient(app) as test_client:
                response = test_client.post("/files", json={"source_path": str(make_file(10))})
        finally:
            set_chunk_service(None)

        assert response.status_code == 503
        assert response.json()["code"] == "PROVIDER_UNAVAILABLE"


class TestFileQueries:
    def test_list_files(self, client, chunked):
        response = client.get("/files")

        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 1
        assert data["total_size"] == 10 * KIB
        assert data["files"][0]["file_id"] == chunked[1]["file_id"]
        assert data["files"][0]["chunks"] == []

    def test_list_empty(self, client):
        data = client.get("/files").json()

        assert data["files"] == []
        assert data["total_count"] == 0

    def test_get_file_info(self, client, chunked):
        file_id = chunked[1]["file_id"]

        response = client.get(f"/files/{file_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["is_complete"] is True
        assert data["integrity_valid"] is True
        assert [c["sequence_number"] for c in data["chunks"]] == [0, 1]
        assert [c["chunk_id"] for c in data["chunks"]] == [f"{file_id}_chunk_0", f"{file_id}_chunk_1"]
        assert data["last_accessed_at"] is None

    def test_get_unknown_file(self, client):
        response = client.get("/files/unknown")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"


class TestReconstructEndpoint:
    def test_reconstruct(self, client, chunked, tmp_path):
        source, data = chunked
        output = tmp_path / "restored.bin"

        response = client.post(
            f"/files/{data['file_id']}/reconstruct", json={"output_path": str(output)}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["state"] == "success"
        assert body["bytes_written"] == 10 * KIB
        assert output.read_bytes() == source.read_bytes()

    def test_reconstruct_unknown_file(self, client, tmp_path):
        response = client.post("/files/unknown/reconstruct", json={"output_path": str(tmp_path / "x")})

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["state"] == "not_found"

    def test_reconstruct_corrupted(self, client, chunked, registry, tmp_path):
        file_id = chunked[1]["file_id"]
        chunk = client.get(f"/files/{file_id}").json()["chunks"][0]
        registry.get(chunk["storage_provider"]).store(chunk["chunk_id"], b"\x00" * chunk["size"])

        response = client.post(f"/files/{file_id}/reconstruct", json={"output_path": str(tmp_path / "x")})

        assert response.json()["success"] is False
        assert response.json()["state"] == "corruption_detected"


class TestDeleteEndpoint:
    def test_delete(self, client, chunked):
        file_id = chunked[1]["file_id"]

        response = client.delete(f"/files/{file_id}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get(f"/files/{file_id}").status_code == 404

    def test_delete_unknown(self, client):
        response = client.delete("/files/unknown")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"
