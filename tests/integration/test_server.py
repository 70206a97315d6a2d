"""
Integration tests: HTTP endpoints (gkc_ingest.server).

Drives the FastAPI app with TestClient; the gateway uses a fake fetcher
and an in-memory snapshot.
"""

from __future__ import annotations

import json
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from gkc_ingest.cache import CacheGateway
from gkc_ingest.config import IngestConfig
from gkc_ingest.exceptions import FetchError
from gkc_ingest.server import create_app
from gkc_ingest.storage import MemorySnapshotStorage
from tests.conftest import BAN_SHEET, URL, FakeFetcher


def _client(tmp_path, fetcher: FakeFetcher, index_html: str | None = None) -> TestClient:
    config = IngestConfig()
    config.server.supplemental_path = str(tmp_path / "supplemental.json")
    if index_html is not None:
        index_path = tmp_path / "index.html"
        index_path.write_text(index_html, encoding="utf-8")
        config.server.index_path = str(index_path)
    gateway = CacheGateway(fetcher, MemorySnapshotStorage(), URL, timedelta(hours=12))
    return TestClient(create_app(config, gateway))


@pytest.mark.integration
class TestDataEndpoint:
    """Tests for GET /data."""

    def test_returns_records(self, tmp_path):
        client = _client(tmp_path, FakeFetcher(BAN_SHEET))
        response = client.get("/data")
        assert response.status_code == 200
        body = response.json()
        assert len(body) == 3
        assert body[0] == {"Zip": "66101", "State": "KS", "County": "Wyandotte", "City": "Kansas City"}

    def test_second_request_uses_cache(self, tmp_path):
        fetcher = FakeFetcher(BAN_SHEET)
        client = _client(tmp_path, fetcher)
        client.get("/data")
        client.get("/data")
        assert len(fetcher.calls) == 1

    def test_fetch_failure_is_500(self, tmp_path):
        client = _client(tmp_path, FakeFetcher(error=FetchError("offline")))
        response = client.get("/data")
        assert response.status_code == 500
        assert response.text.startswith("Error: ")
        assert "offline" in response.text


@pytest.mark.integration
class TestSupplementalEndpoint:
    """Tests for GET /supplemental."""

    def test_passes_blob_through(self, tmp_path):
        blob = [{"title": "Info", "url": "https://example.test", "tags": ["ks"]}]
        (tmp_path / "supplemental.json").write_text(json.dumps(blob), encoding="utf-8")
        client = _client(tmp_path, FakeFetcher())
        response = client.get("/supplemental")
        assert response.status_code == 200
        assert response.json() == blob

    def test_missing_file_is_500(self, tmp_path):
        client = _client(tmp_path, FakeFetcher())
        response = client.get("/supplemental")
        assert response.status_code == 500
        assert "Error reading supplemental JSON file" in response.text

    def test_invalid_utf8_is_500(self, tmp_path):
        (tmp_path / "supplemental.json").write_bytes(b'["caf\xe9"]')
        client = _client(tmp_path, FakeFetcher())
        response = client.get("/supplemental")
        assert response.status_code == 500
        assert "Error reading supplemental JSON file" in response.text

    def test_invalid_json_is_500(self, tmp_path):
        (tmp_path / "supplemental.json").write_text("{", encoding="utf-8")
        client = _client(tmp_path, FakeFetcher())
        response = client.get("/supplemental")
        assert response.status_code == 500
        assert "Error parsing supplemental JSON" in response.text


@pytest.mark.integration
class TestMiscEndpoints:
    """Tests for / and /health."""

    def test_health(self, tmp_path):
        assert _client(tmp_path, FakeFetcher()).get("/health").json() == {"status": "ok"}

    def test_root_without_index(self, tmp_path):
        body = _client(tmp_path, FakeFetcher()).get("/").json()
        assert "/data" in body["endpoints"]

    def test_root_serves_index_html(self, tmp_path):
        client = _client(tmp_path, FakeFetcher(), index_html="<h1>Dashboard</h1>")
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Dashboard" in response.text
