"""
Unit tests for the supplemental pass-through (gkc_ingest.supplemental).
"""

from __future__ import annotations

import json

import pytest

from gkc_ingest.exceptions import SupplementalError
from gkc_ingest.supplemental import load_supplemental


class TestLoadSupplemental:
    """Tests for load_supplemental()."""

    def test_returns_blob_untouched(self, tmp_path):
        blob = [
            {"title": "Local news", "url": "https://example.test/a", "tags": ["kansas"], "preview": "📰"},
            {"unexpected": {"nested": True}},
        ]
        path = tmp_path / "supplemental.json"
        path.write_text(json.dumps(blob), encoding="utf-8")
        assert load_supplemental(path) == blob

    def test_missing_file(self, tmp_path):
        with pytest.raises(SupplementalError, match="Error reading"):
            load_supplemental(tmp_path / "missing.json")

    def test_invalid_utf8_is_a_read_error(self, tmp_path):
        path = tmp_path / "supplemental.json"
        path.write_bytes(b'["caf\xe9"]')
        with pytest.raises(SupplementalError, match="Error reading"):
            load_supplemental(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "supplemental.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SupplementalError, match="Error parsing"):
            load_supplemental(path)
