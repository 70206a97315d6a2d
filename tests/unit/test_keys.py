"""
Unit tests for column key resolution (gkc_ingest.transforms.keys).
"""

from __future__ import annotations

from gkc_ingest.transforms.keys import build_record, drop_reserved_keys, resolve_column_name


class TestResolveColumnName:
    """Tests for resolve_column_name()."""

    def test_uses_trimmed_header_cell(self):
        assert resolve_column_name(["State", " Zip "], 1) == "Zip"

    def test_blank_header_cell_falls_back(self):
        assert resolve_column_name(["", "Zip"], 0) == "column_0"
        assert resolve_column_name(["State", "   "], 1) == "column_1"

    def test_past_header_end_falls_back(self):
        assert resolve_column_name(["State", "Zip"], 5) == "column_5"

    def test_custom_prefix(self):
        assert resolve_column_name([], 2, prefix="col") == "col2"


class TestBuildRecord:
    """Tests for build_record()."""

    def test_positional_mapping_and_trim(self):
        record = build_record(["State", "Zip"], [" KS ", "66101 "])
        assert record == {"State": "KS", "Zip": "66101"}

    def test_short_row_has_fewer_keys(self):
        record = build_record(["State", "Zip", "County"], ["KS", "66101"])
        assert record == {"State": "KS", "Zip": "66101"}
        assert "County" not in record

    def test_long_row_gets_synthetic_keys(self):
        record = build_record(["State", "Zip"], ["KS", "66101", "extra", "more"])
        assert record == {"State": "KS", "Zip": "66101", "column_2": "extra", "column_3": "more"}

    def test_duplicate_header_names_last_wins(self):
        record = build_record(["Note", "Zip", "Note"], ["first", "1", "second"])
        assert record == {"Note": "second", "Zip": "1"}

    def test_key_order_follows_row(self):
        record = build_record(["", "Zip", "State"], ["x", "1", "KS"])
        assert list(record) == ["column_0", "Zip", "State"]


class TestDropReservedKeys:
    """Tests for drop_reserved_keys()."""

    def test_removes_present_keys(self):
        records = [{"Country": "US", "column_0": "x", "Zip": "1"}]
        assert drop_reserved_keys(records, ["Country", "column_0"]) == [{"Zip": "1"}]

    def test_absent_keys_are_fine(self):
        records = [{"Zip": "1"}, {}]
        assert drop_reserved_keys(records, ["Country"]) == [{"Zip": "1"}, {}]

    def test_accepts_generator_of_reserved(self):
        records = [{"a": "1", "b": "2"}]
        assert drop_reserved_keys(records, (k for k in ["a"])) == [{"b": "2"}]
