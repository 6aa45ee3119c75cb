"""Tests for capture loading (cattle_text.sources)."""

import json

import pytest

from cattle_text.exceptions import AcquisitionError
from cattle_text.sources import load_capture, read_row_capture, read_text_capture


class TestTextCapture:
    def test_reads_text(self, tmp_path):
        path = tmp_path / "capture.txt"
        path.write_text("NSW\nBulls\n12\n", encoding="utf-8")
        assert read_text_capture(path) == "NSW\nBulls\n12\n"

    def test_missing_file(self, tmp_path):
        with pytest.raises(AcquisitionError, match="not found") as exc_info:
            read_text_capture(tmp_path / "missing.txt")
        assert exc_info.value.source.endswith("missing.txt")

    def test_blank_file(self, tmp_path):
        path = tmp_path / "capture.txt"
        path.write_text("  \n\n", encoding="utf-8")
        with pytest.raises(AcquisitionError, match="empty"):
            read_text_capture(path)


class TestRowCapture:
    def test_reads_rows_with_nulls(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text(json.dumps([["NSW", "Bulls", None, "12"]]), encoding="utf-8")
        assert read_row_capture(path) == [["NSW", "Bulls", None, "12"]]

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text("[[", encoding="utf-8")
        with pytest.raises(AcquisitionError, match="not an array"):
            read_row_capture(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text(json.dumps({"rows": []}), encoding="utf-8")
        with pytest.raises(AcquisitionError):
            read_row_capture(path)

    def test_no_rows(self, tmp_path):
        path = tmp_path / "rows.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(AcquisitionError, match="no rows"):
            read_row_capture(path)


class TestLoadCapture:
    def test_dispatch_json(self, tmp_path):
        path = tmp_path / "rows.JSON"
        path.write_text(json.dumps([["QLD"]]), encoding="utf-8")
        assert load_capture(path) == [["QLD"]]

    def test_dispatch_text(self, tmp_path):
        path = tmp_path / "capture.log"
        path.write_text("QLD\n", encoding="utf-8")
        assert load_capture(path) == "QLD\n"
