"""Tests for storing uploaded PDFs under their timestamped names."""

from __future__ import annotations

import os

import pytest

from aula.document_utils import MATCH_SUFFIX, resolve
from aula.errors import UploadError
from aula.uploads import count_pdf_pages, store_upload, upload_name


class TestUploadName:
    def test_prefixes_timestamp(self):
        assert upload_name("report.pdf", now_ms=1700000000000) == "1700000000000_report.pdf"

    def test_drops_directories(self):
        assert upload_name("/home/ada/report.pdf", now_ms=1) == "1_report.pdf"


class TestStoreUpload:
    def test_copies_into_kind_folder(self, tmp_path, pdf_factory):
        source = pdf_factory("incoming/report.pdf", pages=3)
        base = tmp_path / "content"
        stored = store_upload(source, "exercises", base_dir=str(base), now_ms=1700000000000)
        assert stored == "exercises/1700000000000_report.pdf"
        assert os.path.isfile(base / "exercises" / "1700000000000_report.pdf")

    def test_stored_file_is_found_from_original_name(self, tmp_path, pdf_factory):
        source = pdf_factory("incoming/report.pdf")
        base = tmp_path / "content"
        store_upload(source, "courses", base_dir=str(base), now_ms=1700000000000)
        result = resolve("old/location/report.pdf", str(base / "courses"))
        assert result.matched_by == MATCH_SUFFIX
        assert result.path.endswith("1700000000000_report.pdf")

    def test_rejects_invalid_pdf(self, tmp_path):
        bogus = tmp_path / "notes.pdf"
        bogus.write_text("plain text")
        with pytest.raises(UploadError):
            store_upload(str(bogus), "courses", base_dir=str(tmp_path / "content"))
        assert not (tmp_path / "content" / "courses").exists()

    def test_unknown_kind(self, pdf_factory):
        with pytest.raises(ValueError):
            store_upload(pdf_factory("a.pdf"), "videos")


class TestCountPages:
    def test_counts(self, pdf_factory):
        assert count_pdf_pages(pdf_factory("a.pdf", pages=4)) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(UploadError):
            count_pdf_pages(str(tmp_path / "missing.pdf"))
