#!/usr/bin/env python3
"""
Test upload validation and queue conversion.
"""
from __future__ import annotations
from pathlib import Path
import sys

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

import pytest

from core.config import config
from ui.services.upload_service import UploadService


class FakeUpload:
    """Minimal stand-in for streamlit's UploadedFile."""

    def __init__(self, name: str, content: bytes, type: str | None = None):
        self.name = name
        self.type = type
        self._content = content
        self.size = len(content)

    def getvalue(self) -> bytes:
        return self._content


def test_requires_at_least_one_file():
    ok, msg = UploadService.validate_files([])
    assert not ok
    assert "at least one" in msg


def test_rejects_unsupported_extension():
    ok, msg = UploadService.validate_files([FakeUpload("notes.docx", b"x")])
    assert not ok
    assert "notes.docx" in msg


def test_counts_already_queued_files(monkeypatch):
    monkeypatch.setattr(config, "max_files", 2)
    queued, _ = UploadService.process_uploads([FakeUpload("a.pdf", b"a"), FakeUpload("b.pdf", b"b")])

    ok, msg = UploadService.validate_files([FakeUpload("c.pdf", b"c")], queued)
    assert not ok
    assert "Too many files" in msg


def test_rejects_oversized_batch(monkeypatch):
    monkeypatch.setattr(config, "max_total_mb", 1)
    big = FakeUpload("big.pdf", b"0" * (1024 * 1024 + 1))

    ok, msg = UploadService.validate_files([big])
    assert not ok
    assert "exceeds" in msg


def test_accepts_pdf_and_images():
    ok, msg = UploadService.validate_files([FakeUpload("jan.pdf", b"%PDF"), FakeUpload("feb.JPG", b"jpg")])
    assert ok
    assert msg is None


@pytest.mark.parametrize(
    "name,declared,expected",
    [
        ("a.pdf", None, "application/pdf"),
        ("scan.jpeg", None, "image/jpeg"),
        ("page.webp", "", "image/webp"),
        ("a.pdf", "application/x-pdf", "application/x-pdf"),
    ],
)
def test_resolve_mime_type(name, declared, expected):
    assert UploadService.resolve_mime_type(name, declared) == expected


def test_to_file_data_strips_directories():
    data = UploadService.to_file_data(FakeUpload("nested/dir/march.pdf", b"%PDF-1.7", "application/pdf"))

    assert data.name == "march.pdf"
    assert data.mime_type == "application/pdf"
    assert data.content == b"%PDF-1.7"
    assert data.size_bytes == 8


def test_duplicates_skipped_by_content_and_name():
    queued, skipped = UploadService.process_uploads([FakeUpload("jan.pdf", b"one")])
    assert skipped == []

    new_entries, skipped = UploadService.process_uploads(
        [
            FakeUpload("copy-of-jan.pdf", b"one"),
            FakeUpload("jan.pdf", b"different"),
            FakeUpload("feb.pdf", b"two"),
            FakeUpload("feb-again.pdf", b"two"),
        ],
        queued,
    )

    assert [d.name for d in new_entries] == ["feb.pdf"]
    assert skipped == ["copy-of-jan.pdf", "jan.pdf", "feb-again.pdf"]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
