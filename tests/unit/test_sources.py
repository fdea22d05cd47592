"""
Unit tests for resolving intake inputs into local files.
"""

from io import BytesIO
from pathlib import Path

import pytest
from fastapi import UploadFile

from media_archive.ingest.sources import SourceFile, resolve_source


class TestResolveSource:
    """Tests for resolve_source."""

    def test_string_path(self, tmp_path):
        path = tmp_path / "photo.png"

        source = resolve_source(str(path))

        assert source.path == path
        assert source.file_name == "photo.png"
        assert source.media_name == "photo"
        assert source.temporary is False

    def test_path_object(self, tmp_path):
        source = resolve_source(tmp_path / "report.final.pdf")

        assert source.file_name == "report.final.pdf"
        assert source.media_name == "report.final"

    def test_open_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        with open(path, "rb") as f:
            source = resolve_source(f)

        assert source.path == path
        assert source.temporary is False

    def test_upload_is_spooled(self):
        upload = UploadFile(filename="avatar.png", file=BytesIO(b"\x89PNG\r\n\x1a\nrest"))

        source = resolve_source(upload)
        try:
            assert source.temporary is True
            assert source.file_name == "avatar.png"
            assert source.path.suffix == ".png"
            assert source.path.read_bytes() == b"\x89PNG\r\n\x1a\nrest"
        finally:
            source.discard()

        assert not source.path.exists()

    def test_upload_without_filename(self):
        source = resolve_source(UploadFile(file=BytesIO(b"data")))
        try:
            assert source.file_name == "upload"
        finally:
            source.discard()

    def test_unsupported_input(self):
        with pytest.raises(TypeError, match="Unsupported file type"):
            resolve_source(12345)


class TestSourceFile:

    def test_discard_keeps_caller_files(self, tmp_path):
        """Only spooled copies are removed."""
        path = tmp_path / "keep.txt"
        path.write_text("x")

        SourceFile(path, "keep.txt").discard()

        assert path.exists()

    def test_discard_missing_temporary_file(self, tmp_path):
        SourceFile(Path(tmp_path / "gone.tmp"), "gone.tmp", temporary=True).discard()
