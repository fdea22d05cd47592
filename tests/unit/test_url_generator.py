"""
Unit tests for URL generation.
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from media_archive.catalog.models import Media
from media_archive.storage.adapter import StorageError
from media_archive.storage.manager import DiskManager
from media_archive.storage.paths import DefaultPathGenerator
from media_archive.storage.urls import DefaultUrlGenerator


@pytest.fixture
def media():
    return Media(id=5, name="a", file_name="a b.png", disk="local",
                 mime_type="image/png", size_bytes=1)


@pytest.fixture
def generator(tmp_path):
    disks = DiskManager({
        "local": {"driver": "local", "root": str(tmp_path), "url": "https://example.com/storage/"},
    })
    return DefaultUrlGenerator(disks, DefaultPathGenerator("media"))


class TestDefaultUrlGenerator:

    def test_get_url(self, generator, media):
        assert generator.get_url(media) == "https://example.com/storage/media/5/a%20b.png"

    def test_temporary_url_on_local_disk_fails(self, generator, media):
        """Local disks cannot sign URLs; the error is not swallowed."""
        with pytest.raises(StorageError):
            generator.get_temporary_url(media, datetime.utcnow() + timedelta(minutes=5))

    def test_temporary_url_delegates_to_disk(self, generator, media):
        adapter = MagicMock()
        adapter.temporary_url.return_value = "https://signed"
        generator.disks.register("local", adapter)
        expiration = datetime.utcnow() + timedelta(minutes=5)

        assert generator.get_temporary_url(media, expiration) == "https://signed"
        adapter.temporary_url.assert_called_once_with("media/5/a b.png", expiration, {})

    def test_options_forwarded(self, generator, media):
        adapter = MagicMock()
        generator.disks.register("local", adapter)
        expiration = datetime.utcnow() + timedelta(minutes=5)

        generator.get_temporary_url(media, expiration, {"ResponseContentType": "image/png"})

        assert adapter.temporary_url.call_args[0][2] == {"ResponseContentType": "image/png"}
