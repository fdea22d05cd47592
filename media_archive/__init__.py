"""
media_archive: named media collections for SQLAlchemy models.

Stores files on pluggable disks (local filesystem, S3), records them in a
single ``media`` table and generates paths and URLs for them.
"""

from media_archive.archive import Archive, get_archive, reset_archive
from media_archive.catalog.models import Media
from media_archive.catalog.queries import MediaQuery
from media_archive.common.errors import (
    ArchiveError,
    CuratorNotAllowed,
    DiskNotConfigured,
    FileDoesNotExist,
    FileTooLarge,
    UnsafeFileName,
)
from media_archive.curator import Curator, HasArchive
from media_archive.ingest.adder import MediaAdder
from media_archive.registry import MediaCollection, MediaCollectionRegistry
from media_archive.storage.adapter import BlobWriteError, StorageError

__version__ = "0.1.0"

__all__ = [
    "Archive",
    "get_archive",
    "reset_archive",
    "Media",
    "MediaQuery",
    "ArchiveError",
    "CuratorNotAllowed",
    "DiskNotConfigured",
    "FileDoesNotExist",
    "FileTooLarge",
    "UnsafeFileName",
    "Curator",
    "HasArchive",
    "MediaAdder",
    "MediaCollection",
    "MediaCollectionRegistry",
    "BlobWriteError",
    "StorageError",
]
