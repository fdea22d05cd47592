"""
Disk abstraction and media file placement.

Provides filesystem and S3 disk backends, the disk manager, and the
pluggable path and URL generators.
"""

from media_archive.storage.adapter import BlobWriteError, StorageAdapter, StorageError
from media_archive.storage.filesystem import FilesystemStorage
from media_archive.storage.s3 import S3Storage
from media_archive.storage.manager import (
    DiskManager,
    get_disk_manager,
    get_path_generator,
    get_url_generator,
    reset_storage,
)
from media_archive.storage.media_files import MediaFilesystem
from media_archive.storage.paths import DefaultPathGenerator, PathGenerator
from media_archive.storage.urls import DefaultUrlGenerator, UrlGenerator

__all__ = [
    "BlobWriteError",
    "StorageAdapter",
    "StorageError",
    "FilesystemStorage",
    "S3Storage",
    "DiskManager",
    "get_disk_manager",
    "get_path_generator",
    "get_url_generator",
    "reset_storage",
    "MediaFilesystem",
    "DefaultPathGenerator",
    "PathGenerator",
    "DefaultUrlGenerator",
    "UrlGenerator",
]
