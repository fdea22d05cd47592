"""
Moves media bytes between source files and disks.
"""

import logging
from typing import TYPE_CHECKING, Tuple

from media_archive.common import metrics
from media_archive.storage.adapter import BlobWriteError, StorageError
from media_archive.storage.paths import PathGenerator

if TYPE_CHECKING:
    from media_archive.catalog.models import Media
    from media_archive.storage.manager import DiskManager

logger = logging.getLogger(__name__)


class MediaFilesystem:
    """
    Writes and removes the blob behind a media row.

    The location is always recomputed from the row with the path generator.
    """

    def __init__(self, disks: "DiskManager", path_generator: PathGenerator):
        self.disks = disks
        self.path_generator = path_generator

    def locate(self, media: "Media") -> Tuple[str, str]:
        """(disk, path) of the blob behind ``media``."""
        return media.disk, self.path_generator.get_path(media)

    def add(self, path_to_file: str, media: "Media") -> bool:
        """
        Copy a local file to the media's disk.

        Raises:
            BlobWriteError: If the disk rejects the write
        """
        disk, destination = self.locate(media)
        adapter = self.disks.disk(disk)
        try:
            with open(path_to_file, "rb") as stream:
                written = adapter.put(destination, stream)
        except OSError as e:
            metrics.blob_failures_total.labels(operation="put", disk=disk).inc()
            raise BlobWriteError(f"Failed to read {path_to_file}: {e}") from e
        except StorageError:
            metrics.blob_failures_total.labels(operation="put", disk=disk).inc()
            raise

        if not written:
            metrics.blob_failures_total.labels(operation="put", disk=disk).inc()
            raise BlobWriteError(f"Disk '{disk}' refused to write {destination}")

        metrics.media_bytes_stored_total.labels(disk=disk).inc(media.size_bytes or 0)
        logger.debug(f"Wrote media {media.id} to {disk}:{destination}")
        return True

    def remove(self, disk: str, path: str) -> bool:
        try:
            removed = self.disks.disk(disk).delete(path)
        except StorageError:
            metrics.blob_failures_total.labels(operation="delete", disk=disk).inc()
            raise
        metrics.media_deleted_total.labels(disk=disk).inc()
        return removed

    def delete(self, media: "Media") -> bool:
        """Remove the blob behind ``media``; a missing blob counts as removed."""
        disk, path = self.locate(media)
        return self.remove(disk, path)
