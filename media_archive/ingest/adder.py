"""
Media intake pipeline.

``MediaAdder`` collects the configuration for one file and ``store()`` turns
it into a ``Media`` row plus a blob on disk:

1. validate the source (exists, size limit)
2. sanitize the stored file name
3. resolve collection, curator restriction and disk
4. in one unit of work: drop the previous media of a single-file
   collection, insert the row, write the blob, commit
5. delete the source unless it should be preserved

A failed write or commit rolls the row back and removes any blob written.
"""

import copy
import logging
import time
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.orm import Session, sessionmaker

from media_archive.catalog.database import unit_of_work
from media_archive.catalog.events import record_written
from media_archive.catalog.models import Media
from media_archive.common import metrics
from media_archive.common.errors import CuratorNotAllowed
from media_archive.common.logging_config import PerformanceTracker
from media_archive.config.settings import Settings
from media_archive.curator import Curator
from media_archive.ingest.sources import SourceFile, resolve_source
from media_archive.ingest.validator import check_file, detect_mime_type, sanitize_file_name
from media_archive.registry.collection import MediaCollection
from media_archive.registry.registry import MediaCollectionRegistry
from media_archive.storage.adapter import StorageError
from media_archive.storage.manager import DiskManager
from media_archive.storage.media_files import MediaFilesystem

logger = logging.getLogger(__name__)


class MediaAdder:
    """
    Builder for adding one file to the archive.

    Every configuration method returns a new adder, so a partially
    configured adder can be reused as a template:

        media = (
            archive.add("/tmp/upload.png")
            .to_curator(user)
            .to_collection("avatar")
            .with_properties({"alt": "Profile picture"})
            .store()
        )
    """

    def __init__(
        self,
        settings: Settings,
        registry: MediaCollectionRegistry,
        disks: DiskManager,
        files: MediaFilesystem,
        session_factory: Optional[sessionmaker] = None,
    ):
        self.settings = settings
        self.registry = registry
        self.disks = disks
        self.files = files
        self.session_factory = session_factory

        self._source: Optional[SourceFile] = None
        self._file_name = ""
        self._media_name = ""
        self._collection = "default"
        self._disk: Optional[str] = None
        self._custom_properties: Dict[str, Any] = {}
        self._preserve_original = False
        self._curator: Optional[Curator] = None
        self._order: Optional[int] = None

    def _clone(self) -> "MediaAdder":
        clone = copy.copy(self)
        clone._custom_properties = dict(self._custom_properties)
        return clone

    # ==================== Configuration ====================

    def set_file(self, file: Any) -> "MediaAdder":
        """Set the source: a path, an ``UploadFile`` or an open file."""
        clone = self._clone()
        clone._source = resolve_source(file)
        clone._file_name = clone._source.file_name
        clone._media_name = clone._source.media_name
        return clone

    def to_curator(self, curator: Curator) -> "MediaAdder":
        clone = self._clone()
        clone._curator = curator
        return clone

    def to_collection(self, collection: str) -> "MediaAdder":
        clone = self._clone()
        clone._collection = collection
        return clone

    def to_disk(self, disk: str) -> "MediaAdder":
        """
        Store on ``disk`` instead of the collection or default disk.

        Raises:
            DiskNotConfigured: Immediately, if the disk is not configured
        """
        self.disks.ensure(disk)
        clone = self._clone()
        clone._disk = disk
        return clone

    def with_file_name(self, file_name: str) -> "MediaAdder":
        clone = self._clone()
        clone._file_name = file_name
        return clone

    def with_name(self, name: str) -> "MediaAdder":
        clone = self._clone()
        clone._media_name = name
        return clone

    def with_properties(self, custom_properties: Dict[str, Any]) -> "MediaAdder":
        clone = self._clone()
        clone._custom_properties = dict(custom_properties)
        return clone

    def with_order(self, order: Optional[int]) -> "MediaAdder":
        clone = self._clone()
        clone._order = order
        return clone

    def preserving_original(self, preserve: bool = True) -> "MediaAdder":
        clone = self._clone()
        clone._preserve_original = preserve
        return clone

    # ==================== Store ====================

    def store(self) -> Media:
        """
        Validate, persist and write the configured file.

        Returns:
            The committed ``Media`` row

        Raises:
            FileDoesNotExist: If the source is missing
            FileTooLarge: If the source exceeds ``max_file_size``
            UnsafeFileName: If the file name has a blocked extension
            CuratorNotAllowed: If the collection restricts its curators
            DiskNotConfigured: If the resolved disk is not configured
            StorageError: If the blob could not be written
        """
        if self._source is None:
            raise ValueError("No file set; call set_file() first")

        start_time = time.perf_counter()
        status = "failure"
        try:
            with PerformanceTracker(
                "media_store", logger, collection=self._collection, file_name=self._file_name
            ):
                media = self._store()
            status = "success"
            return media
        finally:
            metrics.media_stored_total.labels(
                collection=self._collection, status=status).inc()
            metrics.store_duration_seconds.labels(
                collection=self._collection).observe(time.perf_counter() - start_time)
            self._source.discard()

    def _store(self) -> Media:
        source_path = self._source.path

        # Pure validation: nothing below may be touched if these fail
        size = check_file(source_path, self.settings.max_file_size)
        file_name = sanitize_file_name(self._file_name)
        collection = self.registry.get(self._collection)
        self._check_curator(collection)
        disk = self._resolve_disk(collection)
        mime_type = detect_mime_type(source_path)

        written: Optional[Tuple[str, str]] = None
        try:
            with unit_of_work(self.session_factory, self.files) as db:
                if collection is not None and collection.is_single_file and self._curator is not None:
                    self._clear_single_file_collection(db)

                media = Media(
                    name=self._media_name,
                    file_name=file_name,
                    collection=self._collection,
                    disk=disk,
                    mime_type=mime_type,
                    size_bytes=size,
                    custom_properties=dict(self._custom_properties),
                    order_column=self._order,
                )
                if self._curator is not None:
                    media.attach_to_curator(self._curator)

                db.add(media)
                db.flush()

                # Set before writing so a partial write is compensated too
                written = self.files.locate(media)
                self.files.add(str(source_path), media)
                record_written(db, written)
        except Exception:
            if written is not None:
                self._discard_blob(*written)
            raise

        logger.info(
            f"Stored media {media.id} in collection '{media.collection}' "
            f"on disk '{media.disk}' ({size} bytes)"
        )

        if not self._preserve_original and not self._source.temporary and source_path.is_file():
            source_path.unlink()

        return media

    def _check_curator(self, collection: Optional[MediaCollection]) -> None:
        if collection is None or collection.curator_type is None:
            return
        if self._curator is None:
            if not collection.allows_anonymous:
                raise CuratorNotAllowed(collection.name, collection.curator_type, None)
            return
        actual = self._curator.get_curator_type()
        if actual != collection.curator_type:
            raise CuratorNotAllowed(collection.name, collection.curator_type, actual)

    def _resolve_disk(self, collection: Optional[MediaCollection]) -> str:
        """Explicit disk, then collection disk, then the configured archive disk."""
        disk = self._disk or (collection.disk if collection else None) or self.settings.archive_disk
        return self.disks.ensure(disk)

    def _clear_single_file_collection(self, db: Session) -> None:
        # FOR UPDATE serializes concurrent replacements on databases that support it
        previous = (
            db.query(Media)
            .filter(
                Media.curator_id == self._curator.get_curator_id(),
                Media.curator_type == self._curator.get_curator_type(),
                Media.collection == self._collection,
            )
            .with_for_update()
            .all()
        )
        for media in previous:
            db.delete(media)
        if previous:
            db.flush()
            metrics.media_replaced_total.labels(collection=self._collection).inc(len(previous))
            logger.info(
                f"Replacing {len(previous)} media in single-file collection '{self._collection}'"
            )

    def _discard_blob(self, disk: str, path: str) -> None:
        try:
            self.files.remove(disk, path)
        except StorageError as e:
            logger.error(f"Failed to remove blob {disk}:{path} of rolled back media: {e}")
