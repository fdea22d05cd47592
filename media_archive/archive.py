"""
Entry point tying settings, collections, disks and the database together.

    archive = Archive()
    archive.collection("avatar").single_file()
    media = archive.add("/tmp/me.png").to_curator(user).to_collection("avatar").store()
"""

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Generator, Optional

from sqlalchemy.orm import Session, sessionmaker

from media_archive.catalog.database import get_session_factory, unit_of_work
from media_archive.catalog.models import Media
from media_archive.catalog.queries import MediaQuery
from media_archive.config.settings import Settings, get_settings
from media_archive.ingest.adder import MediaAdder
from media_archive.registry.collection import MediaCollection
from media_archive.registry.registry import MediaCollectionRegistry, get_collection_registry
from media_archive.storage.manager import (
    DiskManager,
    create_path_generator,
    create_url_generator,
    get_disk_manager,
    get_path_generator,
    get_url_generator,
    reset_storage,
)
from media_archive.storage.media_files import MediaFilesystem
from media_archive.storage.paths import PathGenerator
from media_archive.storage.urls import UrlGenerator

logger = logging.getLogger(__name__)


class Archive:
    """
    Facade over one archive configuration.

    Every collaborator can be injected; missing ones are built from
    ``settings``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        registry: Optional[MediaCollectionRegistry] = None,
        disks: Optional[DiskManager] = None,
        path_generator: Optional[PathGenerator] = None,
        url_generator: Optional[UrlGenerator] = None,
        session_factory: Optional[sessionmaker] = None,
    ):
        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else get_collection_registry()
        self.disks = disks or DiskManager(self.settings.disks)
        self.path_generator = path_generator or create_path_generator(self.settings)
        self.url_generator = url_generator or create_url_generator(
            self.settings, self.disks, self.path_generator)
        self.session_factory = session_factory
        self.files = MediaFilesystem(self.disks, self.path_generator)

    def _sessions(self) -> sessionmaker:
        return self.session_factory or get_session_factory()

    def collection(self, name: str) -> MediaCollection:
        """Define (or redefine) a collection."""
        return self.registry.define(name)

    def add(self, file: Any) -> MediaAdder:
        """Start adding ``file``; finish with ``.store()``."""
        adder = MediaAdder(
            settings=self.settings,
            registry=self.registry,
            disks=self.disks,
            files=self.files,
            session_factory=self._sessions(),
        )
        return adder.set_file(file)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Unit of work whose deleted media also lose their blobs on commit."""
        with unit_of_work(self._sessions(), self.files) as db:
            yield db

    def query(self, db: Session) -> MediaQuery:
        return MediaQuery(db)

    def delete(self, media: Media) -> bool:
        """
        Delete one media row and, after commit, its blob.

        Deleting media that is already gone only makes sure the blob is
        gone too, and still reports success.
        """
        with self.session() as db:
            row = db.get(Media, media.id)
            if row is not None:
                db.delete(row)
        if row is None:
            logger.info(f"Media {media.id} already deleted")
            return self.files.delete(media)
        logger.info(f"Deleted media {media.id}")
        return True

    def get_path(self, media: Media) -> str:
        return self.path_generator.get_path(media)

    def get_url(self, media: Media) -> str:
        return self.url_generator.get_url(media)

    def get_temporary_url(self, media: Media, expiration, options=None) -> str:
        return self.url_generator.get_temporary_url(media, expiration, options or {})


@lru_cache()
def get_archive() -> Archive:
    """
    Archive built from settings and the process-wide collection registry.

    Shares the cached disks and generators, so ``media.get_url()`` and
    ``get_archive().get_url(media)`` always agree.
    """
    return Archive(
        disks=get_disk_manager(),
        path_generator=get_path_generator(),
        url_generator=get_url_generator(),
    )


def reset_archive() -> None:
    """Reset the cached archive and its storage (useful for testing)."""
    get_archive.cache_clear()
    reset_storage()
