"""URL generators for stored media."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional

from media_archive.storage.paths import PathGenerator

if TYPE_CHECKING:
    from media_archive.catalog.models import Media
    from media_archive.storage.manager import DiskManager


class UrlGenerator(ABC):

    @abstractmethod
    def get_url(self, media: "Media") -> str:
        pass

    @abstractmethod
    def get_temporary_url(
        self,
        media: "Media",
        expiration: datetime,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        pass


class DefaultUrlGenerator(UrlGenerator):
    """
    Asks the media's disk for a URL of the generated path.

    Disk errors (e.g. temporary URLs on a local disk) are not caught.
    """

    def __init__(self, disks: "DiskManager", path_generator: PathGenerator):
        self.disks = disks
        self.path_generator = path_generator

    def get_url(self, media: "Media") -> str:
        return self.disks.disk(media.disk).url(self.path_generator.get_path(media))

    def get_temporary_url(
        self,
        media: "Media",
        expiration: datetime,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        return self.disks.disk(media.disk).temporary_url(
            self.path_generator.get_path(media),
            expiration,
            options or {},
        )
