"""
Path generators: where a media file lives on its disk.

A path must be derivable from the stored row alone, so deletion can find the
blob again without a lookup table.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from media_archive.catalog.models import Media


class PathGenerator(ABC):
    """Maps a media row to its relative path on the disk."""

    @abstractmethod
    def get_path(self, media: "Media") -> str:
        pass


class DefaultPathGenerator(PathGenerator):
    """
    ``{prefix}/{id}/{file_name}``, or ``{id}/{file_name}`` without a prefix.

    Leading and trailing slashes of the prefix are trimmed, inner segments
    (``a/b``) are kept.
    """

    def __init__(self, prefix: Optional[str] = ""):
        self.prefix = (prefix or "").strip("/")

    def get_path(self, media: "Media") -> str:
        return f"{self.get_base_path(media)}/{media.file_name}"

    def get_base_path(self, media: "Media") -> str:
        if media.id is None:
            raise ValueError("Media must be persisted before its path can be generated")
        if self.prefix:
            return f"{self.prefix}/{media.id}"
        return str(media.id)
