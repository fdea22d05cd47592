"""Media collection definitions and their registry."""

from media_archive.registry.collection import MediaCollection
from media_archive.registry.registry import MediaCollectionRegistry, get_collection_registry

__all__ = ["MediaCollection", "MediaCollectionRegistry", "get_collection_registry"]
