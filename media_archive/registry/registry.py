"""
Collection registry.

Maps collection names to their ``MediaCollection`` definitions. Intended to
be filled once at startup by a single writer; the lock only keeps individual
calls consistent and is not meant for coordinating requests.
"""

import threading
from typing import Dict, Optional

from media_archive.registry.collection import MediaCollection


class MediaCollectionRegistry:

    def __init__(self):
        self._collections: Dict[str, MediaCollection] = {}
        self._lock = threading.Lock()

    def define(self, name: str) -> MediaCollection:
        """
        Create a fresh definition for ``name``.

        An existing definition with the same name is replaced, not merged.
        """
        collection = MediaCollection(name)
        with self._lock:
            self._collections[name] = collection
        return collection

    def get(self, name: str) -> Optional[MediaCollection]:
        with self._lock:
            return self._collections.get(name)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._collections

    def all(self) -> Dict[str, MediaCollection]:
        """Snapshot of the current definitions."""
        with self._lock:
            return dict(self._collections)

    def clear(self) -> None:
        with self._lock:
            self._collections = {}


_default_registry = MediaCollectionRegistry()


def get_collection_registry() -> MediaCollectionRegistry:
    """Process-wide registry used when none is injected."""
    return _default_registry
