"""
Disk manager and cached factories for the configured storage strategies.

Maps disk names from settings to adapter instances and loads the path and
URL generator classes named in configuration.
"""

import importlib
import logging
import threading
from functools import lru_cache
from typing import Any, Dict, List, Optional

from media_archive.common.errors import DiskNotConfigured
from media_archive.config.settings import Settings, get_settings
from media_archive.storage.adapter import StorageAdapter
from media_archive.storage.filesystem import FilesystemStorage
from media_archive.storage.s3 import S3Storage

logger = logging.getLogger(__name__)


def build_adapter(name: str, config: Dict[str, Any]) -> StorageAdapter:
    """
    Create the adapter for one disk configuration entry.

    Raises:
        ValueError: If the driver is not supported
    """
    driver = config.get("driver", "local")

    if driver in ("local", "filesystem", "fs://"):
        return FilesystemStorage(
            root=config.get("root", f"./storage/{name}"),
            base_url=config.get("url"),
        )
    elif driver in ("s3", "s3://"):
        return S3Storage(
            bucket=config["bucket"],
            access_key_id=config.get("key", ""),
            secret_access_key=config.get("secret", ""),
            region=config.get("region", "us-east-1"),
            endpoint_url=config.get("endpoint"),
            url=config.get("url"),
            root=config.get("root", ""),
        )
    else:
        raise ValueError(
            f"Unsupported storage driver for disk '{name}': {driver}. "
            "Supported drivers: 'local', 's3'"
        )


class DiskManager:
    """
    Registry of named disks.

    Adapters are built on first use from the disks configuration; adapters
    registered explicitly take precedence.
    """

    def __init__(self, disks: Optional[Dict[str, Dict[str, Any]]] = None):
        self._config: Dict[str, Dict[str, Any]] = dict(disks or {})
        self._adapters: Dict[str, StorageAdapter] = {}
        self._lock = threading.Lock()

    def has(self, name: str) -> bool:
        return name in self._config or name in self._adapters

    def names(self) -> List[str]:
        return sorted(set(self._config) | set(self._adapters))

    def register(self, name: str, adapter: StorageAdapter) -> None:
        """Use ``adapter`` for disk ``name``, replacing any previous one."""
        with self._lock:
            self._adapters[name] = adapter

    def ensure(self, name: str) -> str:
        """
        Return ``name`` if it is a configured disk.

        Raises:
            DiskNotConfigured: If the disk is unknown
        """
        if not self.has(name):
            raise DiskNotConfigured(name)
        return name

    def disk(self, name: str) -> StorageAdapter:
        """
        Get the adapter for a disk.

        Raises:
            DiskNotConfigured: If the disk is unknown
        """
        with self._lock:
            adapter = self._adapters.get(name)
            if adapter is None:
                if name not in self._config:
                    raise DiskNotConfigured(name)
                adapter = build_adapter(name, self._config[name])
                self._adapters[name] = adapter
                logger.debug(f"Initialized disk '{name}' ({type(adapter).__name__})")
            return adapter


def import_string(dotted_path: str) -> Any:
    """Import a class from a 'package.module.ClassName' string."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ImportError(f"{dotted_path} is not a dotted import path")
    module = importlib.import_module(module_path)
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ImportError(f"Module '{module_path}' has no attribute '{attr}'") from e


def create_path_generator(settings: Settings):
    cls = import_string(settings.path_generator)
    return cls(prefix=settings.prefix)


def create_url_generator(settings: Settings, disks: DiskManager, path_generator):
    cls = import_string(settings.url_generator)
    return cls(disks=disks, path_generator=path_generator)


@lru_cache()
def get_disk_manager() -> DiskManager:
    """Get the disk manager built from settings."""
    return DiskManager(get_settings().disks)


@lru_cache()
def get_path_generator():
    """Get the configured path generator instance."""
    return create_path_generator(get_settings())


@lru_cache()
def get_url_generator():
    """Get the configured URL generator instance."""
    return create_url_generator(get_settings(), get_disk_manager(), get_path_generator())


def reset_storage() -> None:
    """Reset the cached disks and generators (useful for testing)."""
    get_disk_manager.cache_clear()
    get_path_generator.cache_clear()
    get_url_generator.cache_clear()
