"""
Filesystem disk backend.

Stores files below a root directory using the relative path as-is, e.g.
``media/12/avatar.png`` lands in ``{root}/media/12/avatar.png``.
"""

import shutil
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional
from urllib.parse import quote

from media_archive.storage.adapter import BlobWriteError, StorageAdapter, StorageError


class FilesystemStorage(StorageAdapter):
    """
    Filesystem-based disk implementation.

    Files are addressed relative to ``root``; public URLs are built by
    joining ``base_url`` with the same relative path.
    """

    def __init__(self, root: str = "./storage/app", base_url: Optional[str] = None):
        """
        Initialize filesystem storage.

        Args:
            root: Root directory of the disk
            base_url: URL prefix the root is served under (None disables url())
        """
        self.base_path = Path(root).resolve()
        self.base_url = base_url
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        """
        Convert a relative disk path to an absolute filesystem path.

        Raises:
            StorageError: If the path escapes the disk root
        """
        target = (self.base_path / path.lstrip("/")).resolve()
        if target != self.base_path and self.base_path not in target.parents:
            raise StorageError(f"Path escapes disk root: {path}")
        return target

    def put(self, path: str, stream: BinaryIO) -> bool:
        """Write a stream to the disk; a failed write leaves no partial file."""
        target_path = self._resolve(path)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            with open(target_path, "wb") as f:
                shutil.copyfileobj(stream, f)
            return True
        except Exception as e:
            target_path.unlink(missing_ok=True)
            raise BlobWriteError(f"Failed to write file {path}: {e}") from e

    def delete(self, path: str) -> bool:
        """Delete a file and prune the directories it leaves empty."""
        try:
            target = self._resolve(path)
            if not target.exists():
                return True

            target.unlink()

            parent = target.parent
            while parent != self.base_path:
                try:
                    if not any(parent.iterdir()):
                        parent.rmdir()
                        parent = parent.parent
                    else:
                        break
                except OSError:
                    # Directory not empty or already removed
                    break
            return True
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete file: {e}") from e

    def exists(self, path: str) -> bool:
        """Check if a file exists."""
        target = self._resolve(path)
        return target.exists() and target.is_file()

    def retrieve(self, path: str) -> BinaryIO:
        """Retrieve a file."""
        try:
            target = self._resolve(path)
            if not target.is_file():
                raise StorageError(f"File not found: {path}")

            with open(target, "rb") as f:
                data = f.read()
            return BytesIO(data)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to retrieve file: {e}") from e

    def url(self, path: str) -> str:
        if self.base_url is None:
            raise StorageError("This disk is not configured with a public URL.")
        return f"{self.base_url.rstrip('/')}/{quote(path.lstrip('/'))}"

    def temporary_url(
        self,
        path: str,
        expiration: datetime,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        raise StorageError("This driver does not support creating temporary URLs.")

    def list_files(self, prefix: str = "") -> list[str]:
        """
        List all files below a prefix.

        Args:
            prefix: Relative directory to search (e.g., 'media/12')

        Returns:
            Relative paths of all files found
        """
        try:
            prefix_path = self._resolve(prefix) if prefix else self.base_path
            if not prefix_path.exists():
                return []

            return sorted(
                path.relative_to(self.base_path).as_posix()
                for path in prefix_path.rglob("*")
                if path.is_file()
            )
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to list files: {e}") from e
